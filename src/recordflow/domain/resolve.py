"""Resolve the authoritative current state of a triggered record."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from recordflow.domain.delta import apply_delta
from recordflow.domain.errors import UnresolvableRecordError

if TYPE_CHECKING:
    from recordflow.domain.model import EntityRef, Record, Snapshot
    from recordflow.domain.ports import StoreReader

log = getLogger(__name__)


@dataclass(slots=True)
class RecordResolver:
    """Determine "what the record looks like now" for one execution.

    Strategy, in order:
    1) A pre-image snapshot is the committed state before the trigger; merge
       the target onto a copy of it.
    2) Without a snapshot, read every field from the store using the identity
       hint (or the target's own identity) and merge the target onto that.
    3) Without either, the record cannot be resolved.

    The store read is a single attempt; its failures propagate unchanged.
    """

    store: StoreReader

    def resolve(
        self,
        target: Record | None,
        *,
        snapshot: Snapshot | None = None,
        identity_hint: EntityRef | None = None,
    ) -> Record:
        if snapshot is not None:
            log.debug("Resolving %s(%s) from snapshot", snapshot.entity_type, snapshot.id)
            base = snapshot.to_record()
        else:
            ref = identity_hint or (target.to_ref() if target is not None else None)
            if ref is None:
                raise UnresolvableRecordError(
                    "Unable to determine the primary record: no snapshot and no identity."
                )
            log.debug("Resolving %s(%s) from store", ref.entity_type, ref.id)
            base = self.store.read(ref.entity_type, ref.id)

        return apply_delta(base, target)
