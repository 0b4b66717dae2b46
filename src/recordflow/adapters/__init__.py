"""Adapters connecting the reconciliation core to stores and hosts."""
