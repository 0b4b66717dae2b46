"""Configuration error definitions."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Raised when a configuration value is present but unusable."""


class MissingConfigurationError(ConfigurationError):
    """Raised when required environment variables are absent or blank."""


class ConfigurationNotInitializedError(ConfigurationError):
    """Raised when a pipeline reads its step configuration before it was parsed."""
