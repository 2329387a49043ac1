"""
storefront_api.errors

Startup error taxonomy.

Responsibilities:
- Separate fatal startup failures (process exits with code 1) from
  recoverable ones (logged, startup continues).
"""

from __future__ import annotations


class StartupError(Exception):
    pass


class FatalStartupError(StartupError):
    """Halts startup; the entry point maps it to exit code 1."""


class ConfigurationError(FatalStartupError):
    pass


class DatabaseConnectionError(FatalStartupError):
    pass


class ListenError(FatalStartupError):
    pass


class SeedError(StartupError):
    pass


class VectorSyncError(StartupError):
    pass


class VectorSyncConfigError(VectorSyncError):
    pass


# --- Module Notes -----------------------------------------------------------
# Only `FatalStartupError` subclasses escape `StartupOrchestrator.run`; seed and
# sync failures are caught at their stage boundary.
