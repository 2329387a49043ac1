"""
storefront_api.__main__

Entrypoint for running the backend via `python -m storefront_api` (or the
`storefront-api` console script).

Responsibilities:
- Load settings.
- Hand control to the startup orchestrator and exit with its code.
"""

from __future__ import annotations

import asyncio
import sys

from pydantic import ValidationError

from storefront_api.observability.logging import configure_logging, get_logger
from storefront_api.settings import Settings, get_settings
from storefront_api.startup.orchestrator import StartupOrchestrator, launch

log = get_logger(__name__)


def main() -> None:
    # Bootstrap logging so a settings failure is still logged as JSON.
    configure_logging(service_name=Settings.model_fields["service_name"].default, level="INFO")
    try:
        settings = get_settings()
    except ValidationError as e:
        log.error("startup_failed", error=str(e), reason="ConfigurationError")
        sys.exit(1)

    configure_logging(service_name=settings.service_name, level=settings.log_level)
    sys.exit(asyncio.run(launch(StartupOrchestrator(settings=settings))))


if __name__ == "__main__":
    main()


# --- Module Notes -----------------------------------------------------------
# For production this is usually run under a process manager that restarts on
# exit code 1.
