"""
storefront_api.startup

Process startup orchestration.

Responsibilities:
- Drive the ordered startup stages (connect, seed, vector sync, mount, listen).
- Map fatal startup failures to the process exit code.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# `startup.orchestrator` is the composition root for a running process;
# `api.app` only builds the bare FastAPI instance.
