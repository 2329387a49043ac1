"""
storefront_api.startup.listener

Network listener for the final startup stage.

Responsibilities:
- Bind the listening socket up front so a bind failure surfaces as a
  `ListenError` instead of uvicorn's own `sys.exit`.
- Serve the app with uvicorn on the pre-bound socket.
- Turn SIGINT/SIGTERM into a graceful stop that returns to the caller, so
  the orchestrator can release the database handle and exit 0.
"""

from __future__ import annotations

import contextlib
import signal
import socket
import threading
from collections.abc import Iterator

import uvicorn
from fastapi import FastAPI
from uvicorn.server import HANDLED_SIGNALS

from storefront_api.errors import ListenError


class _Server(uvicorn.Server):
    @contextlib.contextmanager
    def capture_signals(self) -> Iterator[None]:
        # Same handler swap as uvicorn, minus re-raising the captured signal
        # after serve() returns: shutdown continues in the orchestrator.
        if threading.current_thread() is not threading.main_thread():
            yield
            return
        original = {sig: signal.signal(sig, self.handle_exit) for sig in HANDLED_SIGNALS}
        try:
            yield
        finally:
            for sig, handler in original.items():
                signal.signal(sig, handler)


class UvicornListener:
    def __init__(self, *, host: str, port: int) -> None:
        self.host = host
        self.port = port

    def bind(self) -> socket.socket:
        family = socket.AF_INET6 if ":" in self.host else socket.AF_INET
        sock = socket.socket(family, socket.SOCK_STREAM)
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind((self.host, self.port))
        except OSError as e:
            sock.close()
            raise ListenError(f"cannot bind {self.host}:{self.port}: {e}") from e
        sock.set_inheritable(True)
        return sock

    async def serve(self, app: FastAPI, sock: socket.socket) -> None:
        config = uvicorn.Config(
            app,
            host=self.host,
            port=self.port,
            log_config=None,  # structlog
            proxy_headers=True,
        )
        server = _Server(config)
        try:
            await server.serve(sockets=[sock])
        finally:
            sock.close()


# --- Module Notes -----------------------------------------------------------
# SO_REUSEADDR only skips TIME_WAIT; a port held by a live listener still fails
# to bind.
