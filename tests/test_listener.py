from __future__ import annotations

import signal
import socket
import subprocess
import sys
import textwrap
import time

import pytest

from storefront_api.errors import ListenError
from storefront_api.startup.listener import UvicornListener


def test_bind_on_occupied_port_raises_listen_error() -> None:
    holder = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    holder.bind(("127.0.0.1", 0))
    holder.listen()
    port = holder.getsockname()[1]
    try:
        with pytest.raises(ListenError, match=str(port)):
            UvicornListener(host="127.0.0.1", port=port).bind()
    finally:
        holder.close()


def test_bind_returns_bound_socket() -> None:
    sock = UvicornListener(host="127.0.0.1", port=0).bind()
    try:
        assert sock.getsockname()[0] == "127.0.0.1"
        assert sock.getsockname()[1] > 0
    finally:
        sock.close()


_SERVE_SCRIPT = textwrap.dedent(
    """
    import asyncio
    import sys

    from storefront_api.settings import Settings
    from storefront_api.startup.listener import UvicornListener
    from storefront_api.startup.orchestrator import StartupOrchestrator, launch


    class Db:
        name = "shutdown_test"


    class Handle:
        db = Db()

        async def close(self):
            print("HANDLE_CLOSED", flush=True)


    async def connect(settings):
        return Handle()


    settings = Settings(
        _env_file=None,
        mongo_uri="mongodb://db.test:27017/shutdown_test",
        skip_seed_on_start=True,
        enable_pinecone=False,
    )
    orchestrator = StartupOrchestrator(
        settings=settings,
        connector=connect,
        listener=UvicornListener(host="127.0.0.1", port=int(sys.argv[1])),
        routes={},
    )
    sys.exit(asyncio.run(launch(orchestrator)))
    """
)


def _free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


def _wait_until_listening(proc: subprocess.Popen, port: int, timeout: float = 20.0) -> None:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if proc.poll() is not None:
            raise AssertionError(f"server exited early with {proc.returncode}")
        try:
            with socket.create_connection(("127.0.0.1", port), timeout=0.5):
                return
        except OSError:
            time.sleep(0.1)
    raise AssertionError("server never started listening")


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX signals")
@pytest.mark.parametrize("sig", [signal.SIGTERM, signal.SIGINT])
def test_signal_stops_server_cleanly(sig: signal.Signals) -> None:
    port = _free_port()
    proc = subprocess.Popen(
        [sys.executable, "-c", _SERVE_SCRIPT, str(port)],
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        text=True,
    )
    try:
        _wait_until_listening(proc, port)
        proc.send_signal(sig)
        output, _ = proc.communicate(timeout=20)
    finally:
        if proc.poll() is None:
            proc.kill()
            proc.communicate()

    assert proc.returncode == 0, output
    assert "HANDLE_CLOSED" in output
    assert "KeyboardInterrupt" not in output
