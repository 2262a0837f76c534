"""Newline-delimited JSON-RPC transport over stdin/stdout."""

import json
import signal
import sys
import threading
from concurrent.futures import CancelledError
from typing import Callable, TextIO

import anyio
import structlog
from anyio import CancelScope
from anyio.abc import ObjectSendStream
from anyio.from_thread import BlockingPortal

from catalog_mcp.tools import ToolDispatcher

from .service import handle_message

logger = structlog.get_logger(__name__)

READ_BUFFER_LINES = 16


def _stdin_readline() -> Callable[[], str]:
    # Read the raw fd: a daemon thread parked inside the buffered reader
    # would hold its lock when the interpreter closes stdin at exit.
    raw = getattr(getattr(sys.stdin, "buffer", None), "raw", None)
    if raw is None:
        return sys.stdin.readline
    return lambda: raw.readline().decode("utf-8", errors="replace")


def _pump_lines(
    readline: Callable[[], str],
    portal: BlockingPortal,
    send: ObjectSendStream[str],
) -> None:
    """Forward lines from a blocking stream into the event loop.

    Runs in a daemon thread: a readline still blocked at shutdown must not
    keep the process alive. An empty string marks EOF.
    """
    try:
        while True:
            try:
                line = readline()
            except (OSError, ValueError):
                # stdin closed underneath the reader
                line = ""
            portal.call(send.send, line)
            if not line:
                return
    except (anyio.BrokenResourceError, anyio.ClosedResourceError, CancelledError, RuntimeError):
        # Stream closed or portal stopped: the server is shutting down.
        return


class StdioServer:
    """Serve MCP messages read line by line from a text stream.

    Each request runs in its own task so slow tool calls don't block
    later messages; responses are written whole, one per line.
    """

    def __init__(
        self,
        dispatcher: ToolDispatcher,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
    ) -> None:
        self.dispatcher = dispatcher
        self._readline = stdin.readline if stdin is not None else _stdin_readline()
        self._stdout = stdout if stdout is not None else sys.stdout

    async def serve(self) -> None:
        """Process messages until the input stream is closed."""
        send, receive = anyio.create_memory_object_stream(READ_BUFFER_LINES)
        async with BlockingPortal() as portal, anyio.create_task_group() as tg:
            threading.Thread(
                target=_pump_lines,
                args=(self._readline, portal, send),
                name="stdio-reader",
                daemon=True,
            ).start()
            async with send, receive:
                async for line in receive:
                    if not line:
                        break
                    if line.strip():
                        tg.start_soon(self._handle_line, line)
        logger.info("stdio_input_closed")

    async def _handle_line(self, line: str) -> None:
        response = await handle_message(self.dispatcher, line)
        if response is not None:
            self._write(response)

    def _write(self, payload: dict) -> None:
        # No await between write and flush, so lines never interleave.
        self._stdout.write(json.dumps(payload, ensure_ascii=False) + "\n")
        self._stdout.flush()


async def _cancel_on_signal(scope: CancelScope) -> None:
    with anyio.open_signal_receiver(signal.SIGINT, signal.SIGTERM) as signals:
        async for signum in signals:
            logger.info("shutdown_signal_received", signal=signal.Signals(signum).name)
            scope.cancel()
            return


async def run_stdio(
    dispatcher: ToolDispatcher,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    handle_signals: bool = True,
) -> None:
    """Run the stdio transport until EOF or SIGINT/SIGTERM.

    Args:
        dispatcher: Tool dispatcher serving the calls.
        stdin: Input stream (defaults to ``sys.stdin``).
        stdout: Output stream (defaults to ``sys.stdout``).
        handle_signals: Install SIGINT/SIGTERM handlers that stop the server.
    """
    server = StdioServer(dispatcher, stdin=stdin, stdout=stdout)
    async with anyio.create_task_group() as tg:
        if handle_signals:
            tg.start_soon(_cancel_on_signal, tg.cancel_scope)
        logger.info("stdio_server_started", tools=len(dispatcher.registry))
        await server.serve()
        tg.cancel_scope.cancel()
