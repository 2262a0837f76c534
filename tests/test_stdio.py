"""Tests for the stdio transport."""

import io
import json
import os
import signal
import subprocess
import sys
from pathlib import Path

import pytest

from catalog_mcp.mcp_transport.stdio import StdioServer, run_stdio

REPO_ROOT = Path(__file__).parent.parent


def _lines(*messages) -> io.StringIO:
    return io.StringIO(
        "".join((m if isinstance(m, str) else json.dumps(m)) + "\n" for m in messages)
    )


def _responses(stdout: io.StringIO) -> dict:
    written = [json.loads(line) for line in stdout.getvalue().splitlines()]
    return {message["id"]: message for message in written}


@pytest.mark.asyncio
async def test_session_until_eof(dispatcher, upstream):
    upstream.reply_json([{"id": "p1"}])
    stdin = _lines(
        {"jsonrpc": "2.0", "id": 1, "method": "initialize", "params": {"protocolVersion": "2024-11-05"}},
        {"jsonrpc": "2.0", "method": "notifications/initialized"},
        {"jsonrpc": "2.0", "id": 2, "method": "tools/list"},
        {"jsonrpc": "2.0", "id": 3, "method": "tools/call", "params": {"name": "list_catalogs"}},
    )
    stdout = io.StringIO()

    await run_stdio(dispatcher, stdin=stdin, stdout=stdout, handle_signals=False)

    responses = _responses(stdout)
    assert set(responses) == {1, 2, 3}
    assert responses[1]["result"]["serverInfo"]["name"] == "catalog-server"
    assert len(responses[2]["result"]["tools"]) == 42
    assert responses[3]["result"]["isError"] is False


@pytest.mark.asyncio
async def test_one_json_object_per_line(dispatcher):
    stdin = _lines(
        {"jsonrpc": "2.0", "id": "a", "method": "ping"},
        {"jsonrpc": "2.0", "id": "b", "method": "ping"},
    )
    stdout = io.StringIO()

    await StdioServer(dispatcher, stdin=stdin, stdout=stdout).serve()

    lines = stdout.getvalue().splitlines()
    assert len(lines) == 2
    assert {json.loads(line)["id"] for line in lines} == {"a", "b"}


@pytest.mark.asyncio
async def test_blank_lines_are_skipped_and_garbage_reported(dispatcher):
    stdin = _lines("", "   ", "not json")
    stdout = io.StringIO()

    await run_stdio(dispatcher, stdin=stdin, stdout=stdout, handle_signals=False)

    lines = stdout.getvalue().splitlines()
    assert len(lines) == 1
    assert json.loads(lines[0])["error"]["code"] == -32700


@pytest.mark.asyncio
async def test_unicode_is_written_unescaped(dispatcher, upstream):
    upstream.reply_json([{"name": "café"}])
    stdin = _lines(
        {"jsonrpc": "2.0", "id": 1, "method": "tools/call", "params": {"name": "list_catalogs"}}
    )
    stdout = io.StringIO()

    await run_stdio(dispatcher, stdin=stdin, stdout=stdout, handle_signals=False)

    assert "café" in stdout.getvalue()


@pytest.mark.asyncio
async def test_empty_input_exits_cleanly(dispatcher):
    stdout = io.StringIO()

    await run_stdio(dispatcher, stdin=io.StringIO(""), stdout=stdout, handle_signals=False)

    assert stdout.getvalue() == ""


@pytest.fixture
def server_process():
    env = dict(os.environ, DATALOG_API_KEY="test-key", MCP_TRANSPORT="stdio")
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(REPO_ROOT), env.get("PYTHONPATH")]))
    process = subprocess.Popen(
        [sys.executable, "-m", "catalog_mcp"],
        stdin=subprocess.PIPE,
        stdout=subprocess.PIPE,
        stderr=subprocess.DEVNULL,
        env=env,
        cwd=REPO_ROOT,
        text=True,
    )
    yield process
    if process.poll() is None:
        process.kill()
        process.wait()
    process.stdin.close()
    process.stdout.close()


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX signals")
@pytest.mark.parametrize("signum", [signal.SIGTERM, signal.SIGINT], ids=["SIGTERM", "SIGINT"])
def test_signal_exits_cleanly_with_stdin_open(server_process, signum):
    server_process.stdin.write('{"jsonrpc": "2.0", "id": 1, "method": "ping"}\n')
    server_process.stdin.flush()
    # A reply means the server is up and its signal handlers are installed.
    assert json.loads(server_process.stdout.readline()) == {"jsonrpc": "2.0", "id": 1, "result": {}}

    server_process.send_signal(signum)

    assert server_process.wait(timeout=10) == 0
    assert not server_process.stdin.closed
