"""Tests for run_subprocess_with_context error reporting.

asyncio.create_subprocess_exec is replaced, so no process is started.
"""

import asyncio

import pytest

from stakk.core.subprocess_utils import run_subprocess_with_context


class _FakeProcess:
    def __init__(self, returncode: int, stdout: bytes, stderr: bytes) -> None:
        self.returncode = returncode
        self._stdout = stdout
        self._stderr = stderr

    async def communicate(self) -> tuple[bytes, bytes]:
        return self._stdout, self._stderr


def _spawn(process: _FakeProcess | None):
    async def fake_exec(*cmd, **kwargs):
        if process is None:
            raise FileNotFoundError(cmd[0])
        return process

    return fake_exec


async def test_returns_stdout_on_success(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        asyncio, "create_subprocess_exec", _spawn(_FakeProcess(0, b"hello\n", b""))
    )

    assert await run_subprocess_with_context(["jj", "log"], "read log") == "hello\n"


async def test_failure_includes_context(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        asyncio, "create_subprocess_exec", _spawn(_FakeProcess(1, b"partial", b"boom"))
    )

    with pytest.raises(RuntimeError) as exc_info:
        await run_subprocess_with_context(["jj", "git", "push"], "push bookmark")

    message = str(exc_info.value)
    assert "Failed to push bookmark" in message
    assert "Command: jj git push" in message
    assert "Exit code: 1" in message
    assert "stdout: partial" in message
    assert "stderr: boom" in message


async def test_missing_binary(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(asyncio, "create_subprocess_exec", _spawn(None))

    with pytest.raises(RuntimeError, match="Command not found while trying to list remotes: jj"):
        await run_subprocess_with_context(["jj", "git", "remote", "list"], "list remotes")
