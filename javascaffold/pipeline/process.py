"""Launch an external scaffold process without blocking the loop and report its exit."""
from __future__ import annotations

import asyncio
import signal
from collections.abc import Callable, Sequence
from pathlib import Path

from javascaffold.pipeline.commands import describe_command

FINISHED = "finished"
READ_CHUNK = 64 * 1024

ExitCallback = Callable[[str], None]


def is_finished(status: str) -> bool:
    """True iff the first token of a terminal status is exactly ``finished``."""
    tokens = status.split()
    return bool(tokens) and tokens[0] == FINISHED


def terminal_status(returncode: int) -> str:
    """Map a process return code to its terminal status string."""
    if returncode == 0:
        return f"{FINISHED}\n"
    if returncode < 0:
        try:
            name = signal.Signals(-returncode).name
        except ValueError:
            name = str(-returncode)
        return f"killed by signal {name}\n"
    return f"exited abnormally with code {returncode}\n"


class ExecutionHandle:
    """Handle on one launched process. The only way to abort it is kill()."""

    def __init__(self, label: str, argv: Sequence[str], working_dir: Path):
        self.label = label
        self.argv = list(argv)
        self.working_dir = working_dir
        self.process: asyncio.subprocess.Process | None = None
        self.status: str | None = None
        self._task: asyncio.Task[str] | None = None

    @property
    def done(self) -> bool:
        return self.status is not None

    async def wait(self) -> str:
        """Wait for the terminal status (the exit callback has run by then)."""
        if self._task is None:
            raise RuntimeError(f"{self.label} process was never launched")
        return await asyncio.shield(self._task)

    def kill(self) -> None:
        if self.process is not None and self.process.returncode is None:
            self.process.kill()


class ProcessScaffoldRunner:
    """Spawns build-tool processes and streams their output to the log."""

    def launch(
        self,
        working_dir: str | Path,
        argv: Sequence[str],
        on_exit: ExitCallback | None = None,
        label: str = "process",
    ) -> ExecutionHandle:
        """Schedule the process on the running loop and return immediately.

        ``on_exit`` is called exactly once with the terminal status, including
        when the executable cannot be started at all.
        """
        loop = asyncio.get_running_loop()
        handle = ExecutionHandle(label, argv, Path(working_dir))
        handle._task = loop.create_task(self._run(handle, on_exit))
        return handle

    async def _run(self, handle: ExecutionHandle, on_exit: ExitCallback | None) -> str:
        print(f"[{handle.label}] $ {describe_command(handle.argv)}  (cwd: {handle.working_dir})")
        try:
            status = await self._spawn_and_stream(handle)
        except OSError as e:
            # Missing executable or bad cwd: reported through the status string
            status = f"failed to start: {e}\n"
            print(f"[{handle.label}] {status.strip()}")
        except Exception as e:
            status = f"failed: {e!r}\n"
            print(f"[{handle.label}] {status.strip()}")

        handle.status = status
        print(f"[{handle.label}] Process {status.strip()}")
        if on_exit is not None:
            on_exit(status)
        return status

    async def _spawn_and_stream(self, handle: ExecutionHandle) -> str:
        process = await asyncio.create_subprocess_exec(
            *handle.argv,
            cwd=str(handle.working_dir),
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.STDOUT,
        )
        handle.process = process

        streamed = False
        try:
            await self._stream_output(handle, process)
            streamed = True
        finally:
            # Always reap the child; if streaming broke, nothing drains its pipe
            if not streamed and process.returncode is None:
                process.kill()
            returncode = await process.wait()

        return terminal_status(returncode)

    async def _stream_output(
        self, handle: ExecutionHandle, process: asyncio.subprocess.Process
    ) -> None:
        """Log output line by line; reads in chunks so long lines cannot overrun."""
        if process.stdout is None:
            raise RuntimeError("process stdout is not piped")

        pending = b""
        while chunk := await process.stdout.read(READ_CHUNK):
            *lines, pending = (pending + chunk).split(b"\n")
            for raw in lines:
                self._log_line(handle.label, raw)
        self._log_line(handle.label, pending)

    @staticmethod
    def _log_line(label: str, raw: bytes) -> None:
        line = raw.decode(errors="replace").rstrip()
        if line:
            print(f"[{label}] {line}")
