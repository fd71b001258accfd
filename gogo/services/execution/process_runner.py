"""
Process runner: one shell command in one directory.

Captures stdout/stderr in full while optionally streaming them line by line
to caller-supplied sinks. Failures of the child (non-zero exit, spawn
error, timeout) come back as ExecutionOutcome values, never as exceptions.
"""

from __future__ import annotations

import os
import signal
import subprocess
import threading
import time
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import IO

from ...core.interfaces.logger import ILogger
from ...core.models.execution import TIMEOUT_EXIT_CODE, ExecutionOutcome

OutputSink = Callable[[str], None]

_POSIX = os.name == "posix"


class ProcessRunner:
    """
    Runs shell commands with capture, timeout and process-group cleanup.

    On POSIX the child starts in its own session, so a timeout can signal
    every process the command spawned. Termination is graceful first
    (SIGTERM), then forceful (SIGKILL) once the grace period runs out.
    """

    DEFAULT_TIMEOUT = 300.0  # 5 minutes
    DEFAULT_KILL_GRACE = 5.0
    POLL_INTERVAL = 0.05

    def __init__(
        self,
        timeout: float | None = None,
        kill_grace: float | None = None,
        extra_env: Mapping[str, str] | None = None,
        logger: ILogger | None = None,
    ) -> None:
        """
        Initialize process runner.

        Args:
            timeout: Default timeout in seconds for every run() call
            kill_grace: Seconds between SIGTERM and SIGKILL on timeout
            extra_env: Variables added on top of os.environ for children
            logger: Logger for internal diagnostics
        """
        self.timeout = timeout if timeout is not None else self.DEFAULT_TIMEOUT
        self.kill_grace = kill_grace if kill_grace is not None else self.DEFAULT_KILL_GRACE
        self._extra_env = dict(extra_env or {})
        self._logger = logger

    @property
    def logger(self) -> ILogger:
        """Get logger, resolving from container or creating NullLogger."""
        if self._logger is None:
            from ...core.di import get_logger

            self._logger = get_logger()
        return self._logger

    def build_env(self, env: Mapping[str, str] | None = None) -> dict[str, str]:
        """Environment for a child: ``env`` verbatim, or os.environ plus extra_env."""
        if env is not None:
            return dict(env)
        child_env = dict(os.environ)
        child_env.update(self._extra_env)
        return child_env

    def run(
        self,
        command: str,
        cwd: str | Path,
        env: Mapping[str, str] | None = None,
        timeout: float | None = None,
        on_stdout: OutputSink | None = None,
        on_stderr: OutputSink | None = None,
    ) -> ExecutionOutcome:
        """
        Run ``command`` through the shell in ``cwd``.

        Args:
            command: Shell command line
            cwd: Working directory
            env: Full child environment (defaults to os.environ plus extra_env)
            timeout: Seconds before the command is terminated (defaults to self.timeout)
            on_stdout: Called with each stdout line as it arrives
            on_stderr: Called with each stderr line as it arrives

        Returns:
            ExecutionOutcome; exit code 124 with timed_out=True on timeout,
            exit code 1 with the error text as stderr if the spawn failed
        """
        limit = self.timeout if timeout is None else timeout
        self.logger.debug("Spawning %r in %s (timeout=%.1fs)", command, cwd, limit)

        try:
            proc = subprocess.Popen(
                command,
                shell=True,
                cwd=str(cwd),
                env=self.build_env(env),
                stdin=None,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
                start_new_session=_POSIX,
            )
        except (OSError, ValueError) as e:
            self.logger.debug("Spawn failed for %r in %s: %s", command, cwd, e)
            return ExecutionOutcome.failure(str(e))

        stdout_chunks: list[str] = []
        stderr_chunks: list[str] = []
        readers = [
            self._start_reader(proc.stdout, stdout_chunks, on_stdout, f"stdout-{proc.pid}"),
            self._start_reader(proc.stderr, stderr_chunks, on_stderr, f"stderr-{proc.pid}"),
        ]

        timed_out = False
        try:
            proc.wait(timeout=limit)
        except subprocess.TimeoutExpired:
            timed_out = True
            self.logger.debug("Process %d timed out after %.1fs", proc.pid, limit)
            self._terminate(proc)

        for reader in readers:
            reader.join(self.kill_grace if timed_out else None)

        stdout = "".join(stdout_chunks).rstrip()
        stderr = "".join(stderr_chunks).strip()

        if timed_out:
            return ExecutionOutcome(
                exit_code=TIMEOUT_EXIT_CODE,
                stdout=stdout,
                stderr=stderr,
                timed_out=True,
            )

        exit_code = proc.returncode
        if exit_code < 0:
            # Killed by a signal; report it the way a shell would
            exit_code = 128 - exit_code
        self.logger.debug("Process %d exited: code=%d", proc.pid, exit_code)
        return ExecutionOutcome(exit_code=exit_code, stdout=stdout, stderr=stderr)

    def _start_reader(
        self,
        stream: IO[str] | None,
        chunks: list[str],
        sink: OutputSink | None,
        name: str,
    ) -> threading.Thread:
        def pump() -> None:
            if stream is None:
                return
            with stream:
                for line in iter(stream.readline, ""):
                    chunks.append(line)
                    if sink is not None:
                        sink(line)

        thread = threading.Thread(target=pump, name=name, daemon=True)
        thread.start()
        return thread

    def _terminate(self, proc: subprocess.Popen) -> None:
        """SIGTERM the process group, then SIGKILL whatever survives the grace period."""
        deadline = time.monotonic() + self.kill_grace
        self._signal(proc, signal.SIGTERM)

        try:
            proc.wait(timeout=self.kill_grace)
        except subprocess.TimeoutExpired:
            pass

        while self._alive(proc) and time.monotonic() < deadline:
            time.sleep(self.POLL_INTERVAL)

        if self._alive(proc):
            self.logger.debug("Process %d ignored SIGTERM, sending SIGKILL", proc.pid)
            self._signal(proc, getattr(signal, "SIGKILL", signal.SIGTERM))
        proc.wait()

    def _signal(self, proc: subprocess.Popen, sig: int) -> None:
        try:
            if _POSIX:
                os.killpg(proc.pid, sig)
            elif sig == signal.SIGTERM:
                proc.terminate()
            else:
                proc.kill()
        except ProcessLookupError:
            self.logger.debug("Process group %d already gone", proc.pid)

    def _alive(self, proc: subprocess.Popen) -> bool:
        """Check whether the child, or on POSIX anything in its group, still runs."""
        if not _POSIX:
            return proc.poll() is None
        proc.poll()
        try:
            os.killpg(proc.pid, 0)
        except ProcessLookupError:
            return False
        except PermissionError:
            return True
        return True
