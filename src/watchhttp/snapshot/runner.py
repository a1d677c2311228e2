"""Runs a command on a fixed interval and keeps its latest STDOUT.

Any failure to start, read or wait for the command is fatal to the
runner: serving stale output indefinitely would mislead the operator.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import BinaryIO

from watchhttp.snapshot.models import Snapshot
from watchhttp.utils.locks import ReadWriteLock

logger = logging.getLogger(__name__)


class CommandError(Exception):
    """Raised when the watched command cannot be run."""


class CommandRunner:
    """Executes a command periodically and stores the last STDOUT.

    The snapshot is replaced under the write side of a reader-writer
    lock, so request threads reading it never see a partial update.
    """

    def __init__(self, command: list[str], interval: float = 1.0) -> None:
        if not command:
            raise CommandError("missing command")
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._command = list(command)
        self._interval = interval
        self._lock = ReadWriteLock()
        self._snapshot = Snapshot()
        self._stopped = False

    @property
    def command(self) -> list[str]:
        return list(self._command)

    @property
    def interval(self) -> float:
        return self._interval

    def snapshot(self) -> Snapshot:
        with self._lock.read():
            return self._snapshot

    def last_updated_at(self) -> datetime | None:
        with self._lock.read():
            return self._snapshot.updated_at

    def write_to(self, sink: BinaryIO) -> int:
        """Copy the latest STDOUT into ``sink``."""
        with self._lock.read():
            return sink.write(self._snapshot.stdout)

    def stop(self) -> None:
        """Signal the run loop to stop after the current execution."""
        self._stopped = True

    async def run(self) -> None:
        """Run the command on every tick until stopped.

        Ticks follow a fixed schedule from the start. A command that runs
        longer than the interval is not interrupted; missed ticks are
        dropped and the next run starts late.

        Raises:
            CommandError: If any execution fails.
        """
        loop = asyncio.get_running_loop()
        next_tick = loop.time() + self._interval
        logger.info(
            "Running %s every %.3gs", " ".join(self._command), self._interval,
        )
        while not self._stopped:
            delay = next_tick - loop.time()
            if delay > 0:
                await asyncio.sleep(delay)
            if self._stopped:
                break

            await self.run_once()

            now = loop.time()
            next_tick += self._interval
            while next_tick <= now:
                next_tick += self._interval

    async def run_once(self) -> Snapshot:
        """Execute the command once and store its STDOUT.

        Raises:
            CommandError: If the command cannot be started or read, or
                exits with a non-zero status.
        """
        try:
            process = await asyncio.create_subprocess_exec(
                *self._command,
                stdout=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise CommandError(f"Failed to start {self._command[0]}: {e}") from e

        try:
            stdout = await process.stdout.read()
        except OSError as e:
            raise CommandError(f"Failed to read STDOUT of {self._command[0]}: {e}") from e

        with self._lock.write():
            self._snapshot = Snapshot(
                stdout=stdout,
                updated_at=datetime.now(timezone.utc),
                run_number=self._snapshot.run_number + 1,
            )
            snapshot = self._snapshot

        returncode = await process.wait()
        if returncode != 0:
            raise CommandError(f"{self._command[0]} exited with status {returncode}")

        logger.debug("Run %d captured %d bytes", snapshot.run_number, len(stdout))
        return snapshot
