"""Caches the rendering of the latest snapshot.

Delta renderers remember previous numbers, so rendering the same
snapshot twice would record phantom "unchanged" readings. The cache
renders each snapshot exactly once and serves the stored output to
every request until the runner captures a new one.
"""

from __future__ import annotations

import io
import logging
import threading
from datetime import datetime
from typing import BinaryIO, Protocol, TextIO

from watchhttp.htmldelta import RenderError
from watchhttp.htmljson import MarshalError
from watchhttp.snapshot.models import Snapshot
from watchhttp.snapshot.runner import CommandRunner

logger = logging.getLogger(__name__)


class SnapshotRenderer(Protocol):
    def render(self, raw: bytes, sink: TextIO) -> MarshalError | None: ...


class RenderCache:
    """Renders runner output on demand, once per snapshot.

    A snapshot is new when its run number differs from the last rendered
    one, so wall-clock steps do not affect staleness.
    """

    def __init__(self, source: CommandRunner, renderer: SnapshotRenderer) -> None:
        self._source = source
        self._renderer = renderer
        self._lock = threading.Lock()
        self._last_seen: datetime | None = None
        self._last_run = 0
        self._output = b""

    @property
    def last_seen(self) -> datetime | None:
        return self._last_seen

    def write_to(self, sink: BinaryIO) -> int:
        """Write the rendering of the latest snapshot into ``sink``."""
        with self._lock:
            snapshot = self._source.snapshot()
            if snapshot.run_number != self._last_run:
                self._refresh(snapshot)
            output = self._output
        return sink.write(output)

    def _refresh(self, snapshot: Snapshot) -> None:
        # marked seen up front: a failed render is not retried for the same snapshot
        self._last_run = snapshot.run_number
        self._last_seen = snapshot.updated_at
        self._output = b""

        out = io.StringIO()
        try:
            err = self._renderer.render(snapshot.stdout, out)
        except RenderError as e:
            logger.warning("Cannot render snapshot %d: %s", snapshot.run_number, e)
            return
        if err is not None:
            logger.warning("Snapshot %d rendered with errors: %s", snapshot.run_number, err)
        self._output = out.getvalue().encode("utf-8")
