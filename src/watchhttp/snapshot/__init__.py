"""Periodic command execution and cached rendering of its output."""

from watchhttp.snapshot.cache import RenderCache
from watchhttp.snapshot.models import Snapshot
from watchhttp.snapshot.runner import CommandError, CommandRunner

__all__ = ["CommandError", "CommandRunner", "RenderCache", "Snapshot"]
