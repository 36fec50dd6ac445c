from __future__ import annotations
import re
from typing import Iterable, Iterator, Optional

from ..utils.logging import get_logger
from .events import Op, TraceEvent

logger = get_logger(__name__)

END_MARKER = "#eof"

# "<pc>: <op> <address>", hex fields with an optional 0x prefix
_LINE_RE = re.compile(
    r"^\s*(?:0[xX])?(?P<pc>[0-9a-fA-F]+):\s*(?P<op>\S)\s*(?:0[xX])?(?P<addr>[0-9a-fA-F]+)"
)


class TraceError(OSError):
    """Raised when a trace source cannot be read."""


def is_end_marker(line: str) -> bool:
    return line.startswith(END_MARKER)


def parse_line(line: str) -> Optional[TraceEvent]:
    """Parses one trace line. Returns None for anything that is not a read or write."""
    m = _LINE_RE.match(line)
    if m is None:
        return None
    try:
        op = Op(m.group("op"))
    except ValueError:
        return None
    return TraceEvent(op, int(m.group("addr"), 16), int(m.group("pc"), 16))


def iter_events(lines: Iterable[str]) -> Iterator[TraceEvent]:
    """Yields events in order, skipping malformed lines and stopping at `#eof`."""
    for lineno, line in enumerate(lines, start=1):
        if is_end_marker(line):
            logger.debug("End marker at line %d", lineno)
            return
        event = parse_line(line)
        if event is None:
            logger.debug("Skipping line %d: %r", lineno, line.rstrip("\n"))
            continue
        yield event


def _read_events(f) -> Iterator[TraceEvent]:
    with f:
        yield from iter_events(f)


def open_trace(path: str) -> Iterator[TraceEvent]:
    """Opens a trace file and returns an iterator over its events.

    The file is opened immediately so an unreadable trace fails before any
    simulation starts.
    """
    try:
        f = open(path, "r", errors="replace")
    except OSError as e:
        raise TraceError(f"Cannot open trace file {path}: {e.strerror or e}") from e
    return _read_events(f)
