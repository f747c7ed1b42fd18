"""Server-sent event framing for streamed provider responses.

Turns the text lines of a streamed HTTP body into discrete ``StreamEvent``
records following the ``text/event-stream`` rules:

- ``event:`` sets the event name, ``data:`` appends a payload line (multiple
  data lines are joined with ``\\n``), ``id:`` sets the event id;
- lines starting with ``:`` are comments; ``retry:`` and unknown fields are
  ignored;
- a blank line dispatches the pending event.

A pending event left without a trailing blank line when the body ends is still
dispatched; Vertex occasionally closes the stream right after the last frame.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import AsyncIterable, AsyncIterator, List, Optional

DONE_SENTINEL = "[DONE]"

# Event names that only keep the connection alive.
HEARTBEAT_EVENT_NAMES = frozenset({"ping"})


@dataclass(frozen=True)
class StreamEvent:
    """A single parsed event from an open stream.

    Attributes:
        name: Value of the ``event:`` field, ``None`` when absent.
        data: Joined ``data:`` lines, ``None`` when the event carried none.
        id: Value of the ``id:`` field, ``None`` when absent.
    """

    name: Optional[str] = None
    data: Optional[str] = None
    id: Optional[str] = None

    @property
    def is_heartbeat(self) -> bool:
        return self.name in HEARTBEAT_EVENT_NAMES

    @property
    def is_done(self) -> bool:
        return self.data == DONE_SENTINEL


class _EventBuilder:
    """Accumulates fields of the event currently being read."""

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self.name: Optional[str] = None
        self.id: Optional[str] = None
        self.data: List[str] = []
        self.touched = False

    def feed(self, line: str) -> None:
        if line.startswith(":"):
            return
        field, sep, value = line.partition(":")
        if sep and value.startswith(" "):
            value = value[1:]
        if field == "event":
            self.name = value
        elif field == "data":
            self.data.append(value)
        elif field == "id":
            self.id = value
        else:
            return
        self.touched = True

    def build(self) -> Optional[StreamEvent]:
        if not self.touched:
            return None
        event = StreamEvent(
            name=self.name or None,
            data="\n".join(self.data) if self.data else None,
            id=self.id,
        )
        self.reset()
        return event


async def aiter_events(lines: AsyncIterable[str]) -> AsyncIterator[StreamEvent]:
    """Yield ``StreamEvent`` records parsed from an async iterable of lines.

    Parameters:
        lines: Text lines without their terminators, e.g.
            ``httpx.Response.aiter_lines()``.
    """
    builder = _EventBuilder()
    async for raw in lines:
        line = raw.rstrip("\r")
        if line == "":
            event = builder.build()
            if event is not None:
                yield event
            continue
        builder.feed(line)
    tail = builder.build()
    if tail is not None:
        yield tail


__all__ = ["DONE_SENTINEL", "HEARTBEAT_EVENT_NAMES", "StreamEvent", "aiter_events"]
