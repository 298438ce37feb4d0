"""
Event facade - a bounded per-session event queue.

Scripts post and wait for named events. Other facades may post into the same
queue through ``EventFacade.post``.
"""

import logging
import threading
import time
from collections import deque
from typing import Any, Dict, List, Optional

from ..rpc import RpcParameter, RpcReceiver, rpc

logger = logging.getLogger("scriptlayer.facades.events")

MAX_QUEUE_SIZE = 1024


def _now_ms() -> int:
    return int(time.time() * 1000)


class EventFacade(RpcReceiver):
    """Queue of events posted by scripts and facades."""

    def __init__(self, context: Any = None, max_queue_size: int = MAX_QUEUE_SIZE):
        super().__init__(context)
        self._events: deque = deque(maxlen=max_queue_size)
        self._condition = threading.Condition()
        self._closed = False

    def post(self, name: str, data: Any = None) -> Dict[str, Any]:
        """Add an event, dropping the oldest one when the queue is full."""
        event = {"name": name, "data": data, "time": _now_ms()}
        with self._condition:
            if len(self._events) == self._events.maxlen:
                logger.debug(f"Event queue full, dropping {self._events[0]['name']}")
            self._events.append(event)
            self._condition.notify_all()
        return event

    def _take(self, name: Optional[str]) -> Optional[Dict[str, Any]]:
        for event in self._events:
            if name is None or event["name"] == name:
                self._events.remove(event)
                return event
        return None

    def _wait(self, name: Optional[str], timeout: Optional[int]) -> Optional[Dict[str, Any]]:
        deadline = None if timeout is None else time.monotonic() + timeout / 1000.0
        with self._condition:
            while True:
                event = self._take(name)
                if event is not None:
                    return event
                if self._closed:
                    return None
                if deadline is None:
                    self._condition.wait()
                    continue
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    return None
                self._condition.wait(remaining)

    @rpc(
        "Post an event to the event queue.",
        params=[
            RpcParameter("name", str, "Name of event"),
            RpcParameter("data", None, "Data contained in event", optional=True),
        ],
    )
    def eventPost(self, name: str, data: Any = None) -> None:
        self.post(name, data)

    @rpc(
        "Returns and removes the oldest n events from the event buffer.",
        returns="a List of Maps of event properties",
        params=[RpcParameter("number_of_events", int, default=1)],
    )
    def eventPoll(self, number_of_events: int = 1) -> List[Dict[str, Any]]:
        with self._condition:
            events = []
            while self._events and len(events) < number_of_events:
                events.append(self._events.popleft())
            return events

    @rpc(
        "Blocks until an event with the supplied name occurs. The returned event is removed from the buffer.",
        returns="Map of event properties, or null on timeout",
        params=[
            RpcParameter("eventName", str),
            RpcParameter("timeout", int, "the maximum time to wait (in ms)", optional=True),
        ],
    )
    def eventWaitFor(self, eventName: str, timeout: Optional[int] = None) -> Optional[Dict[str, Any]]:
        return self._wait(eventName, timeout)

    @rpc(
        "Blocks until an event occurs. The returned event is removed from the buffer.",
        returns="Map of event properties, or null on timeout",
        params=[RpcParameter("timeout", int, "the maximum time to wait (in ms)", optional=True)],
    )
    def eventWait(self, timeout: Optional[int] = None) -> Optional[Dict[str, Any]]:
        return self._wait(None, timeout)

    @rpc("Clears all events from the event buffer.")
    def eventClearBuffer(self) -> None:
        with self._condition:
            self._events.clear()

    def shutdown(self) -> None:
        with self._condition:
            self._closed = True
            self._events.clear()
            self._condition.notify_all()
