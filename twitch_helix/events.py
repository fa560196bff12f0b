"""
Client notifications.

Listeners are plain callables invoked synchronously, in registration order,
from inside the client call that produced the event. Events emitted while no
listener is registered are dropped.
"""

from collections import defaultdict
from enum import Enum
from typing import Any, Callable, DefaultDict, List, Optional, Union

from .errors import ValidationError


class ClientEvent(str, Enum):
    """Events fired by the clients."""
    READY = "ready"
    REFRESH = "refresh"
    ERROR = "error"


Listener = Callable[..., Any]
EventName = Union[ClientEvent, str]


def _normalize(event: EventName) -> ClientEvent:
    try:
        return ClientEvent(event)
    except ValueError:
        raise ValidationError(
            f"Unknown event {event!r}",
            {"events": [e.value for e in ClientEvent]},
        ) from None


class EventEmitter:
    """In-process listener registry."""

    def __init__(self) -> None:
        self._listeners: DefaultDict[ClientEvent, List[Listener]] = defaultdict(list)

    def on(self, event: EventName, listener: Optional[Listener] = None) -> Any:
        """
        Register a listener and return it.

        Without a listener, returns a decorator that registers the function
        it wraps: ``@emitter.on("error")``.
        """
        if listener is None:
            return lambda func: self.on(event, func)
        self._listeners[_normalize(event)].append(listener)
        return listener

    def once(self, event: EventName, listener: Listener) -> Listener:
        """Register a listener that is removed after its first call."""
        name = _normalize(event)

        def wrapper(*args: Any) -> Any:
            self._remove(name, wrapper)
            return listener(*args)

        wrapper.__wrapped__ = listener  # type: ignore[attr-defined]
        self._listeners[name].append(wrapper)
        return listener

    def off(self, event: EventName, listener: Listener) -> None:
        """Remove a listener registered with on() or once()."""
        name = _normalize(event)
        for registered in list(self._listeners.get(name, [])):
            if registered is listener or getattr(registered, "__wrapped__", None) is listener:
                self._remove(name, registered)
                return

    def _remove(self, name: ClientEvent, registered: Listener) -> None:
        listeners = self._listeners.get(name, [])
        if registered in listeners:
            listeners.remove(registered)

    def emit(self, event: EventName, *args: Any) -> bool:
        """Call every listener of event. Returns True if there was any."""
        listeners = list(self._listeners.get(_normalize(event), []))
        for listener in listeners:
            listener(*args)
        return bool(listeners)

    def listener_count(self, event: EventName) -> int:
        return len(self._listeners.get(_normalize(event), []))

    def is_listening_for(self, event: EventName) -> bool:
        return self.listener_count(event) > 0
