"""
Minimal event/listener helper.

Listeners register against an event class and run in registration order when
an instance of that class is dispatched. Coroutine listeners are awaited.
Listener exceptions propagate to the dispatcher's caller.
"""
import inspect
import logging
from collections import defaultdict
from typing import Callable, DefaultDict, List, Type

logger = logging.getLogger(__name__)


class EventDispatcher:
    def __init__(self):
        self._listeners: DefaultDict[type, List[Callable]] = defaultdict(list)

    def listen(self, event_type: Type):
        """Decorator registering a listener for event_type."""
        def decorator(func: Callable) -> Callable:
            self._listeners[event_type].append(func)
            return func
        return decorator

    def listeners_for(self, event_type: Type) -> List[Callable]:
        return list(self._listeners.get(event_type, ()))

    async def dispatch(self, event) -> None:
        listeners = self.listeners_for(type(event))
        logger.debug("Dispatching %s to %d listener(s)", type(event).__name__, len(listeners))
        for listener in listeners:
            result = listener(event)
            if inspect.isawaitable(result):
                await result


dispatcher = EventDispatcher()
listen = dispatcher.listen
dispatch = dispatcher.dispatch
