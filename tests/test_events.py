"""Tests for the event/listener helper."""

import asyncio
from dataclasses import dataclass

import pytest

from followfeed.core.events import EventDispatcher


@dataclass
class Happened:
    value: int


@dataclass
class Other:
    value: int


class TestEventDispatcher:

    def test_listeners_run_in_order(self):
        dispatcher = EventDispatcher()
        calls = []

        @dispatcher.listen(Happened)
        def first(event):
            calls.append(("sync", event.value))

        @dispatcher.listen(Happened)
        async def second(event):
            calls.append(("async", event.value))

        asyncio.run(dispatcher.dispatch(Happened(3)))
        assert calls == [("sync", 3), ("async", 3)]

    def test_only_matching_event_type(self):
        dispatcher = EventDispatcher()
        calls = []
        dispatcher.listen(Happened)(lambda event: calls.append(event))

        asyncio.run(dispatcher.dispatch(Other(1)))
        assert calls == []
        assert dispatcher.listeners_for(Other) == []

    def test_listener_errors_propagate(self):
        dispatcher = EventDispatcher()

        @dispatcher.listen(Happened)
        def boom(event):
            raise RuntimeError("listener failed")

        with pytest.raises(RuntimeError):
            asyncio.run(dispatcher.dispatch(Happened(1)))

    def test_post_listener_is_registered(self):
        from followfeed.core.events import dispatcher
        from followfeed.services.posts import PostCreated, notify_followers_of_new_post
        assert notify_followers_of_new_post in dispatcher.listeners_for(PostCreated)
