from src.swms.events import EventBroadcaster


def test_every_listener_receives_message():
    broadcaster = EventBroadcaster()
    first, second = [], []
    broadcaster.subscribe(first.append)
    broadcaster.subscribe(second.append)

    broadcaster.emit("bin:update", {"id": "B1", "fillLevel": 10, "status": "normal"})

    expected = {"event": "bin:update", "data": {"id": "B1", "fillLevel": 10, "status": "normal"}}
    assert first == [expected]
    assert second == [expected]


def test_emit_without_listeners_is_a_no_op():
    EventBroadcaster().emit("complaint:new", {"id": "C1", "status": "submitted"})


def test_failing_listener_is_dropped_without_affecting_others():
    broadcaster = EventBroadcaster()
    received = []

    def broken(message):
        raise RuntimeError("socket closed")

    broadcaster.subscribe(broken)
    broadcaster.subscribe(received.append)

    broadcaster.emit("bin:alert", {"id": "B1", "level": 97, "status": "overflow"})
    broadcaster.emit("bin:alert", {"id": "B1", "level": 98, "status": "overflow"})

    assert broadcaster.listener_count == 1
    assert [message["data"]["level"] for message in received] == [97, 98]


def test_unsubscribed_listener_misses_later_events():
    broadcaster = EventBroadcaster()
    received = []
    token = broadcaster.subscribe(received.append)

    broadcaster.emit("complaint:new", {"id": "C1", "status": "submitted"})
    broadcaster.unsubscribe(token)
    broadcaster.emit("complaint:new", {"id": "C2", "status": "submitted"})

    assert [message["data"]["id"] for message in received] == ["C1"]
