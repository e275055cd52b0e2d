from gripe_logger.model.auth.identity import Identity
from gripe_logger.service.auth.events import AuthChange, AuthEvent, AuthEvents


def test_unsubscribed_listener_stops_receiving():
    hub = AuthEvents()
    received = []
    sub = hub.subscribe(received.append)

    hub.publish(AuthChange(AuthEvent.SIGNED_IN, Identity(user_id="u1", email="u1@example.edu"), "t1"))
    sub.unsubscribe()
    sub.unsubscribe()
    hub.publish(AuthChange(AuthEvent.SIGNED_OUT, None, "t1"))

    assert [c.event for c in received] == [AuthEvent.SIGNED_IN]
    assert hub.listener_count() == 0


def test_failing_listener_does_not_block_others():
    hub = AuthEvents()
    received = []

    def broken(_change):
        raise RuntimeError("listener bug")

    hub.subscribe(broken)
    hub.subscribe(received.append)

    hub.publish(AuthChange(AuthEvent.SIGNED_OUT, None, "t2"))

    assert len(received) == 1
