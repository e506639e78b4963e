from taskflow.services import realtime


def test_publish_reaches_subscribers_of_that_channel():
    calls = []
    realtime.subscribe("task_comments:1", lambda: calls.append("a"))
    realtime.subscribe("task_comments:2", lambda: calls.append("b"))

    realtime.publish("task_comments:1")
    assert calls == ["a"]


def test_unsubscribe_stops_delivery():
    calls = []
    subscription = realtime.subscribe("user_notifications:u1", lambda: calls.append(1))
    realtime.publish("user_notifications:u1")
    subscription.unsubscribe()
    subscription.unsubscribe()
    realtime.publish("user_notifications:u1")
    assert calls == [1]


def test_failing_listener_does_not_block_others():
    calls = []

    def broken():
        raise RuntimeError("boom")

    realtime.subscribe("task_attachments:7", broken)
    realtime.subscribe("task_attachments:7", lambda: calls.append("ok"))
    realtime.publish("task_attachments:7")
    assert calls == ["ok"]


def test_channel_names():
    assert realtime.comments_channel(3) == "task_comments:3"
    assert realtime.attachments_channel(3) == "task_attachments:3"
    assert realtime.notifications_channel("u") == "user_notifications:u"
