"""Tests for message delivery into chat rooms."""

import asyncio


def test_deliver_to_joined_room(client, gateway, fake_sio):
    asyncio.run(gateway.join_chat("s1", "abc"))
    asyncio.run(gateway.join_chat("s2", "abc"))

    response = client.post(
        "/api/messages/abc/events",
        json={"event": "new_message", "data": {"content": "hello"}},
    )
    assert response.status_code == 202
    assert response.json() == {"room": "chat_abc", "event": "new_message", "recipients": 2}
    assert fake_sio.emitted == [("new_message", {"content": "hello"}, "chat_abc")]


def test_default_event_name(client, fake_sio):
    response = client.post("/api/messages/xyz/events", json={"data": "ping"})
    assert response.status_code == 202
    assert response.json()["event"] == "new_message"
    assert response.json()["recipients"] == 0
    assert fake_sio.emitted == [("new_message", "ping", "chat_xyz")]


def test_disconnected_member_not_counted(client, gateway):
    asyncio.run(gateway.join_chat("s1", "abc"))
    asyncio.run(gateway.join_chat("s2", "abc"))
    asyncio.run(gateway.on_disconnect("s1"))

    response = client.post("/api/messages/abc/events", json={"data": {}})
    assert response.json()["recipients"] == 1


def test_only_message_events_deliverable(client, fake_sio):
    for name in ("connect_error", "join_chat", "disconnect", "new_message ", ""):
        response = client.post("/api/messages/abc/events", json={"event": name})
        assert response.status_code == 422
    assert fake_sio.emitted == []


def test_form_body_rejected(client, fake_sio):
    response = client.post("/api/messages/abc/events", data={"event": "new_message"})
    assert response.status_code == 422
    assert fake_sio.emitted == []


def test_untrusted_origin_cannot_push_control_events(client, fake_sio):
    response = client.post(
        "/api/messages/anyroom/events",
        json={"event": "connect_error", "data": {}},
        headers={"Origin": "http://evil.test"},
    )
    assert response.status_code == 422
    assert fake_sio.emitted == []


def test_message_lifecycle_events_accepted(client, fake_sio):
    for name in ("message_updated", "message_deleted"):
        response = client.post("/api/messages/abc/events", json={"event": name, "data": {"id": 1}})
        assert response.status_code == 202
        assert response.json()["event"] == name
    assert [event for event, _, _ in fake_sio.emitted] == ["message_updated", "message_deleted"]


def test_padded_chat_id_reaches_joined_member(client, gateway, fake_sio):
    asyncio.run(gateway.join_chat("s1", " abc"))

    response = client.post("/api/messages/%20abc/events", json={"data": {"content": "hi"}})
    assert response.status_code == 202
    assert response.json() == {"room": "chat_abc", "event": "new_message", "recipients": 1}
    assert fake_sio.emitted == [("new_message", {"content": "hi"}, "chat_abc")]


def test_blank_chat_id_rejected(client, fake_sio):
    response = client.post("/api/messages/%20%20/events", json={"data": {}})
    assert response.status_code == 422
    assert fake_sio.emitted == []
