from conftest import make_note, make_topic_with_reply, make_user


def test_reward_reply_once(client, session_factory):
    author = make_user(session_factory, "Rae")
    replier = make_user(session_factory, "Sam")
    topic_id, message_id = make_topic_with_reply(session_factory, author, replier)
    payload = {"messageId": message_id, "topicId": topic_id, "giverUserId": author}

    res = client.patch("/api/v1/chat/messages", json=payload)
    assert res.status_code == 200
    body = res.json()
    assert body["message"] == {"id": message_id, "rewardedByAuthor": True}
    assert body["recipientId"] == replier
    assert body["newUserPoints"] == 5

    res = client.patch("/api/v1/chat/messages", json=payload)
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "REWARD_001"


def test_reward_by_non_author_and_unknown_message(client, session_factory):
    author = make_user(session_factory, "Rae")
    replier = make_user(session_factory, "Sam")
    topic_id, message_id = make_topic_with_reply(session_factory, author, replier)

    res = client.patch(
        "/api/v1/chat/messages",
        json={"messageId": message_id, "topicId": topic_id, "giverUserId": replier},
    )
    assert res.status_code == 403
    assert res.json()["error"]["code"] == "AUTH_002"

    res = client.patch(
        "/api/v1/chat/messages",
        json={"messageId": 999, "topicId": topic_id, "giverUserId": author},
    )
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "MESSAGE_001"


def test_note_purchase(client, session_factory):
    author = make_user(session_factory, "Tia")
    buyer = make_user(session_factory, "Uma", points=12)
    paid_note = make_note(session_factory, author, "Chemistry", price=10)
    free_note = make_note(session_factory, author, "Schedule", price=0)

    res = client.post(f"/api/v1/notes/{paid_note}/purchase", json={"userId": buyer})
    assert res.status_code == 200
    assert res.json()["charged"] is True
    assert res.json()["points"] == 2
    assert res.json()["fileUrl"] == "notes/Chemistry.pdf"

    res = client.post(f"/api/v1/notes/{paid_note}/purchase", json={"userId": buyer})
    assert res.status_code == 400

    res = client.post(f"/api/v1/notes/{free_note}/purchase", json={"userId": buyer})
    assert res.status_code == 200
    assert res.json()["charged"] is False
    assert res.json()["transaction"] is None
