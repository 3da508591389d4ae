"""HTTP surface, end to end on SQLite."""

import pytest
from httpx import AsyncClient


async def _create_message(client: AsyncClient, **body) -> dict:
    response = await client.post("/message", json=body)
    assert response.status_code == 200
    return response.json()


@pytest.mark.asyncio
@pytest.mark.parametrize("method", ["GET", "POST", "PUT", "DELETE"])
async def test_users_placeholders(client: AsyncClient, method: str):
    response = await client.request(method, "/users")
    assert response.status_code == 204
    assert response.content == b""


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/feed", "/message"])
@pytest.mark.parametrize("method", ["PUT", "DELETE"])
async def test_update_and_delete_are_noops(client: AsyncClient, path: str, method: str):
    message = await _create_message(client, text="keep me")

    response = await client.request(method, path, json={"id": message["id"], "text": "changed"})

    assert response.status_code == 204
    assert (await client.get(f"/message/{message['id']}")).json()["text"] == "keep me"


@pytest.mark.asyncio
async def test_create_and_fetch_message(client: AsyncClient):
    created = await _create_message(client, text="hi", messageType="FEED")

    assert created["id"]
    assert created["messageType"] == "FEED"
    assert created["text"] == "hi"
    assert created["replyIds"] is None
    assert created["audit"]["createdOn"] is not None

    fetched = await client.get(f"/message/{created['id']}")
    assert fetched.status_code == 200
    assert fetched.json() == created


@pytest.mark.asyncio
async def test_missing_message_is_empty_200(client: AsyncClient):
    response = await client.get("/message/does-not-exist")
    assert response.status_code == 200
    assert response.content == b""


@pytest.mark.asyncio
async def test_list_messages(client: AsyncClient):
    ids = {(await _create_message(client, text=str(i)))["id"] for i in range(3)}

    response = await client.get("/message")

    assert response.status_code == 200
    assert {m["id"] for m in response.json()} == ids


@pytest.mark.asyncio
async def test_reply_appends_to_parent(client: AsyncClient):
    parent = await _create_message(client, text="parent", messageType="FEED")

    first = await client.put(f"/message/{parent['id']}/reply", json={"text": "one", "messageType": "REPLY"})
    second = await client.put(f"/message/{parent['id']}/reply", json={"text": "two", "messageType": "REPLY"})

    assert first.status_code == 200
    assert second.status_code == 200
    body = second.json()
    assert body["id"] == parent["id"]
    assert [r["text"] for r in body["replyIds"]] == ["one", "two"]
    assert all(r["id"] for r in body["replyIds"])

    fetched = (await client.get(f"/message/{parent['id']}")).json()
    assert [r["id"] for r in fetched["replyIds"]] == [r["id"] for r in body["replyIds"]]


@pytest.mark.asyncio
async def test_reply_to_missing_parent(client: AsyncClient):
    response = await client.put("/message/missing/reply", json={"text": "orphan"})

    assert response.status_code == 200
    assert response.content == b""
    # the reply itself was still saved
    listed = (await client.get("/message")).json()
    assert [m["text"] for m in listed] == ["orphan"]


@pytest.mark.asyncio
async def test_reply_to_itself_is_rejected(client: AsyncClient):
    parent = await _create_message(client, text="parent")

    response = await client.put(f"/message/{parent['id']}/reply", json={"id": parent["id"], "text": "loop"})

    assert response.status_code == 422
    assert response.json()["detail"]["error"]["code"] == "INVALID_REPLY"


@pytest.mark.asyncio
async def test_reply_references_need_ids(client: AsyncClient):
    response = await client.post("/message", json={"text": "x", "replyIds": [{"text": "no id"}]})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_message_with_existing_reply_references(client: AsyncClient):
    reply = await _create_message(client, text="r")

    created = await _create_message(client, text="p", replyIds=[{"id": reply["id"]}, {"id": "gone"}])

    assert [r["id"] for r in created["replyIds"]] == [reply["id"]]
    assert created["replyIds"][0]["text"] == "r"


@pytest.mark.asyncio
async def test_create_feed_persists_message_first(client: AsyncClient):
    response = await client.post("/feed", json={"message": {"text": "hello", "messageType": "FEED"}})

    assert response.status_code == 200
    feed = response.json()
    assert feed["id"]
    message_id = feed["message"]["id"]
    assert message_id

    fetched = await client.get(f"/feed/{feed['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["message"]["id"] == message_id

    message = await client.get(f"/message/{message_id}")
    assert message.status_code == 200
    assert message.json()["text"] == "hello"


@pytest.mark.asyncio
async def test_create_feed_requires_message(client: AsyncClient):
    response = await client.post("/feed", json={})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_list_feeds_and_missing_feed(client: AsyncClient):
    created = [
        (await client.post("/feed", json={"message": {"text": str(i)}})).json()["id"] for i in range(2)
    ]

    listed = (await client.get("/feed")).json()
    assert {f["id"] for f in listed} == set(created)

    missing = await client.get("/feed/nope")
    assert missing.status_code == 200
    assert missing.content == b""


@pytest.mark.asyncio
async def test_actor_header_is_recorded_in_audit(client: AsyncClient):
    created = (await client.post("/message", json={"id": "m1", "text": "v1"}, headers={"X-Actor": "alice"})).json()
    updated = (await client.post("/message", json={"id": "m1", "text": "v2"}, headers={"X-Actor": "bob"})).json()

    assert created["audit"]["createdBy"] == "alice"
    assert updated["audit"]["createdBy"] == "alice"
    assert updated["audit"]["modifiedBy"] == "bob"
    assert updated["audit"]["createdOn"] == created["audit"]["createdOn"]
