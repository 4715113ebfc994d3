from datetime import datetime
import pytest

@pytest.mark.asyncio
@pytest.mark.integration
async def test_owner_can_update_thread(client, owner, create_thread):
	thread = await create_thread(owner)
	resp = await client.put(f"/api/v1/threads/{thread['id']}",
	                        json={"title": "New Title", "body": "new body"}, headers=owner.headers)
	assert resp.status_code == 200, resp.text
	updated = resp.json()['thread']
	assert updated['title'] == 'New Title'
	assert updated['body'] == 'new body'
	assert updated['user_id'] == thread['user_id']
	assert updated['id'] == thread['id']
	assert datetime.fromisoformat(updated['updated_at']) > datetime.fromisoformat(thread['updated_at'])
	assert updated['created_at'] == thread['created_at']

@pytest.mark.asyncio
@pytest.mark.integration
async def test_partial_update_keeps_other_fields(client, owner, create_thread):
	thread = await create_thread(owner, title="keep me", body="old body")
	resp = await client.put(f"/api/v1/threads/{thread['id']}", json={"body": "fresh body"}, headers=owner.headers)
	assert resp.status_code == 200
	assert resp.json()['thread']['title'] == 'keep me'
	assert resp.json()['thread']['body'] == 'fresh body'

@pytest.mark.asyncio
@pytest.mark.integration
async def test_empty_update_changes_nothing(client, owner, create_thread):
	thread = await create_thread(owner)
	resp = await client.put(f"/api/v1/threads/{thread['id']}", json={}, headers=owner.headers)
	assert resp.status_code == 200
	assert (resp.json()['thread']['title'], resp.json()['thread']['body']) == (thread['title'], thread['body'])

@pytest.mark.asyncio
@pytest.mark.integration
async def test_update_rejects_empty_field(client, owner, create_thread):
	thread = await create_thread(owner)
	resp = await client.put(f"/api/v1/threads/{thread['id']}", json={"title": ""}, headers=owner.headers)
	assert resp.status_code == 400
	assert resp.json()['detail'] == 'required validation failed on title'
	shown = await client.get(f"/api/v1/threads/{thread['id']}")
	assert shown.json()['thread'] == thread

@pytest.mark.asyncio
@pytest.mark.integration
async def test_non_owner_cannot_update(client, owner, stranger, create_thread):
	thread = await create_thread(owner)
	resp = await client.put(f"/api/v1/threads/{thread['id']}",
	                        json={"title": "hijacked", "body": "hijacked"}, headers=stranger.headers)
	assert resp.status_code == 403
	shown = await client.get(f"/api/v1/threads/{thread['id']}")
	assert shown.json()['thread'] == thread

@pytest.mark.asyncio
@pytest.mark.integration
async def test_anonymous_cannot_update(client, owner, create_thread):
	thread = await create_thread(owner)
	resp = await client.put(f"/api/v1/threads/{thread['id']}", json={"title": "x", "body": "y"})
	assert resp.status_code == 401

@pytest.mark.asyncio
@pytest.mark.integration
async def test_update_missing_thread(client, owner):
	resp = await client.put('/api/v1/threads/424242', json={"title": "x", "body": "y"}, headers=owner.headers)
	assert resp.status_code == 404
