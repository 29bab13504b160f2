# tests/unit/test_api.py
"""
HTTP surface tests: routing, auth header handling and error envelopes
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.app.database import get_db
from src.app.main import create_app
from src.infrastructure.repositories import ChannelRepository, LikeRepository

PREFIX = "/api/v1"


@pytest_asyncio.fixture
async def client(session_factory):
    app = create_app()

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


def hyphenate(value):
    return f"{value[:8]}-{value[8:12]}-{value[12:16]}-{value[16:20]}-{value[20:]}"


# ============================================================================
# Reactions
# ============================================================================


@pytest.mark.asyncio
async def test_like_returns_counters(client, video, tokens):
    response = await client.post(
        f"{PREFIX}/video/video_screen",
        params={"video_id": video.id, "action": "like"},
        headers=bearer(tokens["alice"]),
    )

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "message": "Video liked",
        "likes": 1,
        "dislikes": 0,
    }


@pytest.mark.asyncio
async def test_hyphenated_id_is_accepted(client, session_factory, users, video, tokens):
    response = await client.post(
        f"{PREFIX}/video/video_screen",
        params={"video_id": hyphenate(video.id), "action": "like"},
        headers=bearer(tokens["alice"]),
    )

    assert response.status_code == 200
    async with session_factory() as session:
        assert await LikeRepository(session).has_liked(video.id, users["alice"].id)


@pytest.mark.asyncio
async def test_like_without_token_is_401(client, video):
    response = await client.post(
        f"{PREFIX}/video/video_screen",
        params={"video_id": video.id, "action": "like"},
    )

    assert response.status_code == 401
    assert response.json() == {"success": False, "error": "Unauthorized"}


@pytest.mark.asyncio
async def test_expired_token_is_401(client, video, tokens):
    response = await client.post(
        f"{PREFIX}/video/video_screen",
        params={"video_id": video.id, "action": "like"},
        headers=bearer("token-expired"),
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_malformed_id_is_400(client, tokens):
    response = await client.post(
        f"{PREFIX}/video/video_screen",
        params={"video_id": "not-an-id", "action": "like"},
        headers=bearer(tokens["alice"]),
    )

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Video ID is invalid. Expected 32-character format."


@pytest.mark.asyncio
async def test_missing_id_is_400(client, tokens):
    response = await client.post(
        f"{PREFIX}/video/video_screen",
        params={"action": "like"},
        headers=bearer(tokens["alice"]),
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Video ID required"


@pytest.mark.asyncio
async def test_unknown_action_is_400(client, video, tokens):
    response = await client.post(
        f"{PREFIX}/video/video_screen",
        params={"video_id": video.id, "action": "share"},
        headers=bearer(tokens["alice"]),
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid action"


@pytest.mark.asyncio
async def test_missing_video_is_404(client, tokens):
    response = await client.post(
        f"{PREFIX}/video/video_screen",
        params={"video_id": "0" * 32, "action": "dislike"},
        headers=bearer(tokens["alice"]),
    )

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Video not found"}


# ============================================================================
# Views and comments
# ============================================================================


@pytest.mark.asyncio
async def test_increment_view_needs_no_login(client, video):
    first = await client.post(
        f"{PREFIX}/video/video_screen",
        params={"video_id": video.id, "action": "increment_view"},
    )
    second = await client.post(
        f"{PREFIX}/video/video_screen",
        params={"video_id": video.id, "action": "increment_view"},
    )

    assert first.json()["views"] == 1
    assert second.json() == {"success": True, "message": "View counted", "views": 2}


@pytest.mark.asyncio
async def test_comment_action(client, video, tokens):
    response = await client.post(
        f"{PREFIX}/video/video_screen",
        params={"video_id": video.id, "action": "comment"},
        headers=bearer(tokens["carol"]),
        json={"comment": "great video"},
    )

    assert response.status_code == 200
    assert response.json()["message"] == "Comment added"

    details = await client.get(f"{PREFIX}/video/details", params={"video_id": video.id})
    assert details.json()["video"]["comments_count"] == 1


# ============================================================================
# Fetch
# ============================================================================


@pytest.mark.asyncio
async def test_fetch_reflects_viewer(client, video, tokens):
    await client.post(
        f"{PREFIX}/video/video_screen",
        params={"video_id": video.id, "action": "like"},
        headers=bearer(tokens["alice"]),
    )

    as_alice = await client.get(
        f"{PREFIX}/video/video_screen",
        params={"video_id": video.id},
        headers=bearer(tokens["alice"]),
    )
    anonymous = await client.get(
        f"{PREFIX}/video/video_screen", params={"video_id": video.id}
    )

    assert as_alice.json()["video"]["is_liked"] is True
    assert anonymous.json()["video"]["is_liked"] is False
    assert anonymous.json()["video"]["likes"] == 1


@pytest.mark.asyncio
async def test_home_feed(client, video, more_videos):
    response = await client.get(f"{PREFIX}/video/home_feed", params={"limit": 1})

    body = response.json()
    assert response.status_code == 200
    assert body["limit"] == 1
    assert [item["id"] for item in body["videos"]] == [video.id]


# ============================================================================
# Channels
# ============================================================================


@pytest.mark.asyncio
async def test_subscribe_via_channel_endpoint(client, session_factory, channel, tokens):
    response = await client.post(
        f"{PREFIX}/channel/subscription",
        params={"channel_id": channel.id, "action": "subscribe"},
        headers=bearer(tokens["carol"]),
    )

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "message": "Subscribed successfully",
        "subscriber_count": 6,
    }
    async with session_factory() as session:
        assert await ChannelRepository(session).get_subscriber_count(channel.id) == 6


@pytest.mark.asyncio
async def test_self_subscribe_is_400(client, channel, tokens):
    response = await client.post(
        f"{PREFIX}/channel/subscription",
        params={"channel_id": channel.id, "action": "subscribe"},
        headers=bearer(tokens["bob"]),
    )

    assert response.status_code == 400
    assert response.json() == {
        "success": False,
        "error": "You cannot subscribe to your own channel",
    }


@pytest.mark.asyncio
async def test_duplicate_subscribe_is_400(client, video, tokens):
    params = {"video_id": video.id, "action": "subscribe"}

    first = await client.post(
        f"{PREFIX}/video/video_screen", params=params, headers=bearer(tokens["carol"])
    )
    second = await client.post(
        f"{PREFIX}/video/video_screen", params=params, headers=bearer(tokens["carol"])
    )

    assert first.json()["subscriber_count"] == 6
    assert second.status_code == 400
    assert second.json()["error"] == "Already subscribed"


@pytest.mark.asyncio
async def test_channel_details(client, channel, video, tokens):
    response = await client.get(
        f"{PREFIX}/channel/details",
        params={"channel_id": channel.id},
        headers=bearer(tokens["alice"]),
    )

    body = response.json()
    assert body["channel"]["video_count"] == 1
    assert body["channel"]["is_subscribed"] is False


@pytest.mark.asyncio
async def test_channel_details_missing(client):
    response = await client.get(
        f"{PREFIX}/channel/details", params={"channel_id": "1" * 32}
    )

    assert response.status_code == 404
    assert response.json()["error"] == "Channel not found"


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] in ("healthy", "degraded")


@pytest.mark.asyncio
async def test_home_feed_tolerates_non_numeric_limit(client, video, more_videos):
    response = await client.get(
        f"{PREFIX}/video/home_feed", params={"limit": "abc", "category": "Music"}
    )

    body = response.json()
    assert response.status_code == 200
    assert body["limit"] == 1
    assert body["category"] == "Music"
    assert [item["id"] for item in body["shorts"]] == [more_videos["short"].id]
