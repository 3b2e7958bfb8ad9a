"""
Own-account routes under /api/me
"""

import pytest

from tests.conftest import auth, post_reply, post_tweet


class TestMe:

    @pytest.mark.asyncio
    async def test_profile_hides_id_and_password(self, client, sign_up):
        _, token = await sign_up("ada")
        resp = await client.get("/api/me", headers=auth(token))

        data = resp.json()["data"]
        assert data["userName"] == "ada"
        assert data["bio"] == "hello from ada"
        assert data["birthday"] == "1990-05-17"
        assert "createdAt" in data and "updatedAt" in data
        assert "id" not in data and "password" not in data

    @pytest.mark.asyncio
    async def test_tweets_newest_first(self, client, sign_up):
        _, token = await sign_up("ada")
        for text in ("first", "second", "third"):
            await post_tweet(client, token, text)

        resp = await client.get("/api/me/tweets", headers=auth(token))
        assert [t["content"] for t in resp.json()["data"]] == ["third", "second", "first"]

    @pytest.mark.asyncio
    async def test_replies_and_tweets_with_replies(self, client, sign_up):
        _, ada = await sign_up("ada")
        _, grace = await sign_up("grace")
        tweet = await post_tweet(client, ada, "hello")
        await post_reply(client, grace, tweet["id"], "hi ada")
        await post_reply(client, grace, tweet["id"], "still there?")

        replies = await client.get("/api/me/replies", headers=auth(grace))
        assert [r["content"] for r in replies.json()["data"]] == ["still there?", "hi ada"]

        threads = await client.get("/api/me/tweets-and-replies", headers=auth(ada))
        [thread] = threads.json()["data"]
        assert thread["content"] == "hello"
        assert [r["content"] for r in thread["replies"]] == ["still there?", "hi ada"]

    @pytest.mark.asyncio
    async def test_favorites_include_tweet_content(self, client, sign_up):
        _, ada = await sign_up("ada")
        tweet = await post_tweet(client, ada, "worth keeping")
        await client.post(f"/api/tweets/{tweet['id']}/favorites", headers=auth(ada))

        resp = await client.get("/api/me/favorites", headers=auth(ada))
        [fav] = resp.json()["data"]
        assert fav["tweetId"] == tweet["id"]
        assert fav["tweet"] == {"content": "worth keeping"}

    @pytest.mark.asyncio
    async def test_followers_and_following_full_projection(self, client, sign_up):
        ada_id, ada = await sign_up("ada")
        grace_id, grace = await sign_up("grace")
        await post_tweet(client, grace, "grace tweets")
        await client.post(f"/api/users/{ada_id}/follow", headers=auth(grace))

        followers = (await client.get("/api/me/followers", headers=auth(ada))).json()["data"]
        assert [u["id"] for u in followers] == [grace_id]
        assert followers[0]["email"] == "grace@example.com"
        assert [t["content"] for t in followers[0]["tweets"]] == ["grace tweets"]
        assert followers[0]["replies"] == []
        assert "password" not in followers[0]

        following = (await client.get("/api/me/following", headers=auth(grace))).json()["data"]
        assert [u["userName"] for u in following] == ["ada"]


class TestAccountUpdates:

    @pytest.mark.asyncio
    async def test_change_username(self, client, sign_up):
        _, token = await sign_up("ada")
        resp = await client.put(
            "/api/me/change-username", json={"userName": "countess"}, headers=auth(token)
        )

        assert resp.status_code == 200
        assert resp.json()["message"] == "username was updated successfully."
        assert resp.json()["data"]["userName"] == "countess"
        assert "id" not in resp.json()["data"]

    @pytest.mark.asyncio
    async def test_change_username_to_taken_name(self, client, sign_up):
        _, ada = await sign_up("ada")
        await sign_up("grace")
        resp = await client.put(
            "/api/me/change-username", json={"userName": "grace"}, headers=auth(ada)
        )

        assert resp.status_code == 409
        assert resp.json()["error"] == "userName already exists!"
        me = await client.get("/api/me", headers=auth(ada))
        assert me.json()["data"]["userName"] == "ada"

    @pytest.mark.asyncio
    async def test_change_password_then_sign_in(self, client, sign_up):
        _, token = await sign_up("ada")
        resp = await client.put(
            "/api/me/change-password",
            json={"oldPassword": "secret-pw", "newPassword": "new-secret"},
            headers=auth(token),
        )
        assert resp.status_code == 200
        assert resp.json()["message"] == "password was updated successfully."
        assert "password" not in resp.json()["data"]

        old = await client.post("/api/sign-in", json={"userName": "ada", "password": "secret-pw"})
        new = await client.post("/api/sign-in", json={"userName": "ada", "password": "new-secret"})
        assert old.status_code == 401
        assert new.status_code == 200

    @pytest.mark.asyncio
    async def test_change_password_wrong_old_password(self, client, sign_up):
        _, token = await sign_up("ada")
        resp = await client.put(
            "/api/me/change-password",
            json={"oldPassword": "guess", "newPassword": "new-secret"},
            headers=auth(token),
        )
        assert resp.status_code == 401
        assert resp.json()["error"] == "Incorrect old password."

    @pytest.mark.asyncio
    async def test_change_password_to_same_value(self, client, sign_up):
        _, token = await sign_up("ada")
        resp = await client.put(
            "/api/me/change-password",
            json={"oldPassword": "secret-pw", "newPassword": "secret-pw"},
            headers=auth(token),
        )
        assert resp.status_code == 400
        assert resp.json()["error"] == "New password must be different from Old password!"

    @pytest.mark.asyncio
    async def test_change_bio(self, client, sign_up):
        _, token = await sign_up("ada")
        resp = await client.put("/api/me/change-bio", json={"bio": "analyst"}, headers=auth(token))

        assert resp.status_code == 200
        assert resp.json()["data"]["bio"] == "analyst"
        assert resp.json()["message"] == "bio was updated successfully."

    @pytest.mark.asyncio
    async def test_updates_require_session(self, client):
        resp = await client.put("/api/me/change-bio", json={"bio": "analyst"})
        assert resp.status_code == 401
