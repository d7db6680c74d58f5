import asyncio
import json
import multiprocessing
import os
import sys
import time
from pathlib import Path

import pytest

from civic_sense.models.like import ContentType, LikeToggleResult
from civic_sense.models.post import Post
from civic_sense.models.user import User
from civic_sense.services.like import (
    ContentNotFoundError,
    LikeService,
    UnregisteredUserError,
)
from civic_sense.store import JsonStore
from civic_sense.utils.lock import FileLock, LockTimeoutError


def stored_post(post_id: str = "p1") -> dict:
    return JsonStore("posts").find(post_id)


def register(names: list[str]) -> None:
    JsonStore("users").replace_all([{"name": name} for name in names])


def toggle_in_child(post_id: str, user_id: str) -> None:
    LikeService()._toggle_like(ContentType.POST, post_id, user_id)


@pytest.mark.unit
class TestLikeService:
    async def test_like_scenario(
        self, like_service: LikeService, registered_users: list[User], test_post: Post
    ):
        # Act & Assert
        result = await like_service.toggle_like(ContentType.POST, "p1", "alice")
        assert result == LikeToggleResult(likes=1, liked=True)
        assert stored_post()["likedBy"] == ["alice"]

        result = await like_service.toggle_like(ContentType.POST, "p1", "bob")
        assert result == LikeToggleResult(likes=2, liked=True)

        result = await like_service.toggle_like(ContentType.POST, "p1", "alice")
        assert result == LikeToggleResult(likes=1, liked=False)
        assert stored_post()["likedBy"] == ["bob"]
        assert stored_post()["likes"] == 1

    async def test_double_toggle_restores_state(
        self, like_service: LikeService, registered_users: list[User], test_post: Post
    ):
        # Arrange
        await like_service.toggle_like(ContentType.POST, "p1", "bob")
        before = stored_post()

        # Act
        await like_service.toggle_like(ContentType.POST, "p1", "alice")
        await like_service.toggle_like(ContentType.POST, "p1", "alice")

        # Assert
        assert stored_post() == before

    async def test_invariant_holds_after_toggle_sequence(
        self, like_service: LikeService, registered_users: list[User], test_post: Post
    ):
        for user_id in ["alice", "bob", "alice", "carol", "bob", "alice", "carol"]:
            await like_service.toggle_like(ContentType.POST, "p1", user_id)
            post = stored_post()
            assert post["likes"] == len(post["likedBy"])
            assert len(set(post["likedBy"])) == len(post["likedBy"])

        assert stored_post()["likedBy"] == ["alice"]

    async def test_toggle_heals_inconsistent_record(
        self, like_service: LikeService, registered_users: list[User]
    ):
        # Arrange
        JsonStore("posts").replace_all(
            [{"id": "p1", "title": "Legacy", "likes": 7, "likedBy": ["bob", "bob"]}]
        )

        # Act
        result = await like_service.toggle_like(ContentType.POST, "p1", "alice")

        # Assert
        assert result == LikeToggleResult(likes=2, liked=True)
        assert stored_post()["likedBy"] == ["bob", "alice"]

    async def test_toggle_on_record_without_liked_by(
        self, like_service: LikeService, registered_users: list[User]
    ):
        JsonStore("posts").replace_all([{"id": "p1", "title": "Legacy", "likes": 0}])

        result = await like_service.toggle_like(ContentType.POST, "p1", "carol")

        assert result == LikeToggleResult(likes=1, liked=True)

    async def test_unknown_item_raises_without_writing(
        self,
        like_service: LikeService,
        registered_users: list[User],
        test_post: Post,
        mocker,
    ):
        # Arrange
        replace_all = mocker.spy(JsonStore, "replace_all")
        before = JsonStore("posts").path.read_text()

        # Act & Assert
        with pytest.raises(ContentNotFoundError, match="Post not found"):
            await like_service.toggle_like(ContentType.POST, "pX", "alice")
        replace_all.assert_not_called()
        assert JsonStore("posts").path.read_text() == before
        assert not JsonStore("posts").lock_path.exists()

    async def test_unregistered_user_is_rejected_before_locking(
        self,
        like_service: LikeService,
        registered_users: list[User],
        test_post: Post,
        mocker,
    ):
        # Arrange
        acquire = mocker.spy(FileLock, "acquire")
        replace_all = mocker.spy(JsonStore, "replace_all")

        # Act & Assert
        with pytest.raises(UnregisteredUserError):
            await like_service.toggle_like(ContentType.POST, "p1", "mallory")
        acquire.assert_not_called()
        replace_all.assert_not_called()
        assert stored_post()["likes"] == 0

    async def test_user_matches_by_email_or_phone(
        self, like_service: LikeService, registered_users: list[User], test_post: Post
    ):
        alice = registered_users[0]

        by_email = await like_service.toggle_like(
            ContentType.POST, "p1", str(alice.email)
        )
        by_phone = await like_service.toggle_like(ContentType.POST, "p1", alice.phone)

        assert by_email.liked and by_phone.liked
        assert by_phone.likes == 2

    async def test_timeout_leaves_state_unchanged(
        self,
        like_service: LikeService,
        registered_users: list[User],
        test_post: Post,
        monkeypatch: pytest.MonkeyPatch,
    ):
        # Arrange
        monkeypatch.setenv("LOCK_TIMEOUT", "0.2")
        store = JsonStore("posts")
        store.lock_path.write_text(json.dumps({"pid": 1, "token": "other"}))
        before = store.path.read_text()

        # Act & Assert
        with pytest.raises(LockTimeoutError):
            await like_service.toggle_like(ContentType.POST, "p1", "alice")
        assert store.path.read_text() == before
        assert store.lock_path.exists()

    async def test_stale_lock_is_reclaimed(
        self, like_service: LikeService, registered_users: list[User], test_post: Post
    ):
        # Arrange
        store = JsonStore("posts")
        store.lock_path.write_text(json.dumps({"pid": 1, "token": "crashed"}))
        past = time.time() - 60
        os.utime(store.lock_path, (past, past))

        # Act
        result = await like_service.toggle_like(ContentType.POST, "p1", "alice")

        # Assert
        assert result == LikeToggleResult(likes=1, liked=True)
        assert not store.lock_path.exists()

    async def test_concurrent_toggles_by_distinct_users(
        self, like_service: LikeService, test_post: Post
    ):
        # Arrange
        users = [f"user{i}" for i in range(20)]
        register(users)

        # Act
        results = await asyncio.gather(
            *(
                like_service.toggle_like(ContentType.POST, "p1", user_id)
                for user_id in users
            )
        )

        # Assert
        assert all(result.liked for result in results)
        assert sorted(result.likes for result in results) == list(range(1, 21))
        post = stored_post()
        assert post["likes"] == 20
        assert sorted(post["likedBy"]) == sorted(users)

    async def test_concurrent_like_and_unlike_by_same_user(
        self, like_service: LikeService, registered_users: list[User], test_post: Post
    ):
        results = await asyncio.gather(
            *(
                like_service.toggle_like(ContentType.POST, "p1", "alice")
                for _ in range(10)
            )
        )

        assert sum(result.liked for result in results) == 5
        post = stored_post()
        assert post["likes"] == 0
        assert post["likedBy"] == []

    @pytest.mark.skipif(
        sys.platform == "win32", reason="fork start method not available"
    )
    def test_toggles_from_separate_processes(self, test_post: Post):
        # Arrange
        users = [f"citizen{i}" for i in range(8)]
        register(users)
        context = multiprocessing.get_context("fork")
        processes = [
            context.Process(target=toggle_in_child, args=("p1", user_id))
            for user_id in users
        ]

        # Act
        for process in processes:
            process.start()
        for process in processes:
            process.join(timeout=30)

        # Assert
        assert [process.exitcode for process in processes] == [0] * len(users)
        post = stored_post()
        assert post["likes"] == len(users)
        assert sorted(post["likedBy"]) == sorted(users)

    async def test_reel_and_comment_likes(
        self, like_service: LikeService, registered_users: list[User]
    ):
        # Arrange
        JsonStore("reels").replace_all([{"id": "r1", "title": "Rain harvesting"}])
        JsonStore("comments").replace_all([{"id": "c1", "content": "Count me in"}])

        # Act
        reel = await like_service.toggle_like(ContentType.REEL, "r1", "bob")
        comment = await like_service.toggle_like(ContentType.COMMENT, "c1", "bob")

        # Assert
        assert reel == comment == LikeToggleResult(likes=1, liked=True)
        with pytest.raises(ContentNotFoundError, match="Reel not found"):
            await like_service.toggle_like(ContentType.REEL, "p1", "bob")


@pytest.mark.unit
class TestLikeStatus:
    async def test_status_reflects_toggles(
        self, like_service: LikeService, registered_users: list[User], test_post: Post
    ):
        # Arrange
        await like_service.toggle_like(ContentType.POST, "p1", "alice")

        # Act
        alice = await like_service.get_like_status(ContentType.POST, "p1", "alice")
        bob = await like_service.get_like_status(ContentType.POST, "p1", "bob")
        anonymous = await like_service.get_like_status(ContentType.POST, "p1", None)

        # Assert
        assert (alice.likes, alice.liked) == (1, True)
        assert (bob.likes, bob.liked) == (1, False)
        assert anonymous.liked is False

    async def test_status_does_not_wait_for_lock(
        self, like_service: LikeService, test_post: Post
    ):
        JsonStore("posts").lock_path.write_text("{}")

        status = await like_service.get_like_status(ContentType.POST, "p1", "alice")

        assert status.likes == 0

    async def test_status_of_unknown_item(self, like_service: LikeService, data_dir: Path):
        with pytest.raises(ContentNotFoundError):
            await like_service.get_like_status(ContentType.POST, "pX", "alice")
