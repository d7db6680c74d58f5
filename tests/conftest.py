from datetime import UTC, datetime
from pathlib import Path

import pytest

from civic_sense.models.post import Post
from civic_sense.models.user import User
from civic_sense.services.auth import AuthService
from civic_sense.services.comment import CommentService
from civic_sense.services.like import LikeService
from civic_sense.services.news import NewsService
from civic_sense.services.post import PostService
from civic_sense.services.reel import ReelService
from civic_sense.services.report import ReportService
from civic_sense.services.share import ShareService
from civic_sense.services.user import UserService
from civic_sense.store import JsonStore

TEST_JWT_SECRET = "test-secret"


# Environment fixtures
@pytest.fixture(autouse=True)
def data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    directory = tmp_path / "data"
    monkeypatch.setenv("DATA_DIR", str(directory))
    monkeypatch.setenv("JWT_SECRET", TEST_JWT_SECRET)
    monkeypatch.setenv("RATE_LIMIT_ENABLED", "false")
    monkeypatch.setenv("NEWS_API_URL", "https://news.test/v2/top-headlines")
    monkeypatch.delenv("LOCK_TIMEOUT", raising=False)
    monkeypatch.delenv("LOCK_STALE_AFTER", raising=False)
    monkeypatch.delenv("NEWS_API_KEY", raising=False)
    monkeypatch.delenv("NEWS_COUNTRY", raising=False)
    return directory


# Service fixtures
@pytest.fixture
def auth_service() -> AuthService:
    return AuthService()


@pytest.fixture
def comment_service() -> CommentService:
    return CommentService()


@pytest.fixture
def like_service() -> LikeService:
    return LikeService()


@pytest.fixture
def news_service() -> NewsService:
    return NewsService()


@pytest.fixture
def post_service() -> PostService:
    return PostService()


@pytest.fixture
def reel_service() -> ReelService:
    return ReelService()


@pytest.fixture
def report_service() -> ReportService:
    return ReportService()


@pytest.fixture
def share_service() -> ShareService:
    return ShareService()


@pytest.fixture
def user_service() -> UserService:
    return UserService()


# Test data fixtures
def make_user(name: str, index: int = 0) -> User:
    return User(
        name=name,
        email=f"{name}@example.com",
        pincode="560001",
        phone=f"98450{index:05d}",
        gender="female",
        submitted_at=datetime.now(UTC),
    )


@pytest.fixture
def registered_users() -> list[User]:
    users = [
        make_user(name, index)
        for index, name in enumerate(("alice", "bob", "carol"))
    ]
    JsonStore("users").replace_all(
        [user.model_dump(mode="json", by_alias=True) for user in users]
    )
    return users


@pytest.fixture
def test_post() -> Post:
    post = Post(
        id="p1",
        title="Clean-up drive this Sunday",
        excerpt="Join us at the lake front at 7am.",
        author="Ward 12 Committee",
        date="2026-10-18",
    )
    JsonStore("posts").replace_all([post.model_dump(mode="json", by_alias=True)])
    return post
