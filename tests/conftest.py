# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from datetime import UTC, datetime, timedelta
from itertools import count

import pytest

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from kohliverse.db.session import Base
from kohliverse.db.session import get_db as app_get_session
from kohliverse.main import app as fastapi_app
from kohliverse.models import Post, User
from kohliverse.ranking.submission import extract_video, fingerprint

TEST_DB_URL = "sqlite://"
NOW = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)

_VIDEO_COUNTER = count(1)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # pysqlite needs explicit BEGIN for SAVEPOINT to behave.
    @event.listens_for(engine, "connect")
    def _disable_pysqlite_begin(dbapi_connection, connection_record) -> None:  # pragma: no cover
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _emit_begin(conn) -> None:  # pragma: no cover
        conn.exec_driver_sql("BEGIN")

    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    connection = engine.connect()
    transaction = connection.begin()
    session = Session(
        bind=connection,
        autoflush=False,
        expire_on_commit=False,
        join_transaction_mode="create_savepoint",
    )
    try:
        yield session
    finally:
        session.close()
        if transaction.is_active:
            transaction.rollback()
        connection.close()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def clock() -> Callable[[], datetime]:
    """Frozen clock shared by services under test."""
    return lambda: NOW


@pytest.fixture()
def headers_for() -> Callable[..., dict[str, str]]:
    """Return a helper building identity headers for a user id."""

    def _headers(user_id: str, name: str | None = None) -> dict[str, str]:
        headers = {"X-User-Id": user_id}
        if name:
            headers["X-User-Name"] = name
        return headers

    return _headers


@pytest.fixture()
def author(db_session: Session) -> User:
    user = User(id="author-1", username="cover_drive")
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture()
def make_post(db_session: Session, author: User) -> Callable[..., Post]:
    """Return a factory persisting posts with explicit counters and age."""

    def _make(
        *,
        title: str = "Chase master",
        upvotes: int = 0,
        downvotes: int = 0,
        created_at: datetime | None = None,
        author_id: str | None = None,
        url: str | None = None,
    ) -> Post:
        video_url = url or f"https://www.youtube.com/watch?v=vid{next(_VIDEO_COUNTER):08d}"
        video = extract_video(video_url)
        post = Post(
            author_id=author_id or author.id,
            author_name=author.username,
            title=title,
            tags=[],
            video_url=video_url,
            url_fingerprint=fingerprint(video_url),
            platform=video.platform.value,
            video_id=video.video_id,
            embed_url=video.embed_url,
            thumbnail_url=video.thumbnail_url,
            upvotes=upvotes,
            downvotes=downvotes,
            created_at=created_at or NOW - timedelta(hours=1),
            hot_score=0.0,
        )
        db_session.add(post)
        db_session.commit()
        return post

    return _make


@pytest.fixture()
def test_post(make_post: Callable[..., Post]) -> Post:
    """Create a baseline post with no votes."""
    return make_post()
