"""Shared fixtures: temporary SQLite databases, a controllable clock and an API client."""

import tempfile
import time
from collections.abc import Generator
from datetime import timedelta
from pathlib import Path
from unittest.mock import patch

from fastapi.testclient import TestClient
from pydantic import SecretStr
from sqlalchemy.orm import Session, sessionmaker

from rollcall.core.database import get_db, init_db, make_engine
from rollcall.core.tokens import TokenService, get_token_service

TEST_SECRET = SecretStr("test-secret-key-that-is-long-enough-for-hs256")


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: float | None = None) -> None:
        self.now = time.time() if start is None else start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class DatabaseTestMixin:
    """
    Gives each test a fresh file-backed SQLite database (threads share it)
    and a cheap bcrypt cost so hashing does not dominate the run.
    """

    def setUp(self) -> None:
        super().setUp()
        self._tmp = tempfile.TemporaryDirectory()
        db_path = Path(self._tmp.name) / "rollcall-test.db"
        self.engine = make_engine(f"sqlite:///{db_path}")
        init_db(self.engine)
        self.Session = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        rounds = patch("rollcall.core.security.BCRYPT_ROUNDS", 4)
        rounds.start()
        self.addCleanup(rounds.stop)

    def tearDown(self) -> None:
        self.engine.dispose()
        self._tmp.cleanup()
        super().tearDown()


class ApiTestMixin(DatabaseTestMixin):
    """TestClient wired to the temporary database and a token service on a FakeClock."""

    def setUp(self) -> None:
        super().setUp()
        from rollcall.main import app

        self.app = app
        self.clock = FakeClock()
        self.tokens = TokenService(TEST_SECRET, ttl=timedelta(hours=1), clock=self.clock)

        def _get_db() -> Generator[Session, None, None]:
            db = self.Session()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = _get_db
        app.dependency_overrides[get_token_service] = lambda: self.tokens
        self.addCleanup(app.dependency_overrides.clear)
        self.client = TestClient(app, raise_server_exceptions=False)

    def register(self, **overrides: str):
        body = {
            "username": "alice",
            "name": "Alice",
            "email": "a@x.com",
            "password": "secret123",
        }
        body.update(overrides)
        return self.client.post("/api/users/register", json=body)

    def login(self, email: str = "a@x.com", password: str = "secret123"):
        return self.client.post("/api/users/login", json={"email": email, "password": password})

    def auth_headers(self, token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}
