# board/conftest.py
"""
테스트 공용 fixture 모음

- app / client: 메모리 저장소를 사용하는 testing 설정의 Flask 앱
- auth_headers: 사용자 ID로 JWT Authorization 헤더를 만들어 주는 팩토리
- service: 가짜 시계/ID 생성기를 주입한 BoardService
"""

from datetime import datetime, timedelta, timezone

import pytest
from flask_jwt_extended import create_access_token

from board import create_app
from board.services.board_service import BoardService
from board.stores.memory_store import InMemoryEntityStore


class FakeClock:
    """호출할 때마다 1초씩 증가하는 시계."""

    def __init__(self, start=None):
        self.current = start or datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)

    def now(self):
        value = self.current
        self.current = self.current + timedelta(seconds=1)
        return value


class SequentialIdGenerator:
    """prefix-1, prefix-2 ... 형식의 예측 가능한 ID 생성기."""

    def __init__(self, prefix='id'):
        self.prefix = prefix
        self.counter = 0

    def new_id(self):
        self.counter += 1
        return f"{self.prefix}-{self.counter}"


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def service(clock):
    return BoardService(
        post_store=InMemoryEntityStore('posts'),
        comment_store=InMemoryEntityStore('comments'),
        clock=clock,
        id_generator=SequentialIdGenerator(),
    )


@pytest.fixture
def app(service):
    app = create_app('testing', board_service=service)
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers(app):
    def _make(user_id):
        with app.app_context():
            token = create_access_token(identity=user_id)
        return {"Authorization": f"Bearer {token}"}
    return _make
