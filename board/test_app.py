# board/test_app.py
"""
애플리케이션 팩토리(create_app) 테스트
"""

import logging

import pytest

from board import create_app
from board.stores.memory_store import InMemoryEntityStore


def test_testing_config_uses_memory_stores():
    app = create_app('testing')
    board_service = app.services['board']

    assert app.testing
    assert isinstance(board_service.post_store, InMemoryEntityStore)
    assert isinstance(board_service.comment_store, InMemoryEntityStore)
    assert board_service.post_store is not board_service.comment_store

def test_unknown_store_backend(monkeypatch):
    from board.core.config import TestingConfig
    monkeypatch.setattr(TestingConfig, 'STORE_BACKEND', 'sqlite')

    with pytest.raises(ValueError):
        create_app('testing')

def test_unknown_route_is_not_internal_error(client):
    assert client.get('/api/unknown').status_code == 404

def test_invalid_token_is_rejected(client):
    res = client.post('/api/posts/', json={"title": "A", "body": "B", "image": ""},
                      headers={"Authorization": "Bearer not-a-token"})
    assert res.status_code == 422

def test_testing_config_still_configures_logging(monkeypatch):
    """debug 가 아니면 testing 환경에서도 로깅 설정을 적용해야 함"""
    calls = []
    monkeypatch.setattr(logging, 'basicConfig', lambda **kwargs: calls.append(kwargs))

    app = create_app('testing')

    assert not app.debug
    assert len(calls) == 1
    assert calls[0]['level'] == app.config['LOG_LEVEL']
