# board/core/test_providers.py
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

from board.core.providers import SystemClock, UuidGenerator


def test_clock_never_goes_backwards():
    """시스템 시간이 뒤로 조정되어도 이전 값보다 작아지지 않아야 함"""
    later = datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)
    earlier = later - timedelta(minutes=5)
    clock = SystemClock()

    with patch('board.core.providers.DateTimeUtils.now', side_effect=[later, earlier]):
        assert clock.now() == later
        assert clock.now() == later

def test_clock_returns_utc():
    assert SystemClock().now().tzinfo == timezone.utc

def test_uuid_generator_produces_distinct_ids():
    generator = UuidGenerator()
    ids = {generator.new_id() for _ in range(100)}
    assert len(ids) == 100
