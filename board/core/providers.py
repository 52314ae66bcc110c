# board/core/providers.py
"""
BoardService가 사용하는 외부 협력 객체(시계, ID 생성기) 구현.
테스트에서는 같은 인터페이스(now / new_id)를 가진 가짜 객체로 교체할 수 있습니다.
"""
import threading
import uuid
from datetime import datetime
from typing import Optional

from board.utils.datetime_utils import DateTimeUtils


class SystemClock:
    """
    UTC 현재 시간을 제공하는 시계.
    시스템 시간이 뒤로 조정되더라도 같은 인스턴스가 반환하는 값은 줄어들지 않습니다.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._last: Optional[datetime] = None

    def now(self) -> datetime:
        with self._lock:
            current = DateTimeUtils.now()
            if self._last is not None and current < self._last:
                current = self._last
            self._last = current
            return current


class UuidGenerator:
    """uuid4 기반의 충돌 없는 문자열 ID 생성기."""

    def new_id(self) -> str:
        return str(uuid.uuid4())
