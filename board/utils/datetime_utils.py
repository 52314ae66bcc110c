# board/utils/datetime_utils.py
"""
게시판 전체에서 일관된 시간 처리를 위한 유틸리티 모듈

이 모듈의 목적:
1. 모든 타임스탬프를 UTC timezone-aware datetime으로 통일
2. Firestore 저장/조회 시 datetime 호환성 보장
3. ISO 포맷 문자열 파싱 통일
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional
from dateutil import parser as dateutil_parser

logger = logging.getLogger(__name__)


class DateTimeUtils:
    """시간 처리를 위한 중앙화된 유틸리티 클래스"""

    @staticmethod
    def now() -> datetime:
        """현재 시간을 UTC timezone-aware datetime으로 반환"""
        return datetime.now(timezone.utc)

    @staticmethod
    def parse_iso_datetime(iso_string: str) -> datetime:
        """
        ISO 포맷 문자열을 UTC datetime 객체로 파싱

        지원 포맷:
        - 2024-01-15T10:30:00Z
        - 2024-01-15T10:30:00+09:00
        - 2024-01-15T10:30:00.123456Z
        - 2024-01-15T10:30:00 (UTC로 간주)
        """
        if not iso_string:
            raise ValueError("빈 문자열은 파싱할 수 없습니다")
        try:
            if iso_string.endswith('Z'):
                iso_string = iso_string[:-1] + '+00:00'
            dt = dateutil_parser.isoparse(iso_string)
        except (ValueError, OverflowError) as e:
            logger.error(f"ISO datetime 파싱 실패: {iso_string} - {e}")
            raise ValueError(f"잘못된 ISO 날짜 형식입니다: {iso_string}")
        return DateTimeUtils.as_utc(dt)

    @staticmethod
    def as_utc(dt: datetime) -> datetime:
        """timezone-naive는 UTC로 간주하고, aware는 UTC로 변환"""
        if dt.tzinfo is None:
            return dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc)

    @staticmethod
    def to_datetime(value: Any) -> Optional[datetime]:
        """
        저장소에서 읽은 타임스탬프 값을 UTC datetime으로 변환합니다.

        - None -> None (updated_at 미설정 상태)
        - datetime (Firestore DatetimeWithNanoseconds 포함) -> UTC datetime
        - ISO 문자열 -> 파싱 후 UTC datetime
        """
        if value is None:
            return None
        if isinstance(value, datetime):
            return DateTimeUtils.as_utc(value)
        if isinstance(value, str):
            return DateTimeUtils.parse_iso_datetime(value)
        raise ValueError(f"datetime으로 변환할 수 없는 값입니다: {value!r} ({type(value)})")

    @staticmethod
    def for_firestore(obj: Any) -> Any:
        """
        Firestore 저장을 위해 객체의 datetime 필드를 UTC aware로 변환합니다.
        dict/list 내부는 재귀적으로 변환합니다.
        """
        if isinstance(obj, datetime):
            return DateTimeUtils.as_utc(obj)
        if isinstance(obj, dict):
            return {k: DateTimeUtils.for_firestore(v) for k, v in obj.items()}
        if isinstance(obj, list):
            return [DateTimeUtils.for_firestore(item) for item in obj]
        return obj

    @staticmethod
    def from_firestore(obj: Any) -> Any:
        """
        Firestore에서 읽은 데이터의 datetime 필드를 일반 UTC datetime으로 변환합니다.
        """
        if isinstance(obj, datetime):
            # DatetimeWithNanoseconds도 datetime의 하위 클래스
            return DateTimeUtils.as_utc(obj)
        if isinstance(obj, dict):
            return {k: DateTimeUtils.from_firestore(v) for k, v in obj.items()}
        if isinstance(obj, list):
            return [DateTimeUtils.from_firestore(item) for item in obj]
        return obj

