# board/stores/base.py
"""
엔티티 저장소 공통 인터페이스.

게시글 저장소와 댓글 저장소는 각각 별도의 인스턴스이며 절대 합쳐지지 않습니다.
모든 연산은 단일 키에 대해 원자적으로 동작해야 합니다.
"""
from abc import ABC, abstractmethod
from typing import Callable, Generic, List, Optional, TypeVar

T = TypeVar('T')


class EntityStore(ABC, Generic[T]):
    """문자열 ID -> 레코드 매핑을 제공하는 저장소."""

    @abstractmethod
    def get(self, entity_id: str) -> Optional[T]:
        """ID에 해당하는 레코드를 반환합니다. 없으면 None."""

    @abstractmethod
    def insert(self, entity_id: str, record: T) -> None:
        """레코드를 저장합니다. 같은 ID의 기존 레코드는 덮어씁니다(upsert)."""

    @abstractmethod
    def remove(self, entity_id: str) -> Optional[T]:
        """레코드를 삭제하고 삭제된 레코드를 반환합니다. 없으면 None."""

    @abstractmethod
    def values(self) -> List[T]:
        """현재 저장된 모든 레코드를 ID 순서로 반환합니다."""

    def __contains__(self, entity_id: str) -> bool:
        return self.get(entity_id) is not None

    def __len__(self) -> int:
        return len(self.values())


R = TypeVar('R')


class StoreTransaction(ABC):
    """
    하나의 원자적 작업 안에서 게시글/댓글 저장소를 함께 읽고 쓰는 핸들.

    Firestore 트랜잭션과 같은 규칙을 따릅니다: 모든 읽기는 첫 쓰기보다 먼저
    수행해야 하며, 쓰기는 작업 함수가 끝난 뒤 한꺼번에 반영됩니다.
    """

    @abstractmethod
    def get_post(self, post_id: str):
        """게시글을 읽습니다. 없으면 None."""

    @abstractmethod
    def get_comment(self, comment_id: str):
        """댓글을 읽습니다. 없으면 None."""

    @abstractmethod
    def find_comments(self, post_id: str) -> list:
        """post_id 가 일치하는 모든 댓글을 읽습니다."""

    @abstractmethod
    def insert_post(self, post) -> None:
        """게시글 레코드 전체를 저장합니다."""

    @abstractmethod
    def insert_comment(self, comment) -> None:
        """댓글 레코드 전체를 저장합니다."""

    @abstractmethod
    def increment_likes(self, post_id: str) -> None:
        """반영 시점의 저장 값을 기준으로 likes 를 1 증가시킵니다."""

    @abstractmethod
    def append_comment_id(self, post_id: str, comment_id: str) -> None:
        """반영 시점의 저장 값을 기준으로 comments 끝에 ID를 추가합니다."""

    @abstractmethod
    def set_comment_ids(self, post_id: str, comment_ids: List[str]) -> None:
        """게시글의 comments 목록을 주어진 값으로 교체합니다."""

    @abstractmethod
    def remove_post(self, post_id: str) -> None:
        """게시글을 삭제합니다."""

    @abstractmethod
    def remove_comment(self, comment_id: str) -> None:
        """댓글을 삭제합니다."""


class BoardStorage(ABC):
    """게시글/댓글 저장소 한 쌍과, 두 저장소에 걸친 원자적 작업 실행기."""

    def __init__(self, post_store: EntityStore, comment_store: EntityStore):
        self.post_store = post_store
        self.comment_store = comment_store

    @abstractmethod
    def run_in_transaction(self, work: Callable[[StoreTransaction], R]) -> R:
        """
        work(transaction) 을 원자적으로 실행하고 그 반환값을 돌려줍니다.
        work 가 예외를 던지면 어떤 쓰기도 반영되지 않습니다.
        백엔드에 따라 work 가 재시도될 수 있으므로 저장소 외 부수효과를 두지 않아야 합니다.
        """
