# board/stores/memory_store.py
import copy
import logging
import threading
from dataclasses import replace
from typing import Callable, Dict, List, Optional, Tuple

from board.stores.base import BoardStorage, EntityStore, StoreTransaction, R, T

logger = logging.getLogger(__name__)


class InMemoryEntityStore(EntityStore[T]):
    """
    프로세스 메모리에 레코드를 보관하는 저장소. (개발/테스트 기본값)

    - 저장/조회 시 레코드를 복사하므로, 호출자가 반환받은 객체를 수정해도
      insert 하기 전까지 저장된 상태는 바뀌지 않습니다.
    - values()는 ID 오름차순으로 정렬해 반환합니다.
    """

    def __init__(self, name: str = 'entities'):
        self.name = name
        self._records: Dict[str, T] = {}
        self.lock = threading.RLock()

    def get(self, entity_id: str) -> Optional[T]:
        with self.lock:
            record = self._records.get(entity_id)
            return copy.deepcopy(record) if record is not None else None

    def insert(self, entity_id: str, record: T) -> None:
        with self.lock:
            self._records[entity_id] = copy.deepcopy(record)

    def remove(self, entity_id: str) -> Optional[T]:
        with self.lock:
            return self._records.pop(entity_id, None)

    def values(self) -> List[T]:
        with self.lock:
            return [copy.deepcopy(self._records[key]) for key in sorted(self._records)]

    def __len__(self) -> int:
        with self.lock:
            return len(self._records)

    def __contains__(self, entity_id: str) -> bool:
        with self.lock:
            return entity_id in self._records


# 반영 시점의 현재 레코드(없으면 None)를 받아 새 레코드를 돌려주는 함수. None 이면 삭제.
Mutation = Callable[[Optional[T]], Optional[T]]


class _MemoryTransaction(StoreTransaction):
    """쓰기를 모아 두었다가 commit() 에서 한꺼번에 반영하는 메모리 트랜잭션."""

    def __init__(self, post_store: InMemoryEntityStore, comment_store: InMemoryEntityStore):
        self.post_store = post_store
        self.comment_store = comment_store
        self._writes: List[Tuple[InMemoryEntityStore, str, Mutation]] = []

    def _check_read(self):
        if self._writes:
            raise RuntimeError("트랜잭션 안에서는 쓰기 이후에 읽을 수 없습니다.")

    def get_post(self, post_id):
        self._check_read()
        return self.post_store.get(post_id)

    def get_comment(self, comment_id):
        self._check_read()
        return self.comment_store.get(comment_id)

    def find_comments(self, post_id):
        self._check_read()
        # 게시글의 comments 목록 대신 댓글 저장소 전체를 확인합니다.
        return [c for c in self.comment_store.values() if c.post_id == post_id]

    def insert_post(self, post):
        self._writes.append((self.post_store, post.id, lambda current: post))

    def insert_comment(self, comment):
        self._writes.append((self.comment_store, comment.id, lambda current: comment))

    def increment_likes(self, post_id):
        def _increment(current):
            return replace(current, likes=current.likes + 1) if current else None
        self._writes.append((self.post_store, post_id, _increment))

    def append_comment_id(self, post_id, comment_id):
        def _append(current):
            return replace(current, comments=current.comments + [comment_id]) if current else None
        self._writes.append((self.post_store, post_id, _append))

    def set_comment_ids(self, post_id, comment_ids):
        def _set(current):
            return replace(current, comments=list(comment_ids)) if current else None
        self._writes.append((self.post_store, post_id, _set))

    def remove_post(self, post_id):
        self._writes.append((self.post_store, post_id, lambda current: None))

    def remove_comment(self, comment_id):
        self._writes.append((self.comment_store, comment_id, lambda current: None))

    def commit(self):
        """
        모아 둔 쓰기를 순서대로 반영합니다.
        중간에 실패하면 이미 반영한 쓰기를 역순으로 되돌린 뒤 예외를 다시 발생시킵니다.
        """
        applied = []
        try:
            for store, entity_id, mutate in self._writes:
                previous = store.get(entity_id)
                record = mutate(previous)
                if record is None:
                    store.remove(entity_id)
                else:
                    store.insert(entity_id, record)
                applied.append((store, entity_id, previous))
        except Exception as e:
            logger.error(f"메모리 트랜잭션 반영 실패, {len(applied)}건 롤백: {e}", exc_info=True)
            for store, entity_id, previous in reversed(applied):
                if previous is None:
                    store.remove(entity_id)
                else:
                    store.insert(entity_id, previous)
            raise


class MemoryBoardStorage(BoardStorage):
    """
    InMemoryEntityStore 한 쌍을 위한 원자적 작업 실행기.
    두 저장소의 락을 항상 게시글 -> 댓글 순서로 잡으므로, 같은 저장소를 공유하는
    모든 서비스 인스턴스의 쓰기 작업이 직렬화됩니다.
    """

    def __init__(self, post_store: InMemoryEntityStore, comment_store: InMemoryEntityStore):
        super().__init__(post_store, comment_store)

    def run_in_transaction(self, work: Callable[[StoreTransaction], R]) -> R:
        with self.post_store.lock, self.comment_store.lock:
            transaction = _MemoryTransaction(self.post_store, self.comment_store)
            result = work(transaction)
            transaction.commit()
            return result
