# board/stores/__init__.py
from .base import BoardStorage, EntityStore, StoreTransaction
from .memory_store import InMemoryEntityStore, MemoryBoardStorage
from .firestore_store import FirestoreEntityStore, FirestoreBoardStorage


def open_storage(post_store: EntityStore, comment_store: EntityStore) -> BoardStorage:
    """저장소 백엔드 종류에 맞는 원자적 작업 실행기를 생성합니다."""
    if isinstance(post_store, FirestoreEntityStore) and isinstance(comment_store, FirestoreEntityStore):
        return FirestoreBoardStorage(post_store, comment_store)
    if isinstance(post_store, InMemoryEntityStore) and isinstance(comment_store, InMemoryEntityStore):
        return MemoryBoardStorage(post_store, comment_store)
    raise TypeError(
        f"게시글/댓글 저장소는 같은 백엔드여야 합니다: {type(post_store).__name__}, {type(comment_store).__name__}"
    )


__all__ = [
    'BoardStorage', 'EntityStore', 'StoreTransaction',
    'InMemoryEntityStore', 'MemoryBoardStorage',
    'FirestoreEntityStore', 'FirestoreBoardStorage',
    'open_storage',
]
