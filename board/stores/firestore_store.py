# board/stores/firestore_store.py
from typing import Any, Callable, Dict, List, Optional

from firebase_admin import firestore

from board.stores.base import BoardStorage, EntityStore, StoreTransaction, R, T
from board.utils.datetime_utils import DateTimeUtils


class FirestoreEntityStore(EntityStore[T]):
    """
    Firestore 컬렉션 하나를 엔티티 저장소로 사용하는 구현.

    - 문서 ID = 엔티티 ID
    - 레코드는 to_dict()/from_dict() 로 직렬화하며, datetime 필드는
      DateTimeUtils 로 UTC 기준 변환을 거칩니다.
    """

    def __init__(self, collection_name: str,
                 from_dict: Callable[[Dict[str, Any]], T],
                 client: Any = None):
        self.db = client or firestore.client()
        self.collection_name = collection_name
        self.collection_ref = self.db.collection(collection_name)
        self._from_dict = from_dict

    def document(self, entity_id: str):
        return self.collection_ref.document(entity_id)

    def to_record(self, doc) -> T:
        return self._from_dict(DateTimeUtils.from_firestore(doc.to_dict()))

    def serialize(self, record: T) -> Dict[str, Any]:
        return DateTimeUtils.for_firestore(record.to_dict())

    def get(self, entity_id: str, transaction=None) -> Optional[T]:
        doc = self.document(entity_id).get(transaction=transaction)
        if not doc.exists:
            return None
        return self.to_record(doc)

    def insert(self, entity_id: str, record: T) -> None:
        self.document(entity_id).set(self.serialize(record))

    def remove(self, entity_id: str) -> Optional[T]:
        doc_ref = self.document(entity_id)
        doc = doc_ref.get()
        if not doc.exists:
            return None
        record = self.to_record(doc)
        doc_ref.delete()
        return record

    def values(self) -> List[T]:
        # 쿼리 결과는 기본적으로 문서 ID 오름차순입니다.
        docs = self.collection_ref.stream()
        return [self.to_record(doc) for doc in docs]


class _FirestoreTransaction(StoreTransaction):
    """firestore Transaction 위에서 두 컬렉션을 읽고 쓰는 핸들."""

    def __init__(self, transaction, post_store: FirestoreEntityStore, comment_store: FirestoreEntityStore):
        self.transaction = transaction
        self.post_store = post_store
        self.comment_store = comment_store

    def get_post(self, post_id):
        return self.post_store.get(post_id, transaction=self.transaction)

    def get_comment(self, comment_id):
        return self.comment_store.get(comment_id, transaction=self.transaction)

    def find_comments(self, post_id):
        # post_id 필드로 댓글 컬렉션 전체를 조회합니다. (게시글의 comments 목록은 사용하지 않음)
        query = self.comment_store.collection_ref.where('post_id', '==', post_id)
        return [self.comment_store.to_record(doc) for doc in query.stream(transaction=self.transaction)]

    def insert_post(self, post):
        self.transaction.set(self.post_store.document(post.id), self.post_store.serialize(post))

    def insert_comment(self, comment):
        self.transaction.set(self.comment_store.document(comment.id), self.comment_store.serialize(comment))

    def increment_likes(self, post_id):
        self.transaction.update(self.post_store.document(post_id), {'likes': firestore.Increment(1)})

    def append_comment_id(self, post_id, comment_id):
        self.transaction.update(self.post_store.document(post_id), {'comments': firestore.ArrayUnion([comment_id])})

    def set_comment_ids(self, post_id, comment_ids):
        # ArrayRemove 는 같은 값을 모두 지우므로, 첫 번째 항목만 뺀 목록을 직접 기록합니다.
        self.transaction.update(self.post_store.document(post_id), {'comments': list(comment_ids)})

    def remove_post(self, post_id):
        self.transaction.delete(self.post_store.document(post_id))

    def remove_comment(self, comment_id):
        self.transaction.delete(self.comment_store.document(comment_id))


class FirestoreBoardStorage(BoardStorage):
    """
    Firestore 트랜잭션으로 두 컬렉션에 걸친 작업을 원자적으로 실행합니다.
    여러 프로세스가 같은 게시글을 동시에 수정해도 트랜잭션 충돌 시 재시도되므로
    갱신이 유실되지 않습니다.
    """

    def __init__(self, post_store: FirestoreEntityStore, comment_store: FirestoreEntityStore):
        super().__init__(post_store, comment_store)
        self.db = post_store.db

    def run_in_transaction(self, work: Callable[[StoreTransaction], R]) -> R:
        transaction = self.db.transaction()

        @firestore.transactional
        def _run_in_transaction(transaction):
            return work(_FirestoreTransaction(transaction, self.post_store, self.comment_store))

        return _run_in_transaction(transaction)
