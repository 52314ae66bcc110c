# board/services/board_service.py

import logging
from dataclasses import replace
from typing import List

from board.core.exceptions import NotFoundError, ForbiddenError
from board.core.providers import SystemClock, UuidGenerator
from board.models.comment import Comment, CommentPayload
from board.models.post import Post, PostPayload
from board.stores import open_storage
from board.stores.base import EntityStore, StoreTransaction

logger = logging.getLogger(__name__)


class BoardService:
    """
    게시글/댓글 관련 비즈니스 로직을 담당하는 서비스 클래스.

    - 모든 공개 연산은 이 서비스를 통해서만 두 저장소에 접근합니다.
    - 존재 여부 -> 권한 확인 -> 저장소 쓰기 순서를 지키므로,
      실패한 요청은 어떤 레코드도 일부만 변경된 상태로 남기지 않습니다.
    - 쓰기 연산은 저장소 백엔드의 트랜잭션(Firestore 트랜잭션 / 메모리 락) 안에서
      읽기와 쓰기를 함께 수행하므로, 여러 워커가 같은 게시글을 동시에 수정해도
      갱신 유실(lost update)이 발생하지 않습니다.
    """

    def __init__(self, post_store: EntityStore[Post], comment_store: EntityStore[Comment],
                 clock=None, id_generator=None):
        self.storage = open_storage(post_store, comment_store)
        self.post_store = post_store
        self.comment_store = comment_store
        self.clock = clock or SystemClock()
        self.id_generator = id_generator or UuidGenerator()

    # ------------------------------------------------------------------
    # 내부 헬퍼
    # ------------------------------------------------------------------
    @staticmethod
    def _require_post(transaction: StoreTransaction, post_id: str) -> Post:
        post = transaction.get_post(post_id)
        if post is None:
            raise NotFoundError('post', post_id)
        return post

    @staticmethod
    def _require_comment(transaction: StoreTransaction, comment_id: str) -> Comment:
        comment = transaction.get_comment(comment_id)
        if comment is None:
            raise NotFoundError('comment', comment_id)
        return comment

    @staticmethod
    def _check_owner(kind: str, entity_id: str, recorded: str, caller: str) -> None:
        """기록된 작성자와 호출자가 값으로 같을 때만 통과합니다."""
        if recorded != caller:
            logger.warning(f"권한 없는 요청 거부 ({kind}_id: {entity_id}, caller: {caller})")
            raise ForbiddenError(kind, entity_id, caller)

    # ------------------------------------------------------------------
    # 조회
    # ------------------------------------------------------------------
    def list_posts(self) -> List[Post]:
        return self.post_store.values()

    def get_post(self, post_id: str) -> Post:
        post = self.post_store.get(post_id)
        if post is None:
            raise NotFoundError('post', post_id)
        return post

    def get_comments_on_post(self, post_id: str) -> List[Comment]:
        """
        게시글의 comments 목록 순서대로 댓글을 조회합니다.
        이미 삭제되어 찾을 수 없는 ID는 오류 없이 건너뜁니다.
        """
        post = self.get_post(post_id)
        comments = []
        for comment_id in post.comments:
            comment = self.comment_store.get(comment_id)
            if comment is not None:
                comments.append(comment)
        return comments

    # ------------------------------------------------------------------
    # 게시글 쓰기
    # ------------------------------------------------------------------
    def create_post(self, caller: str, payload: PostPayload) -> Post:
        """새로운 게시글을 생성하고 저장합니다."""
        def _create_in_transaction(transaction):
            post = Post(
                id=self.id_generator.new_id(),
                title=payload.title,
                body=payload.body,
                image=payload.image,
                owner=caller,
                created_at=self.clock.now(),
                likes=0,
                updated_at=None,
                comments=[],
            )
            transaction.insert_post(post)
            return post

        post = self.storage.run_in_transaction(_create_in_transaction)
        logger.info(f"게시글 생성 완료 (post_id: {post.id}, owner: {caller})")
        return post

    def update_post(self, post_id: str, caller: str, payload: PostPayload) -> Post:
        """게시글의 title/body/image 를 수정합니다. (작성자 본인만 가능)"""
        def _update_in_transaction(transaction):
            post = self._require_post(transaction, post_id)
            self._check_owner('post', post_id, post.owner, caller)

            updated_post = replace(
                post,
                title=payload.title,
                body=payload.body,
                image=payload.image,
                updated_at=self.clock.now(),
            )
            transaction.insert_post(updated_post)
            return updated_post

        updated_post = self.storage.run_in_transaction(_update_in_transaction)
        logger.info(f"게시글 수정 완료 (post_id: {post_id})")
        return updated_post

    def like_post(self, post_id: str) -> Post:
        """게시글 좋아요 수를 1 증가시킵니다. 작성자 확인은 하지 않습니다."""
        def _like_in_transaction(transaction):
            post = self._require_post(transaction, post_id)
            transaction.increment_likes(post_id)
            return replace(post, likes=post.likes + 1)

        post = self.storage.run_in_transaction(_like_in_transaction)
        logger.info(f"게시글 좋아요 (post_id: {post_id}, likes: {post.likes})")
        return post

    def delete_post(self, post_id: str, caller: str) -> Post:
        """
        게시글과 그 게시글을 가리키는 모든 댓글을 삭제합니다. (작성자 본인만 가능)

        - 게시글의 comments 목록만 믿지 않고 댓글 저장소에서 post_id 가 일치하는
          댓글을 모두 찾아 지웁니다.
        - 댓글을 먼저 지운 뒤 게시글을 지우며, 삭제 직전 게시글 레코드를 반환합니다.
        """
        def _delete_in_transaction(transaction):
            post = self._require_post(transaction, post_id)
            self._check_owner('post', post_id, post.owner, caller)

            linked_comments = transaction.find_comments(post_id)
            for comment in linked_comments:
                transaction.remove_comment(comment.id)
            transaction.remove_post(post_id)
            return post, len(linked_comments)

        post, removed_count = self.storage.run_in_transaction(_delete_in_transaction)
        logger.info(f"게시글 삭제 완료 (post_id: {post_id}, 삭제된 댓글 수: {removed_count})")
        return post

    # ------------------------------------------------------------------
    # 댓글 쓰기
    # ------------------------------------------------------------------
    def comment_on_post(self, caller: str, payload: CommentPayload) -> Comment:
        """
        게시글에 댓글을 작성합니다.
        댓글 저장과 게시글 comments 목록 추가는 하나의 트랜잭션으로 반영되며,
        둘 중 하나라도 실패하면 어느 쪽도 남지 않습니다.
        """
        def _comment_in_transaction(transaction):
            post = self._require_post(transaction, payload.post_id)
            comment = Comment(
                id=self.id_generator.new_id(),
                content=payload.content,
                sender=caller,
                post_id=post.id,
            )
            transaction.insert_comment(comment)
            transaction.append_comment_id(post.id, comment.id)
            return comment

        comment = self.storage.run_in_transaction(_comment_in_transaction)
        logger.info(f"댓글 작성 완료 (post_id: {comment.post_id}, comment_id: {comment.id})")
        return comment

    def delete_comment(self, comment_id: str, caller: str) -> Comment:
        """
        댓글을 삭제합니다. (댓글 작성자 본인만 가능)
        게시글이 남아 있으면 comments 목록에서 첫 번째로 일치하는 ID만 제거하고,
        게시글이 이미 없다면 그 단계는 조용히 건너뜁니다.
        """
        def _delete_in_transaction(transaction):
            comment = self._require_comment(transaction, comment_id)
            self._check_owner('comment', comment_id, comment.sender, caller)

            post = transaction.get_post(comment.post_id)
            if post is not None and comment_id in post.comments:
                remaining = list(post.comments)
                remaining.remove(comment_id)
                transaction.set_comment_ids(post.id, remaining)
            transaction.remove_comment(comment_id)
            return comment

        comment = self.storage.run_in_transaction(_delete_in_transaction)
        logger.info(f"댓글 삭제 완료 (comment_id: {comment_id}, post_id: {comment.post_id})")
        return comment
