# board/core/exceptions.py
"""
게시판 도메인 예외 정의.

- 리소스가 없는 경우는 ValueError 계열, 권한이 없는 경우는 PermissionError 계열로
  라우트에서 기존 방식대로 처리할 수 있도록 두 표준 예외를 함께 상속합니다.
"""

_KIND_LABELS = {
    'post': '게시글',
    'comment': '댓글',
}


class BoardError(Exception):
    """게시판 서비스에서 발생하는 모든 예외의 기반 클래스."""


class NotFoundError(BoardError, ValueError):
    """요청한 게시글/댓글이 저장소에 존재하지 않을 때 발생합니다."""

    def __init__(self, kind: str, entity_id: str):
        self.kind = kind
        self.entity_id = entity_id
        label = _KIND_LABELS.get(kind, kind)
        super().__init__(f"id={entity_id}인 {label}({kind})을(를) 찾을 수 없습니다.")


class ForbiddenError(BoardError, PermissionError):
    """호출자가 게시글 작성자/댓글 작성자가 아닐 때 발생합니다."""

    def __init__(self, kind: str, entity_id: str, caller: str):
        self.kind = kind
        self.entity_id = entity_id
        self.caller = caller
        label = _KIND_LABELS.get(kind, kind)
        super().__init__(f"id={entity_id}인 {label}({kind})에 대한 권한이 없습니다.")
