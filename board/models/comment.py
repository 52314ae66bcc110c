# board/models/comment.py
from dataclasses import dataclass, asdict
from typing import Dict, Any

@dataclass
class CommentPayload:
    """댓글 작성 요청. post_id 는 댓글을 달 게시글의 ID 입니다."""
    content: str
    post_id: str

@dataclass
class Comment:
    """
    'comments' 저장소의 레코드 구조를 정의하는 데이터클래스.
    댓글은 수정 기능이 없으므로 모든 필드가 생성 후 고정됩니다.
    """
    id: str
    content: str
    sender: str
    post_id: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Comment':
        return cls(
            id=data['id'],
            content=data['content'],
            sender=data['sender'],
            post_id=data['post_id'],
        )
