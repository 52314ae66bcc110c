# board/models/post.py
from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Optional, List, Dict, Any

from board.utils.datetime_utils import DateTimeUtils

@dataclass
class PostPayload:
    """게시글 생성/수정 요청에서 호출자가 지정하는 필드."""
    title: str
    body: str
    image: str

@dataclass
class Post:
    """
    'posts' 저장소의 레코드 구조를 정의하는 데이터클래스.

    - owner, created_at, id 는 생성 이후 변경되지 않습니다.
    - updated_at 은 첫 수정 전까지 None 입니다.
    - comments 는 이 게시글에 달린 댓글 ID 목록(작성 순서)입니다.
    """
    id: str
    title: str
    body: str
    image: str
    owner: str
    created_at: datetime
    likes: int = 0
    updated_at: Optional[datetime] = None
    comments: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Post':
        return cls(
            id=data['id'],
            title=data['title'],
            body=data['body'],
            image=data.get('image', ''),
            owner=data['owner'],
            created_at=DateTimeUtils.to_datetime(data['created_at']),
            likes=int(data.get('likes', 0)),
            updated_at=DateTimeUtils.to_datetime(data.get('updated_at')),
            comments=list(data.get('comments') or []),
        )
