# board/api/posts/schemas.py
from marshmallow import Schema, fields, validate, post_load

from board.models.post import PostPayload

# --- API 요청/응답 스키마 ---

class PostPayloadSchema(Schema):
    """POST /api/posts, PATCH /api/posts/{post_id} 요청 본문의 유효성을 검사합니다."""
    title = fields.Str(required=True, validate=validate.Length(min=1, max=200))
    body = fields.Str(required=True, validate=validate.Length(min=1, max=5000))
    # 이미지 URL. 이미지가 없는 게시글은 빈 문자열을 보냅니다.
    image = fields.Str(required=True, validate=validate.Length(max=2048))

    @post_load
    def make_payload(self, data, **kwargs):
        return PostPayload(**data)

class PostResponseSchema(Schema):
    """게시글 정보 응답을 위한 최종 JSON 형식을 정의합니다."""
    id = fields.Str(dump_only=True)
    title = fields.Str(required=True)
    body = fields.Str(required=True)
    image = fields.Str(required=True)
    owner = fields.Str(required=True)
    likes = fields.Int(required=True)
    created_at = fields.DateTime(required=True)
    updated_at = fields.DateTime(allow_none=True) # 수정 전에는 null
    comments = fields.List(fields.Str(), required=True)
