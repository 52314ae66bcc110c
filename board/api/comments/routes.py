# board/api/comments/routes.py
import logging
from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import jwt_required, get_jwt_identity
from marshmallow import ValidationError

from board.api.comments.schemas import CommentCreateSchema, CommentResponseSchema
from board.core.exceptions import NotFoundError, ForbiddenError
from board.models.comment import CommentPayload


comments_bp = Blueprint('comments_bp', __name__)

@comments_bp.route('/posts/<string:post_id>/comments', methods=['POST'])
@jwt_required()
def create_comment(post_id: str):
    """
    특정 게시글에 새로운 댓글을 작성합니다.
    - 성공 시, 생성된 댓글 정보를 201 Created 상태 코드와 함께 반환합니다.
    """
    board_service = current_app.services['board']
    user_id = get_jwt_identity()
    try:
        data = CommentCreateSchema().load(request.get_json(silent=True) or {})
        payload = CommentPayload(content=data['content'], post_id=post_id)
        new_comment = board_service.comment_on_post(user_id, payload)
        return jsonify(CommentResponseSchema().dump(new_comment)), 201
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except NotFoundError as e: # 게시물이 없는 경우
        return jsonify({"error_code": "POST_NOT_FOUND", "message": str(e)}), 404
    except Exception as e:
        logging.error(f"댓글 생성 중 오류 발생 (post_id: {post_id}): {e}", exc_info=True)
        return jsonify({"error_code": "COMMENT_CREATION_FAILED", "message": "댓글 생성 중 오류가 발생했습니다."}), 500

@comments_bp.route('/posts/<string:post_id>/comments', methods=['GET'])
@jwt_required(optional=True)
def get_comments(post_id: str):
    """
    특정 게시글의 댓글 목록을 작성 순서대로 조회합니다.
    """
    board_service = current_app.services['board']
    try:
        comments = board_service.get_comments_on_post(post_id)
        return jsonify({"comments": CommentResponseSchema(many=True).dump(comments)}), 200
    except NotFoundError as e:
        return jsonify({"error_code": "POST_NOT_FOUND", "message": str(e)}), 404


@comments_bp.route('/comments/<string:comment_id>', methods=['DELETE'])
@jwt_required()
def delete_comment(comment_id: str):
    """
    특정 댓글을 삭제합니다. (작성자 본인만 가능)
    - 성공 시, 게시물의 댓글 목록에서도 제거되며 삭제된 댓글 정보를 반환합니다.
    """
    board_service = current_app.services['board']
    user_id = get_jwt_identity()
    try:
        deleted_comment = board_service.delete_comment(comment_id, user_id)
        return jsonify(CommentResponseSchema().dump(deleted_comment)), 200
    except ForbiddenError as e:
        return jsonify({"error_code": "FORBIDDEN", "message": str(e)}), 403
    except NotFoundError as e:
        return jsonify({"error_code": "COMMENT_NOT_FOUND", "message": str(e)}), 404
