# board/api/posts/routes.py
import logging
from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import jwt_required, get_jwt_identity
from marshmallow import ValidationError

from board.api.posts.schemas import PostPayloadSchema, PostResponseSchema
from board.core.exceptions import NotFoundError, ForbiddenError


posts_bp = Blueprint('posts_bp', __name__)

@posts_bp.route('/', methods=['GET'])
@jwt_required(optional=True) # 비로그인 사용자도 목록은 볼 수 있도록 허용
def get_posts():
    """
    전체 게시글 목록을 조회합니다.
    """
    board_service = current_app.services['board']
    try:
        posts = board_service.list_posts()
        return jsonify({"posts": PostResponseSchema(many=True).dump(posts)}), 200
    except Exception as e:
        logging.error(f"게시글 목록 조회 중 오류 발생: {e}", exc_info=True)
        return jsonify({"error_code": "INTERNAL_SERVER_ERROR", "message": "게시물 목록 조회 중 오류가 발생했습니다."}), 500


@posts_bp.route('/<string:post_id>', methods=['GET'])
@jwt_required(optional=True)
def get_post(post_id: str):
    """
    특정 게시글의 상세 정보를 조회합니다.
    """
    board_service = current_app.services['board']
    try:
        post = board_service.get_post(post_id)
        return jsonify(PostResponseSchema().dump(post)), 200
    except NotFoundError as e:
        return jsonify({"error_code": "POST_NOT_FOUND", "message": str(e)}), 404


@posts_bp.route('/', methods=['POST'])
@jwt_required()
def create_post():
    """
    새로운 게시글을 생성합니다.
    - 요청 본문은 PostPayloadSchema에 따라 유효성을 검사합니다.
    - 성공 시, 생성된 게시글 정보를 201 Created 상태 코드와 함께 반환합니다.
    """
    board_service = current_app.services['board']
    user_id = get_jwt_identity()
    try:
        payload = PostPayloadSchema().load(request.get_json(silent=True) or {})
        new_post = board_service.create_post(user_id, payload)
        return jsonify(PostResponseSchema().dump(new_post)), 201
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except Exception as e:
        logging.error(f"게시글 생성 중 오류 발생: {e}", exc_info=True)
        return jsonify({"error_code": "POST_CREATION_FAILED", "message": "게시글 생성 중 오류가 발생했습니다."}), 500


@posts_bp.route('/<string:post_id>', methods=['PATCH'])
@jwt_required()
def update_post(post_id: str):
    """
    특정 게시글의 제목/본문/이미지를 수정합니다. (작성자 본인만 가능)
    """
    board_service = current_app.services['board']
    user_id = get_jwt_identity()
    try:
        payload = PostPayloadSchema().load(request.get_json(silent=True) or {})
        updated_post = board_service.update_post(post_id, user_id, payload)
        return jsonify(PostResponseSchema().dump(updated_post)), 200
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except ForbiddenError as e:
        return jsonify({"error_code": "FORBIDDEN", "message": str(e)}), 403
    except NotFoundError as e: # 게시물이 없는 경우
        return jsonify({"error_code": "POST_NOT_FOUND", "message": str(e)}), 404


@posts_bp.route('/<string:post_id>/like', methods=['POST'])
@jwt_required()
def like_post(post_id: str):
    """
    게시글의 좋아요 수를 1 증가시킵니다. 누구나 가능합니다.
    """
    board_service = current_app.services['board']
    try:
        post = board_service.like_post(post_id)
        return jsonify(PostResponseSchema().dump(post)), 200
    except NotFoundError as e:
        return jsonify({"error_code": "POST_NOT_FOUND", "message": str(e)}), 404


@posts_bp.route('/<string:post_id>', methods=['DELETE'])
@jwt_required()
def delete_post(post_id: str):
    """
    특정 게시글과 그 게시글의 모든 댓글을 삭제합니다. (작성자 본인만 가능)
    - 성공 시, 삭제 직전의 게시글 정보를 반환합니다.
    """
    board_service = current_app.services['board']
    user_id = get_jwt_identity()
    try:
        deleted_post = board_service.delete_post(post_id, user_id)
        return jsonify(PostResponseSchema().dump(deleted_post)), 200
    except ForbiddenError as e:
        return jsonify({"error_code": "FORBIDDEN", "message": str(e)}), 403
    except NotFoundError as e: # 게시물이 없는 경우
        return jsonify({"error_code": "POST_NOT_FOUND", "message": str(e)}), 404
