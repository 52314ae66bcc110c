# board/__init__.py

# =====================================================================================
# 1. 환경 변수 로드 (가장 먼저 실행)
# =====================================================================================
from dotenv import load_dotenv
load_dotenv()

# =====================================================================================
# 2. 모듈 임포트 (Module Imports)
# =====================================================================================
import os
import logging
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException
from marshmallow import ValidationError
from flask_jwt_extended import JWTManager
import firebase_admin
from firebase_admin import credentials

# - 설정
from board.core.config import config_by_name
from board.core.exceptions import NotFoundError, ForbiddenError

# - API 블루프린트
from board.api.posts.routes import posts_bp
from board.api.comments.routes import comments_bp

# - 서비스 / 저장소
from board.models.comment import Comment
from board.models.post import Post
from board.services.board_service import BoardService
from board.stores.firestore_store import FirestoreEntityStore
from board.stores.memory_store import InMemoryEntityStore


def _init_firebase(app):
    """Firestore 저장소를 사용할 때만 Firebase 앱을 초기화합니다."""
    if firebase_admin._apps:
        return
    cred_path = app.config.get('FIREBASE_CREDENTIALS_PATH')
    if not cred_path or not os.path.exists(cred_path):
        raise FileNotFoundError(f"Firebase 인증 파일을 찾을 수 없습니다: {cred_path}")
    cred = credentials.Certificate(cred_path)
    firebase_admin.initialize_app(cred)


def _build_stores(app):
    """STORE_BACKEND 설정에 따라 게시글/댓글 저장소 한 쌍을 생성합니다."""
    backend = app.config['STORE_BACKEND']
    if backend == 'memory':
        return InMemoryEntityStore('posts'), InMemoryEntityStore('comments')
    if backend == 'firestore':
        _init_firebase(app)
        post_store = FirestoreEntityStore(app.config['POSTS_COLLECTION'], Post.from_dict)
        comment_store = FirestoreEntityStore(app.config['COMMENTS_COLLECTION'], Comment.from_dict)
        return post_store, comment_store
    raise ValueError(f"지원하지 않는 STORE_BACKEND 입니다: {backend}")


def create_app(config_name=None, board_service=None):
    """
    Flask 애플리케이션 팩토리 함수.

    :param config_name: 'development' | 'testing' | 'production' (기본값: FLASK_ENV)
    :param board_service: 미리 구성한 BoardService (테스트에서 가짜 저장소 주입용)
    """
    # =====================================================================================
    # 3. Flask 앱 생성 및 기본 설정
    # =====================================================================================
    config_name = config_name or os.getenv('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    app.json.ensure_ascii = False

    if not app.config.get('JWT_SECRET_KEY'):
        raise ValueError("필수 환경 변수가 설정되지 않았습니다: JWT_SECRET_KEY")

    # =====================================================================================
    # 4. 로깅 설정
    # =====================================================================================
    if not app.debug:
        logging.basicConfig(level=app.config['LOG_LEVEL'], format='%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]')

    # =====================================================================================
    # 5. 확장 기능 초기화
    # =====================================================================================
    JWTManager(app)

    # =====================================================================================
    # 6. 서비스 인스턴스 생성 및 'app.services'에 저장 (의존성 주입)
    # =====================================================================================
    app.services = {}

    if board_service is None:
        try:
            post_store, comment_store = _build_stores(app)
        except Exception as e:
            logging.error(f"Failed to initialize entity stores: {e}")
            raise
        board_service = BoardService(post_store=post_store, comment_store=comment_store)
        logging.info(f"Entity stores initialized ({app.config['STORE_BACKEND']})")
    app.services['board'] = board_service

    # =====================================================================================
    # 7. 블루프린트 등록
    # =====================================================================================
    app.register_blueprint(posts_bp, url_prefix='/api/posts')
    app.register_blueprint(comments_bp, url_prefix='/api')

    # =====================================================================================
    # 8. 전역 에러 핸들러 설정
    # =====================================================================================
    @app.errorhandler(ValidationError)
    def handle_marshmallow_validation(err):
        response = {"error_code": "VALIDATION_ERROR", "details": err.messages}
        return jsonify(response), 400

    @app.errorhandler(NotFoundError)
    def handle_not_found(err):
        response = {"error_code": f"{err.kind.upper()}_NOT_FOUND", "message": str(err)}
        return jsonify(response), 404

    @app.errorhandler(ForbiddenError)
    def handle_forbidden(err):
        response = {"error_code": "FORBIDDEN", "message": str(err)}
        return jsonify(response), 403

    @app.errorhandler(Exception)
    def handle_generic_exception(err):
        # 다른 핸들러에서 처리되지 않은 모든 예외를 여기서 처리
        if isinstance(err, HTTPException):
            return err
        logging.error(f"An unhandled exception occurred: {err}", exc_info=True)
        response = {"error_code": "INTERNAL_SERVER_ERROR", "message": "서버 내부에서 예상치 못한 오류가 발생했습니다."}
        return jsonify(response), 500

    logging.info(f"Flask app created for '{config_name}' environment.")

    return app
