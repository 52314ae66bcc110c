# board/core/config.py

import os # 환경 변수를 읽기 위해 사용합니다.

class Config:
    """모든 환경 설정의 기반이 되는 공통 설정 클래스입니다."""
    # JWT 토큰의 서명/검증에 사용하는 비밀 키입니다. 요청자 식별(get_jwt_identity)의 근거가 됩니다.
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY')

    # 저장소 백엔드: 'memory'(프로세스 메모리) 또는 'firestore'
    STORE_BACKEND = os.getenv('STORE_BACKEND', 'memory')
    POSTS_COLLECTION = os.getenv('POSTS_COLLECTION', 'posts')
    COMMENTS_COLLECTION = os.getenv('COMMENTS_COLLECTION', 'comments')

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

class DevelopmentConfig(Config):
    """개발 환경을 위한 설정 클래스입니다."""
    # 코드 변경 시 자동 재시작, 에러 발생 시 상세 디버그 정보 표시
    DEBUG = True
    FIREBASE_CREDENTIALS_PATH = os.getenv('DEV_FIREBASE_CREDENTIALS_PATH')

class TestingConfig(Config):
    """테스트 환경을 위한 설정 클래스입니다."""
    TESTING = True
    DEBUG = False
    # 테스트는 항상 메모리 저장소를 사용합니다. (Firestore 연결 불필요)
    STORE_BACKEND = 'memory'
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY') or 'testing-secret-key-which-is-long-enough'
    FIREBASE_CREDENTIALS_PATH = os.getenv('TEST_FIREBASE_CREDENTIALS_PATH')

class ProductionConfig(Config):
    """운영 환경을 위한 설정 클래스입니다."""
    DEBUG = False
    STORE_BACKEND = os.getenv('STORE_BACKEND', 'firestore')
    FIREBASE_CREDENTIALS_PATH = os.getenv('PROD_FIREBASE_CREDENTIALS_PATH')

# FLASK_ENV 값에 따라 create_app에서 적절한 설정 클래스를 선택하는 데 사용됩니다.
config_by_name = dict(
    development=DevelopmentConfig,
    testing=TestingConfig,
    production=ProductionConfig
)
