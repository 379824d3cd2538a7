"""설정 관리 - 환경 변수 로드 및 검증"""
from pydantic_settings import BaseSettings
from pydantic import field_validator


class Settings(BaseSettings):
    """애플리케이션 설정"""

    # 데이터베이스
    database_url: str = "sqlite:///./boxpacker.db"

    # 앱 시작 시 packaging 테이블이 비어 있으면 기본 박스 12종을 채울지 여부
    seed_default_boxes: bool = False

    # 외부 패킹 API (3D bin packing)
    # NOTE: url/username/key 중 하나라도 비어 있으면 API 경로는 항상 fallback으로 전환됩니다.
    packing_api_url: str = ""
    packing_api_username: str = ""
    packing_api_key: str = ""
    packing_api_timeout_s: float = 4.0

    # "api": 외부 API 우선 + 로컬 fallback
    # "fallback": 외부 API를 호출하지 않고 로컬 계산만 사용 (결정적 테스트용)
    packing_checker_mode: str = "api"

    # 카탈로그 keyset 페이지 크기
    catalog_page_size: int = 20

    # API
    api_title: str = "Packing API"
    api_version: str = "1.0.0"
    api_description: str = "상품 목록을 담을 수 있는 가장 작은 박스를 선택합니다."

    # 500 응답에 예외 메시지를 포함할지 여부
    app_debug: bool = False

    # 로깅
    log_level: str = "INFO"

    @field_validator("packing_api_timeout_s")
    @classmethod
    def validate_packing_api_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("packing_api_timeout_s must be positive")
        return v

    @field_validator("catalog_page_size")
    @classmethod
    def validate_catalog_page_size(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("catalog_page_size must be positive")
        return v

    @field_validator("packing_checker_mode")
    @classmethod
    def validate_packing_checker_mode(cls, v: str) -> str:
        mode = v.strip().lower()
        if mode not in ("api", "fallback"):
            raise ValueError("packing_checker_mode must be 'api' or 'fallback'")
        return mode

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        if not v:
            raise ValueError("database_url must not be empty")
        return v

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
