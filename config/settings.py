"""
config/settings.py

- .env에 정의한 환경변수를 읽어 애플리케이션 전역 설정으로 제공합니다.
- pydantic v2 / pydantic-settings v2 사용.
- DB URL은 부분 값(DB_DRIVER/DB_USER/DB_PASSWORD/DB_HOST/DB_PORT/DB_NAME)로부터 동적으로 구성하며,
  레거시 호환을 위해 DATABASE_URL, DB_URL 두 이름 모두 제공(@computed_field).
"""

from typing import List, Literal
from pydantic import field_validator, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # =========================
    # 앱/런타임
    # =========================
    ENV: Literal["dev", "stage", "prod"] = "dev"
    APP_TITLE: str = "Grades Statistics API"
    APP_DESCRIPTION: str = "성적 데이터 기반 통계(평균, 합격률, 분포, 진척도, 연도 비교) 조회 API"
    APP_VERSION: str = "1.0.0"

    # =========================
    # CORS
    # =========================
    # 콤마(,)로 구분된 문자열 → List[str] 로 파싱
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def _split_origins(cls, v):
        if isinstance(v, str):
            # "a,b , c" → ["a","b","c"]
            return [s.strip() for s in v.split(",") if s.strip()]
        return v

    # =========================
    # Database
    # =========================
    DB_DRIVER: str = "mysql+pymysql"
    DB_USER: str
    DB_PASSWORD: str
    DB_HOST: str = "localhost"
    DB_PORT: int = 3306
    DB_NAME: str

    # 커넥션 풀 (풀 고갈 시 DB_POOL_TIMEOUT 초 대기 후 TimeoutError)
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: int = 10
    DB_POOL_RECYCLE: int = 1800

    # 연결/조회 타임아웃(초). 초과 시 OperationalError → STATS_ERROR
    DB_CONNECT_TIMEOUT: int = 10
    DB_READ_TIMEOUT: int = 30

    @field_validator("DB_POOL_SIZE", "DB_POOL_TIMEOUT", "DB_CONNECT_TIMEOUT", "DB_READ_TIMEOUT")
    @classmethod
    def _positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("must be a positive integer")
        return v

    # 레거시 호환 & 명확한 명칭 둘 다 제공
    @computed_field  # type: ignore[misc]
    @property
    def DATABASE_URL(self) -> str:
        """
        SQLAlchemy 엔진 URL. DB_DRIVER 로 MySQL/PostgreSQL 전환.
        비밀번호는 이미 URL 인코딩된 값을 기대 (예: P%40ssw0rd).
        예: postgresql+psycopg2://stats:P%40ssw0rd@db:5432/grades
        """
        return f"{self.DB_DRIVER}://{self.DB_USER}:{self.DB_PASSWORD}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    @computed_field  # type: ignore[misc]
    @property
    def DB_URL(self) -> str:
        """
        권장 속성명. DATABASE_URL과 동일값.
        """
        return self.DATABASE_URL

    # =========================
    # Logging / Misc
    # =========================
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    DOCS_OUTPUT_DIR: str = "docs"

    # =========================
    # BaseSettings Config
    # =========================
    model_config = SettingsConfigDict(
        env_file=".env",               # .env에서 값 로드
        env_file_encoding="utf-8",
        case_sensitive=False,          # 환경변수 대소문자 비구분
        extra="ignore",                # 정의되지 않은 키는 무시
    )


# ✅ settings 객체를 통해 어디서든 접근 가능
settings = Settings()
