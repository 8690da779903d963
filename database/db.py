from sqlalchemy import create_engine               # SQLAlchemy 엔진 생성 도구
from sqlalchemy.orm import declarative_base, sessionmaker

from config.settings import Settings, settings     # ✅ 환경변수 설정 파일 불러오기


def connect_args(cfg: Settings) -> dict:
    """
    드라이버별 연결/조회 타임아웃 인자
    - pymysql: connect_timeout, read_timeout
    - psycopg2: connect_timeout + statement_timeout(ms)
    """
    if cfg.DB_DRIVER.startswith("mysql"):
        return {"connect_timeout": cfg.DB_CONNECT_TIMEOUT, "read_timeout": cfg.DB_READ_TIMEOUT}
    if cfg.DB_DRIVER.startswith("postgresql"):
        return {
            "connect_timeout": cfg.DB_CONNECT_TIMEOUT,
            "options": f"-c statement_timeout={cfg.DB_READ_TIMEOUT * 1000}",
        }
    return {}


def build_engine(cfg: Settings):
    """
    설정값으로 커넥션 풀이 있는 엔진 생성
    - pool_timeout: 풀이 고갈되면 해당 초만큼 대기 후 TimeoutError
    - pool_pre_ping: 끊어진 커넥션을 사용 전에 감지
    - connect_args: 연결/조회가 멈춰도 무한 대기하지 않도록 타임아웃 지정
    """
    return create_engine(
        cfg.DATABASE_URL,
        pool_size=cfg.DB_POOL_SIZE,
        max_overflow=cfg.DB_MAX_OVERFLOW,
        pool_timeout=cfg.DB_POOL_TIMEOUT,
        pool_recycle=cfg.DB_POOL_RECYCLE,
        pool_pre_ping=True,
        connect_args=connect_args(cfg),
    )


def build_session_factory(bind):
    # 읽기 전용 서비스지만 팩토리 설정은 기존 방식 그대로 유지
    return sessionmaker(autocommit=False, autoflush=False, bind=bind)


# ✅ 환경변수에서 DB 연결 URL을 불러와 엔진 생성 (실제 연결은 첫 쿼리 시점)
engine = build_engine(settings)

# ✅ 세션 팩토리: DB 연결에 사용할 세션 생성기 정의
SessionLocal = build_session_factory(engine)

# ✅ 모델 정의 시 상속할 Base 클래스 (Declarative 방식 사용)
Base = declarative_base()
