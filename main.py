from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from config.settings import settings

# ✅ 미들웨어 임포트
from middlewares.timing import TimingMiddleware
from middlewares.error_handler import add_error_handlers

# ✅ 라우터 / 서비스 임포트
from routers import stats
from services.stats_service import StatsService


def configure_logging(level: str = settings.LOG_LEVEL) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )
    # 라이브러리 디버그 로그 비활성화
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def create_app(stats_service: Optional[StatsService] = None) -> FastAPI:
    """
    애플리케이션 생성
    - stats_service 미지정 시 설정값 기반 커넥션 풀(SessionLocal)로 생성
    - 테스트에서는 별도 DB에 연결된 서비스를 주입
    """
    if stats_service is None:
        from database.db import SessionLocal
        stats_service = StatsService(SessionLocal)

    app = FastAPI(
        title=settings.APP_TITLE,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
    )
    app.state.stats_service = stats_service

    # ✅ CORS 설정
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    # ✅ 요청 지연 측정 미들웨어 (응답 헤더 X-Latency-Ms 추가)
    app.add_middleware(TimingMiddleware)

    # ✅ 전역 에러 핸들러 등록 (일관된 JSON 에러 포맷)
    add_error_handlers(app)

    # ✅ 통계 라우터 등록
    app.include_router(stats.router)

    # ✅ 헬스체크 엔드포인트
    @app.get("/health")
    def health_check():
        return {"status": "ok", "message": "API is running"}

    # ✅ 루트 엔드포인트
    @app.get("/")
    def root():
        return {"message": f"{settings.APP_TITLE} - statistiques des notes"}

    return app


configure_logging()
app = create_app()
