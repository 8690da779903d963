"""
schemas/common.py

- 프로젝트 전반에서 재사용할 공용 스키마 모음
- Pydantic v2 기준
- 포함 내용:
  1) 에러 응답 표준: ErrorDetail, ErrorResponse
  2) 통계 응답 공통 베이스: CamelModel (JSON 필드명 camelCase)
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel


# =========================================================
# 1) 에러 응답 표준
# =========================================================

class ErrorDetail(BaseModel):
    """에러 코드/메시지를 담는 최소 단위"""
    code: str = Field(..., description="에러 식별 코드 (예: STATS_ERROR, STATS_NOT_FOUND)")
    message: str = Field(..., description="사람이 읽을 수 있는 에러 메시지(프랑스어)")

class ErrorResponse(BaseModel):
    """
    전역 에러 핸들러에서 내려주는 표준 에러 응답
    - middlewares/error_handler.py에서 이 스키마로 직렬화
    - 라우터의 responses= 에 연결해 Swagger 문서화
    """
    error: ErrorDetail
    generated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="응답 생성 시각 (UTC)"
    )
    latency_ms: Optional[int] = Field(
        default=None, ge=0, description="요청 처리에 걸린 시간(ms). 타이밍 미들웨어와 연동 시 사용"
    )

    model_config = ConfigDict(extra="ignore")


# =========================================================
# 2) camelCase 응답 베이스
# =========================================================

class CamelModel(BaseModel):
    """
    내부 필드는 snake_case, JSON 직렬화는 camelCase
    - FastAPI response_model 은 기본적으로 alias 로 직렬화
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
