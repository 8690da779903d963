"""
services/errors.py

통계 서비스 에러 계층
    StatsError (500, STATS_ERROR)
    └── StatsNotFoundError (404, STATS_NOT_FOUND)

- 메시지는 API 소비자 기준 프랑스어
- middlewares/error_handler.py 에서 공통 에러 포맷으로 변환
"""


class StatsError(Exception):
    status_code = 500
    code = "STATS_ERROR"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message}


class StatsNotFoundError(StatsError):
    """조회 대상(강의 등)이 존재하지 않을 때"""
    status_code = 404
    code = "STATS_NOT_FOUND"
