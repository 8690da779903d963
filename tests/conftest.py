"""
Pytest configuration and fixtures
- 인메모리 SQLite(StaticPool)에 모델 기준으로 테이블 생성
- StatsService 를 주입한 앱으로 TestClient 구성
"""
import os
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

# Add project root to Python path
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

# DB 접속 정보는 필수 설정값 (실제 연결은 하지 않음)
os.environ.setdefault("DB_USER", "test")
os.environ.setdefault("DB_PASSWORD", "test")
os.environ.setdefault("DB_NAME", "grades_test")

from database.db import Base, build_session_factory  # noqa: E402
from models.courses import Course  # noqa: E402
from models.grades import Grade  # noqa: E402
from services.stats_service import StatsService  # noqa: E402


COURSES = [
    {"id": 1, "code": "R1.01", "name": "Algorithmique", "credits": 6, "teacher_id": 100},
    {"id": 2, "code": "R1.02", "name": "Bases de données", "credits": 4, "teacher_id": 100},
    {"id": 3, "code": "R1.03", "name": "Réseaux", "credits": 2, "teacher_id": 200},
    {"id": 4, "code": "R1.04", "name": "Anglais", "credits": 3, "teacher_id": 200},
]

# (student_id, course_id, academic_year, semester, grade)
GRADES = [
    (1, 1, "2024", 1, 8),
    (2, 1, "2024", 1, 12),
    (3, 1, "2024", 1, 16),
    (1, 2, "2024", 1, 14),
    (2, 2, "2024", 1, 9),
    (1, 3, "2024", 2, 10),
    (2, 3, "2024", 2, 5),
    (1, 1, "2023", 1, 6),
    (2, 1, "2023", 1, 10),
]


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def seed(session_factory):
    """코스/성적 행을 넣는 헬퍼"""
    def _seed(courses=(), grades=()):
        with session_factory() as db:
            db.add_all(Course(**c) for c in courses)
            db.add_all(
                Grade(student_id=s, course_id=c, academic_year=y, semester=sem, grade=g)
                for s, c, y, sem, g in grades
            )
            db.commit()
    return _seed


@pytest.fixture
def dataset(seed):
    seed(COURSES, GRADES)


@pytest.fixture
def service(session_factory):
    return StatsService(session_factory)


@pytest.fixture
def client(service):
    from main import create_app

    return TestClient(create_app(service))
