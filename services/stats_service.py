"""
services/stats_service.py

성적 통계 조회 서비스
- 생성 시 세션 팩토리(커넥션 풀)를 주입받음
- 메서드 1개 = 집계 쿼리 1개, 세션은 쿼리마다 열고 닫음
- DB 계층 오류(연결 끊김, 풀 대기 타임아웃, SQL 오류)는 전부 StatsError 로 감싸서 전달
"""

import logging
from contextlib import contextmanager
from decimal import Decimal, ROUND_HALF_UP
from itertools import groupby
from statistics import median
from typing import List, Optional

from sqlalchemy import Float, and_, case, cast, func, select
from sqlalchemy.exc import SQLAlchemyError

from models.courses import Course
from models.grades import Grade, PASSING_GRADE
from schemas.stats import (
    CourseStats,
    GlobalStats,
    GradeBin,
    SemesterComparison,
    SemesterProgress,
    StudentSemesterStats,
    TeacherCourseStats,
)
from services.errors import StatsError, StatsNotFoundError

logger = logging.getLogger(__name__)

# ✅ 분포 구간 (상한 미만, 마지막 구간은 나머지 전부)
GRADE_BINS = [
    ("0-7", 8),
    ("8-9", 10),
    ("10-11", 12),
    ("12-13", 14),
    ("14-15", 16),
    ("16-20", None),
]


def year_key(academic_year: int) -> str:
    """정수 학년도 → grades.academic_year 컬럼의 문자열 표현"""
    return str(academic_year)


def _float(value) -> Optional[float]:
    # MySQL 은 AVG/SUM 을 Decimal 로 돌려줌
    return float(value) if value is not None else None


def _round2(value) -> Optional[float]:
    # SQL ROUND(numeric, 2) 와 동일하게 .xx5 는 0에서 먼 쪽으로
    if value is None:
        return None
    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def _passed_count():
    return func.count(case((Grade.grade >= PASSING_GRADE, 1)))


def _success_rate():
    # 합격 건수 / 전체 건수 * 100 (0건이면 NULL)
    return cast(_passed_count(), Float) / func.nullif(func.count(Grade.id), 0) * 100


class StatsService:
    def __init__(self, session_factory):
        self._session_factory = session_factory

    @contextmanager
    def _session(self, error_message: str):
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as exc:
            logger.exception("stats query failed: %s", error_message)
            raise StatsError(error_message) from exc
        finally:
            session.close()

    # ==========================================================
    # [강의] 강의 단위 통계
    # ==========================================================
    def get_course_stats(self, course_id: int, academic_year: int) -> CourseStats:
        """
        강의 1개의 학년도 통계
        - 성적이 없으면 평균/최저/최고/건수/합격률 모두 0
        - 존재하지 않는 강의면 StatsNotFoundError
        """
        with self._session("Erreur lors de la récupération des statistiques du cours") as db:
            row = (
                db.query(
                    Course.code.label("course_code"),
                    Course.name.label("course_name"),
                    func.avg(Grade.grade).label("average_grade"),
                    func.min(Grade.grade).label("min_grade"),
                    func.max(Grade.grade).label("max_grade"),
                    func.count(Grade.id).label("total_students"),
                    _success_rate().label("success_rate"),
                )
                .select_from(Course)
                .outerjoin(
                    Grade,
                    and_(Grade.course_id == Course.id, Grade.academic_year == year_key(academic_year)),
                )
                .filter(Course.id == course_id)
                .group_by(Course.id, Course.code, Course.name)
                .first()
            )

        if row is None:
            raise StatsNotFoundError(f"Cours {course_id} introuvable")

        return CourseStats(
            course_code=row.course_code,
            course_name=row.course_name,
            average_grade=_round2(row.average_grade) or 0,
            min_grade=_float(row.min_grade) or 0,
            max_grade=_float(row.max_grade) or 0,
            total_students=row.total_students or 0,
            success_rate=_round2(row.success_rate) or 0,
        )

    def get_course_distribution(self, course_id: int, academic_year: int) -> List[GradeBin]:
        """
        점수 구간별 분포
        - 비율은 소수 둘째 자리 반올림
        - 0건인 구간은 결과에서 제외, 구간 오름차순
        """
        bucket = case(
            *[(Grade.grade < upper, label) for label, upper in GRADE_BINS if upper is not None],
            else_=GRADE_BINS[-1][0],
        )
        with self._session("Erreur lors de la récupération de la distribution des notes") as db:
            ranged = (
                db.query(bucket.label("grade_range"))
                .filter(Grade.course_id == course_id, Grade.academic_year == year_key(academic_year))
                .subquery()
            )
            rows = (
                db.query(ranged.c.grade_range, func.count().label("count"))
                .group_by(ranged.c.grade_range)
                .all()
            )

        counts = {r.grade_range: r.count for r in rows}
        total = sum(counts.values())
        return [
            GradeBin(range=label, count=counts[label], percentage=_round2(counts[label] / total * 100))
            for label, _ in GRADE_BINS
            if counts.get(label)
        ]

    # ==========================================================
    # [학생] 학기별 / 진척도
    # ==========================================================
    def get_student_semester_stats(self, student_id: int, academic_year: int) -> List[StudentSemesterStats]:
        """학기별 학점 가중 평균, 수강/취득 학점, 수강 강의 수"""
        total_credits = func.sum(Course.credits)
        with self._session("Erreur lors de la récupération des statistiques de l'étudiant") as db:
            rows = (
                db.query(
                    Grade.semester,
                    (func.sum(Grade.grade * Course.credits) / total_credits).label("average_grade"),
                    total_credits.label("total_credits"),
                    func.sum(case((Grade.grade >= PASSING_GRADE, Course.credits), else_=0)).label("validated_credits"),
                    func.count(func.distinct(Course.id)).label("courses_count"),
                )
                .select_from(Grade)
                .join(Course, Course.id == Grade.course_id)
                .filter(Grade.student_id == student_id, Grade.academic_year == year_key(academic_year))
                .group_by(Grade.semester)
                .order_by(Grade.semester)
                .all()
            )

        return [
            StudentSemesterStats(
                semester=r.semester,
                average_grade=_float(r.average_grade),
                total_credits=_float(r.total_credits),
                validated_credits=_float(r.validated_credits),
                courses_count=r.courses_count,
            )
            for r in rows
        ]

    def get_student_progress(self, student_id: int) -> List[SemesterProgress]:
        """
        (학년도, 학기) 순서의 학기 평균과 직전 학기 대비 변화량
        - 직전 학기 평균은 LAG 윈도우 함수
        - 첫 학기: previous 는 null, progression 은 0
        """
        semester_average = func.avg(Grade.grade)
        previous_average = func.lag(semester_average).over(order_by=[Grade.academic_year, Grade.semester])
        with self._session("Erreur lors de la récupération des statistiques de progression") as db:
            rows = (
                db.query(
                    Grade.academic_year,
                    Grade.semester,
                    semester_average.label("semester_average"),
                    previous_average.label("previous_average"),
                )
                .filter(Grade.student_id == student_id)
                .group_by(Grade.academic_year, Grade.semester)
                .order_by(Grade.academic_year, Grade.semester)
                .all()
            )

        result = []
        for r in rows:
            current, previous = _float(r.semester_average), _float(r.previous_average)
            result.append(SemesterProgress(
                academic_year=r.academic_year,
                semester=r.semester,
                semester_average=current,
                previous_semester_average=previous,
                progression=current - previous if previous is not None else 0,
            ))
        return result

    # ==========================================================
    # [전체] 학년도 전체 통계
    # ==========================================================
    def get_global_stats(self, academic_year: int) -> GlobalStats:
        """
        학점 가중 전체 평균, 학생/강의 수, 평균 합격률
        - 합격률은 (점수, 학점, 학생) 그룹별로 구한 뒤 평균
        """
        year = year_key(academic_year)
        per_group = (
            select(_success_rate().label("success_rate"))
            .select_from(Grade)
            .join(Course, Course.id == Grade.course_id)
            .where(Grade.academic_year == year)
            .group_by(Grade.grade, Course.credits, Grade.student_id)
            .subquery("per_group")
        )
        average_success_rate = select(func.avg(per_group.c.success_rate)).scalar_subquery()

        with self._session("Erreur lors de la récupération des statistiques globales") as db:
            row = (
                db.query(
                    (func.sum(Grade.grade * Course.credits) / func.sum(Course.credits)).label("global_average"),
                    func.count(func.distinct(Grade.student_id)).label("total_students"),
                    # 강의 수: 기존 구현은 학생 수를 중복 집계(COUNT DISTINCT student_id). 강의 기준으로 집계하며 제품 담당 확인 대기
                    func.count(func.distinct(Grade.course_id)).label("total_courses"),
                    average_success_rate.label("average_success_rate"),
                )
                .select_from(Grade)
                .join(Course, Course.id == Grade.course_id)
                .filter(Grade.academic_year == year)
                .one()
            )

        return GlobalStats(
            global_average=_float(row.global_average) or 0,
            total_students=row.total_students or 0,
            total_courses=row.total_courses or 0,
            average_success_rate=_float(row.average_success_rate) or 0,
        )

    # ==========================================================
    # [교사] 담당 강의별 통계
    # ==========================================================
    def get_teacher_stats(self, teacher_id: int, academic_year: int) -> List[TeacherCourseStats]:
        """
        교사가 담당한 강의별 학생 수, 평균, 합격률, 중앙값
        - 중앙값(연속 백분위 0.5)은 DB마다 지원이 달라 조회한 점수로 계산
        """
        with self._session("Erreur lors de la récupération des statistiques de l'enseignant") as db:
            rows = (
                db.query(Course.id, Course.name, Grade.student_id, Grade.grade)
                .select_from(Course)
                .join(Grade, Grade.course_id == Course.id)
                .filter(Course.teacher_id == teacher_id, Grade.academic_year == year_key(academic_year))
                .order_by(Course.name, Course.id)
                .all()
            )

        result = []
        for (course_id, course_name), course_rows in groupby(rows, key=lambda r: (r.id, r.name)):
            course_rows = list(course_rows)
            grades = [float(r.grade) for r in course_rows]
            passed = sum(1 for g in grades if g >= PASSING_GRADE)
            result.append(TeacherCourseStats(
                course_id=course_id,
                course_name=course_name,
                student_count=len({r.student_id for r in course_rows}),
                average_grade=sum(grades) / len(grades),
                success_rate=passed / len(grades) * 100,
                median_grade=median(grades),
            ))
        return result

    # ==========================================================
    # [비교] 전년도 동일 학기 대비
    # ==========================================================
    def get_semester_comparison(self, academic_year: int, semester: int) -> List[SemesterComparison]:
        """
        강의별 올해/전년도 평균·합격률과 차이 (소수 둘째 자리)
        - 전년도 = academic_year - 1 (정수 연산 후 컬럼 표현으로 변환)
        - 전년도 데이터가 없는 강의도 포함, previous/difference 는 null
        """
        def course_semester_stats(year: str, name: str):
            return (
                select(
                    Course.id.label("course_id"),
                    Course.name.label("course_name"),
                    func.avg(Grade.grade).label("average"),
                    _success_rate().label("success_rate"),
                )
                .select_from(Course)
                .join(Grade, Grade.course_id == Course.id)
                .where(Grade.academic_year == year, Grade.semester == semester)
                .group_by(Course.id, Course.name)
                .subquery(name)
            )

        current = course_semester_stats(year_key(academic_year), "current_stats")
        previous = course_semester_stats(year_key(academic_year - 1), "previous_stats")
        stmt = (
            select(
                current.c.course_name,
                current.c.average.label("current_average"),
                previous.c.average.label("previous_average"),
                current.c.success_rate.label("current_success_rate"),
                previous.c.success_rate.label("previous_success_rate"),
            )
            .select_from(current)
            .outerjoin(previous, previous.c.course_id == current.c.course_id)
            .order_by(current.c.course_name)
        )
        with self._session("Erreur lors de la comparaison des semestres") as db:
            rows = db.execute(stmt).all()

        result = []
        for r in rows:
            cur_avg, prev_avg = _float(r.current_average), _float(r.previous_average)
            cur_rate, prev_rate = _float(r.current_success_rate), _float(r.previous_success_rate)
            result.append(SemesterComparison(
                course_name=r.course_name,
                current_average=_round2(cur_avg),
                previous_average=_round2(prev_avg),
                average_difference=_round2(cur_avg - prev_avg) if prev_avg is not None else None,
                current_success_rate=_round2(cur_rate),
                previous_success_rate=_round2(prev_rate),
                success_rate_difference=_round2(cur_rate - prev_rate) if prev_rate is not None else None,
            ))
        return result
