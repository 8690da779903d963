from typing import Annotated, List

from fastapi import APIRouter, Depends, Query, Request

from schemas.common import ErrorResponse
from schemas.stats import (
    CourseStats,
    GlobalStats,
    GradeBin,
    SemesterComparison,
    SemesterProgress,
    StudentSemesterStats,
    TeacherCourseStats,
)
from services.stats_service import StatsService

router = APIRouter(
    prefix="/stats",
    tags=["stats"],
    responses={500: {"model": ErrorResponse, "description": "STATS_ERROR"}},
)

# ==========================================================
# [공통] 통계 서비스 주입 (create_app 에서 app.state 에 등록)
# ==========================================================
def get_stats_service(request: Request) -> StatsService:
    return request.app.state.stats_service


# 학년도는 정수(YYYY)로 받아 서비스에서 컬럼 표현으로 변환
AcademicYear = Annotated[int, Query(alias="academicYear", ge=1000, le=9999, description="학년도 (예: 2024)")]


# ==========================================================
# [1단계] 강의 단위
# ==========================================================

# ✅ [COURSE] 강의 평균/최저/최고/합격률
@router.get(
    "/courses/{course_id}",
    response_model=CourseStats,
    responses={404: {"model": ErrorResponse, "description": "STATS_NOT_FOUND"}},
)
def course_stats(
    course_id: int,
    academic_year: AcademicYear,
    service: StatsService = Depends(get_stats_service),
):
    return service.get_course_stats(course_id, academic_year)

# ✅ [DISTRIBUTION] 강의 점수 구간별 분포
@router.get("/courses/{course_id}/distribution", response_model=List[GradeBin])
def course_distribution(
    course_id: int,
    academic_year: AcademicYear,
    service: StatsService = Depends(get_stats_service),
):
    return service.get_course_distribution(course_id, academic_year)

# ==========================================================
# [2단계] 학생 단위
# ==========================================================

# ✅ [SEMESTERS] 학생 학기별 학점 가중 평균
@router.get("/students/{student_id}/semesters", response_model=List[StudentSemesterStats])
def student_semester_stats(
    student_id: int,
    academic_year: AcademicYear,
    service: StatsService = Depends(get_stats_service),
):
    return service.get_student_semester_stats(student_id, academic_year)

# ✅ [PROGRESS] 학생 학기별 진척도 (전 학년도)
@router.get("/students/{student_id}/progress", response_model=List[SemesterProgress])
def student_progress(student_id: int, service: StatsService = Depends(get_stats_service)):
    return service.get_student_progress(student_id)

# ==========================================================
# [3단계] 전체 / 교사 / 비교
# ==========================================================

# ✅ [GLOBAL] 학년도 전체 통계
@router.get("/global", response_model=GlobalStats)
def global_stats(
    academic_year: AcademicYear,
    service: StatsService = Depends(get_stats_service),
):
    return service.get_global_stats(academic_year)

# ✅ [TEACHER] 교사 담당 강의별 통계
@router.get("/teachers/{teacher_id}", response_model=List[TeacherCourseStats])
def teacher_stats(
    teacher_id: int,
    academic_year: AcademicYear,
    service: StatsService = Depends(get_stats_service),
):
    return service.get_teacher_stats(teacher_id, academic_year)

# ✅ [COMPARISON] 전년도 동일 학기 대비 강의별 비교
@router.get("/comparison", response_model=List[SemesterComparison])
def semester_comparison(
    academic_year: AcademicYear,
    semester: int = Query(..., ge=1, description="학기 번호"),
    service: StatsService = Depends(get_stats_service),
):
    return service.get_semester_comparison(academic_year, semester)
