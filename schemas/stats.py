from typing import Optional

from schemas.common import CamelModel


class CourseStats(CamelModel):
    course_code: str                         # 강의 코드
    course_name: str                         # 강의 이름
    average_grade: float = 0                 # 평균 (소수 둘째 자리)
    min_grade: float = 0                     # 최저 점수
    max_grade: float = 0                     # 최고 점수
    total_students: int = 0                  # 성적 건수
    success_rate: float = 0                  # 합격률 % (소수 둘째 자리)


class StudentSemesterStats(CamelModel):
    semester: int                            # 학기
    average_grade: float                     # 학점 가중 평균
    total_credits: float                     # 수강 학점 합
    validated_credits: float                 # 취득 학점 합 (10점 이상)
    courses_count: int                       # 수강 강의 수


class GlobalStats(CamelModel):
    global_average: float = 0                # 학점 가중 전체 평균
    total_students: int = 0                  # 학생 수
    total_courses: int = 0                   # 강의 수
    average_success_rate: float = 0          # 학생별 합격률의 평균


class SemesterProgress(CamelModel):
    academic_year: str                       # 학년도
    semester: int                            # 학기
    semester_average: float                  # 학기 평균
    previous_semester_average: Optional[float] = None  # 직전 학기 평균 (첫 학기는 null)
    progression: float = 0                   # 직전 대비 변화량 (첫 학기는 0)


class GradeBin(CamelModel):
    range: str                               # 점수 구간 (예: "10-11")
    count: int                               # 구간 내 성적 수
    percentage: float                        # 전체 대비 비율 % (소수 둘째 자리)


class TeacherCourseStats(CamelModel):
    course_id: int
    course_name: str
    student_count: int                       # 수강 학생 수 (중복 제외)
    average_grade: float
    success_rate: float
    median_grade: float                      # 중앙값 (연속 백분위 0.5)


class SemesterComparison(CamelModel):
    """전년도 동일 학기 대비 강의별 비교 (전년도 데이터 없으면 previous/difference 는 null)"""
    course_name: str
    current_average: float
    previous_average: Optional[float] = None
    average_difference: Optional[float] = None
    current_success_rate: float
    previous_success_rate: Optional[float] = None
    success_rate_difference: Optional[float] = None
