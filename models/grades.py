from sqlalchemy import CheckConstraint, Column, Float, ForeignKey, Integer, String, UniqueConstraint
from database.db import Base

# ✅ 합격 기준 점수 (20점 만점 중 10점 이상)
PASSING_GRADE = 10

class Grade(Base):
    __tablename__ = "grades"  # 성적 테이블 (학생/강의/학년도당 1건)
    __table_args__ = (
        UniqueConstraint("student_id", "course_id", "academic_year", name="uq_grades_student_course_year"),
        CheckConstraint("grade >= 0 AND grade <= 20", name="ck_grades_grade_range"),
    )

    id = Column(Integer, primary_key=True, index=True)                             # 성적 고유 ID (Primary Key)
    student_id = Column(Integer, nullable=False, index=True)                       # 학생 ID
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False, index=True)  # 강의 ID (FK)
    academic_year = Column(String(9), nullable=False, index=True)                  # 학년도 (문자열, 예: "2024")
    semester = Column(Integer, nullable=False)                                     # 학기
    grade = Column(Float, nullable=False)                                          # 점수 (0~20)
