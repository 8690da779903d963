from sqlalchemy import CheckConstraint, Column, Float, Integer, String
from database.db import Base

class Course(Base):
    __tablename__ = "courses"  # 강의(과목) 정보 테이블
    __table_args__ = (
        CheckConstraint("credits > 0", name="ck_courses_credits_positive"),
    )

    id = Column(Integer, primary_key=True, index=True)         # 강의 고유 ID (Primary Key)
    code = Column(String(20), nullable=False)                 # 강의 코드 (예: R1.01)
    name = Column(String(100), nullable=False)                # 강의 이름
    credits = Column(Float, nullable=False)                   # 학점 가중치 (양수)
    teacher_id = Column(Integer, nullable=False, index=True)  # 담당 교사 ID
