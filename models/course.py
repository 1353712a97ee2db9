# models/course.py
from pydantic import BaseModel
from typing import List, Optional

class CourseCreate(BaseModel):
    id: str  # human readable slug, e.g. "web-dev-bootcamp"
    title: str
    description: str = ""
    instructor: Optional[str] = None

class Course(CourseCreate):
    quizzes: List[str] = []  # quiz ids
    createdAt: Optional[str] = None
