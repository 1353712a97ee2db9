# models/quiz.py
from pydantic import BaseModel, Field
from enum import Enum
from typing import List, Optional

class QuestionType(str, Enum):
    MULTIPLE_CHOICE = "multiple-choice"
    TRUE_FALSE = "true-false"
    SHORT_ANSWER = "short-answer"
    UNKNOWN = "unknown"

    @classmethod
    def classify(cls, value: str) -> "QuestionType":
        """Map a stored type string onto the closed set; anything unrecognized is UNKNOWN."""
        for member in cls:
            if member is not cls.UNKNOWN and member.value == value:
                return member
        return cls.UNKNOWN

class Option(BaseModel):
    text: str
    isCorrect: bool = False

class Question(BaseModel):
    id: str
    type: str  # kept as a plain string so unknown types survive storage and grade as UNKNOWN
    questionText: str = ""
    options: List[Option] = []
    correctAnswer: Optional[str] = None

class QuizCreate(BaseModel):
    title: Optional[str] = None
    description: str = ""
    courseId: Optional[str] = None  # course slug, e.g. "web-dev-bootcamp"
    questions: List[Question] = []
    passPercentage: float = Field(default=70, ge=0, le=100)

class Quiz(BaseModel):
    id: str
    title: str
    description: str = ""
    course: Optional[str] = None  # ObjectId of the owning course, as a string
    questions: List[Question] = []
    passPercentage: float = Field(default=70, ge=0, le=100)

class SubmittedAnswer(BaseModel):
    questionId: str
    userAnswer: Optional[str] = None

class QuizSubmission(BaseModel):
    answers: List[SubmittedAnswer]

class QuestionResult(BaseModel):
    questionId: str
    questionText: str
    userAnswer: Optional[str] = None
    correctAnswer: str = ""
    isCorrect: bool = False

class GradedResult(BaseModel):
    score: int
    totalQuestions: int
    percentage: float
    passed: bool
    perQuestion: List[QuestionResult] = []

class SubmissionResponse(BaseModel):
    message: str
    score: int
    totalQuestions: int
    percentage: float
    passed: bool
    results: List[QuestionResult]
