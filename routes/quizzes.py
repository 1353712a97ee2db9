# routes/quizzes.py
from fastapi import APIRouter, HTTPException, Depends
from pymongo.errors import PyMongoError
from bson import ObjectId
from datetime import datetime, timezone
from models.quiz import Quiz, QuizCreate, QuizSubmission, SubmissionResponse
from database import db
from .auth import get_current_user
from .grading import grade
import logging

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/quizzes",
    tags=["quizzes"],
    dependencies=[Depends(get_current_user)],
)

def serialize_quiz(quiz: dict, course: dict = None) -> dict:
    quiz_dict = {k: v for k, v in quiz.items() if k != "_id"}
    if course is not None:
        quiz_dict["course"] = {
            "_id": str(course["_id"]),
            "id": course["id"],
            "title": course["title"],
        }
    return quiz_dict

async def populate_courses(quizzes: list) -> list:
    """Expand each quiz's course ObjectId into {_id, id, title}."""
    course_ids = {q["course"] for q in quizzes if q.get("course") and ObjectId.is_valid(q["course"])}
    courses = await db.courses.find(
        {"_id": {"$in": [ObjectId(c) for c in course_ids]}},
        {"id": 1, "title": 1},
    ).to_list(None) if course_ids else []
    by_id = {str(c["_id"]): c for c in courses}
    return [serialize_quiz(q, by_id.get(q.get("course"))) for q in quizzes]

@router.get("/")
async def get_quizzes():
    logger.info("Attempting to fetch all quizzes...")
    try:
        quizzes = await db.quizzes.find().to_list(None)
        populated = await populate_courses(quizzes)
    except PyMongoError:
        logger.exception("Error fetching all quizzes")
        raise HTTPException(status_code=500, detail="Server error fetching all quizzes")
    logger.info(f"Successfully fetched {len(quizzes)} quizzes.")
    return populated

@router.get("/course/{course_object_id}")
async def get_quizzes_for_course(course_object_id: str):
    logger.info(f"Attempting to fetch quizzes for courseObjectId: {course_object_id}")
    if not ObjectId.is_valid(course_object_id):
        logger.error(f"Invalid courseObjectId format received: {course_object_id}")
        raise HTTPException(status_code=400, detail="Invalid course ID format provided.")

    try:
        quizzes = await db.quizzes.find({"course": course_object_id}).to_list(None)
    except PyMongoError:
        logger.exception("Error fetching quizzes for course")
        raise HTTPException(status_code=500, detail="Server error fetching quizzes for course")
    logger.info(f"Successfully fetched {len(quizzes)} quizzes for courseObjectId: {course_object_id}")
    return [serialize_quiz(q) for q in quizzes]

@router.get("/{id}")
async def get_quiz(id: str):
    logger.info(f"Attempting to fetch single quiz with ID: {id}")
    if not ObjectId.is_valid(id):
        logger.error(f"Invalid quiz ID format received: {id}")
        raise HTTPException(status_code=400, detail="Invalid quiz ID format provided.")

    try:
        quiz = await db.quizzes.find_one({"id": id})
        if not quiz:
            logger.warning(f"Quiz with ID: {id} not found.")
            raise HTTPException(status_code=404, detail="Quiz not found")
        populated = await populate_courses([quiz])
    except PyMongoError:
        logger.exception("Error fetching single quiz")
        raise HTTPException(status_code=500, detail="Server error fetching quiz")
    logger.info(f"Successfully fetched quiz with ID: {id}")
    return populated[0]

@router.post("/", status_code=201)
async def create_quiz(quiz: QuizCreate):
    logger.info(f"Attempting to create new quiz for courseId: {quiz.courseId}")
    if not quiz.title or not quiz.courseId or not quiz.questions:
        raise HTTPException(status_code=400, detail="Missing required quiz fields: title, courseId, questions.")

    try:
        course = await db.courses.find_one({"id": quiz.courseId})
        if not course:
            logger.warning(f"Course not found with provided courseId: {quiz.courseId}")
            raise HTTPException(status_code=404, detail="Course not found with the provided courseId.")

        quiz_dict = quiz.model_dump(exclude={"courseId"})
        quiz_dict["id"] = str(ObjectId())
        quiz_dict["course"] = str(course["_id"])
        quiz_dict["createdAt"] = datetime.now(timezone.utc).isoformat()
        await db.quizzes.insert_one(quiz_dict)

        # Keep the course's quiz list in step with the new quiz
        await db.courses.update_one({"_id": course["_id"]}, {"$push": {"quizzes": quiz_dict["id"]}})
    except PyMongoError:
        logger.exception("Error creating quiz")
        raise HTTPException(status_code=500, detail="Server error creating quiz")

    logger.info(f"Quiz created successfully with ID: {quiz_dict['id']}")
    return {"message": "Quiz created successfully!", "quiz": serialize_quiz(quiz_dict)}

@router.post("/{id}/submit", response_model=SubmissionResponse)
async def submit_quiz(id: str, submission: QuizSubmission):
    logger.info(f"Attempting to submit quiz with ID: {id}")
    if not ObjectId.is_valid(id):
        logger.error(f"Invalid quiz ID format received for submission: {id}")
        raise HTTPException(status_code=400, detail="Invalid quiz ID format provided.")

    try:
        quiz_doc = await db.quizzes.find_one({"id": id})
    except PyMongoError:
        logger.exception("Error submitting quiz")
        raise HTTPException(status_code=500, detail="Server error submitting quiz")
    if not quiz_doc:
        logger.warning(f"Quiz with ID: {id} not found for submission.")
        raise HTTPException(status_code=404, detail="Quiz not found")

    quiz = Quiz(**serialize_quiz(quiz_doc))
    result = grade(quiz, submission.answers)

    # Attempts are not persisted
    logger.info(f"Quiz submission for ID: {id} processed. Score: {result.score}/{result.totalQuestions}")
    return SubmissionResponse(
        message="Quiz submitted successfully!",
        score=result.score,
        totalQuestions=result.totalQuestions,
        percentage=result.percentage,
        passed=result.passed,
        results=result.perQuestion,
    )
