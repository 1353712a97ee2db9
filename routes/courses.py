# routes/courses.py
from fastapi import APIRouter, HTTPException, Depends
from pymongo.errors import DuplicateKeyError, PyMongoError
from datetime import datetime, timezone
from models.course import CourseCreate
from database import db
from .auth import get_current_user
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/courses",
    tags=["courses"],
    dependencies=[Depends(get_current_user)],
)

def serialize_course(course: dict) -> dict:
    return {
        "_id": str(course["_id"]),
        "id": course["id"],
        "title": course["title"],
        "description": course.get("description", ""),
        "instructor": course.get("instructor"),
        "quizzes": course.get("quizzes", []),
        "createdAt": course.get("createdAt"),
    }

@router.get("/")
async def get_courses():
    logger.info("Attempting to fetch all courses...")
    try:
        courses = await db.courses.find().to_list(None)
    except PyMongoError:
        logger.exception("Error fetching all courses")
        raise HTTPException(status_code=500, detail="Server error fetching courses")
    logger.info(f"Successfully fetched {len(courses)} courses.")
    return [serialize_course(c) for c in courses]

@router.get("/{id}")
async def get_course(id: str):
    try:
        course = await db.courses.find_one({"id": id})
    except PyMongoError:
        logger.exception("Error fetching course")
        raise HTTPException(status_code=500, detail="Server error fetching course")
    if not course:
        logger.warning(f"Course with id: {id} not found.")
        raise HTTPException(status_code=404, detail="Course not found")
    return serialize_course(course)

@router.post("/", status_code=201)
async def create_course(course: CourseCreate):
    logger.info(f"Attempting to create course: {course.id}")
    course_dict = course.model_dump()
    course_dict["quizzes"] = []
    course_dict["createdAt"] = datetime.now(timezone.utc).isoformat()
    try:
        if await db.courses.find_one({"id": course.id}):
            raise HTTPException(status_code=400, detail="Course with this id already exists")
        result = await db.courses.insert_one(course_dict)
    except DuplicateKeyError:
        raise HTTPException(status_code=400, detail="Course with this id already exists")
    except PyMongoError:
        logger.exception("Error creating course")
        raise HTTPException(status_code=500, detail="Server error creating course")

    course_dict["_id"] = result.inserted_id
    logger.info(f"Course created successfully with id: {course.id}")
    return {"message": "Course created successfully!", "course": serialize_course(course_dict)}
