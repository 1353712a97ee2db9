# database.py
from motor.motor_asyncio import AsyncIOMotorClient
import logging
import config

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

client = AsyncIOMotorClient(config.MONGODB_URI)
db = client[config.MONGODB_DB]

async def init_db():
    await db.users.create_index("id", unique=True)
    await db.users.create_index("username", unique=True)
    await db.courses.create_index("id", unique=True)
    await db.quizzes.create_index("id", unique=True)
    await db.quizzes.create_index("course")
    logger.info(f"Indexes ensured on database: {config.MONGODB_DB}")
