# routes/auth.py
from fastapi import APIRouter, HTTPException, Depends
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from bcrypt import hashpw, gensalt, checkpw
from pymongo.errors import DuplicateKeyError, PyMongoError
from datetime import datetime, timedelta, timezone
from typing import Optional
from models.user import Credentials
from database import db
import config
import logging
import uuid

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/login", auto_error=False)

def hash_password(password: str) -> str:
    return hashpw(password.encode("utf-8"), gensalt()).decode("utf-8")

def verify_password(password: str, hashed: str) -> bool:
    try:
        return checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # stored value is not a bcrypt hash
        return False

def create_access_token(user_id: str, username: str, expires_minutes: Optional[int] = None) -> str:
    minutes = config.JWT_EXPIRES_MINUTES if expires_minutes is None else expires_minutes
    payload = {
        "id": user_id,
        "username": username,
        "exp": datetime.now(timezone.utc) + timedelta(minutes=minutes),
    }
    return jwt.encode(payload, config.JWT_SECRET, algorithm=config.JWT_ALGORITHM)

async def get_current_user(token: Optional[str] = Depends(oauth2_scheme)):
    """Bearer-token dependency. Returns the decoded {id, username} payload."""
    if not token:
        raise HTTPException(status_code=401, detail="No authentication token, authorization denied")
    try:
        payload = jwt.decode(token, config.JWT_SECRET, algorithms=[config.JWT_ALGORITHM])
    except JWTError as e:
        logger.warning(f"Rejected token: {str(e)}")
        raise HTTPException(status_code=403, detail="Token is not valid")
    user_id = payload.get("id")
    if not user_id:
        logger.warning("Rejected token: missing user id")
        raise HTTPException(status_code=403, detail="Token is not valid")
    return {"id": user_id, "username": payload.get("username")}

@router.post("/signup", status_code=201)
async def signup(request: Credentials):
    if not request.username or not request.password:
        raise HTTPException(status_code=400, detail="Please enter all fields")

    logger.info(f"Signup attempt for username: {request.username}")
    try:
        if await db.users.find_one({"username": request.username}):
            raise HTTPException(status_code=400, detail="Username already exists")
        await db.users.insert_one({
            "id": str(uuid.uuid4()),
            "username": request.username,
            "password": hash_password(request.password),
            "createdAt": datetime.now(timezone.utc).isoformat(),
        })
    except DuplicateKeyError:
        raise HTTPException(status_code=400, detail="Username already exists")
    except PyMongoError:
        logger.exception("Signup error")
        raise HTTPException(status_code=500, detail="Server error during signup")

    logger.info(f"User registered: {request.username}")
    return {"message": "User registered successfully!"}

@router.post("/login")
async def login(request: Credentials):
    if not request.username or not request.password:
        raise HTTPException(status_code=400, detail="Please enter all fields")

    logger.info(f"Login attempt for username: {request.username}")
    try:
        user = await db.users.find_one({"username": request.username})
    except PyMongoError:
        logger.exception("Login error")
        raise HTTPException(status_code=500, detail="Server error during login")

    if not user or not verify_password(request.password, user["password"]):
        logger.warning(f"Invalid credentials for username: {request.username}")
        raise HTTPException(status_code=400, detail="Invalid credentials")

    token = create_access_token(user["id"], user["username"])
    return {
        "message": "Login successful!",
        "user": {
            "id": user["id"],
            "username": user["username"],
        },
        "token": token,
    }

@router.get("/auth/verify")
async def verify_token(current_user: dict = Depends(get_current_user)):
    try:
        user = await db.users.find_one({"id": current_user["id"]}, {"password": 0})
    except PyMongoError:
        logger.exception("Verify token error")
        raise HTTPException(status_code=500, detail="Server error during token verification")
    if not user:
        logger.warning(f"User not found for id: {current_user['id']}")
        raise HTTPException(status_code=404, detail="User not found")
    return {
        "message": "Token is valid",
        "user": {
            "id": user["id"],
            "username": user["username"],
        },
    }
