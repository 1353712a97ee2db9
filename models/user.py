# models/user.py
from pydantic import BaseModel

class Credentials(BaseModel):
    username: str = ""
    password: str = ""

class UserPublic(BaseModel):
    id: str
    username: str
