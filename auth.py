from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Request
from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel
from sqlalchemy import select

from config import Settings
from database import Database, admin_users, get_db
from logger import get_logger
from schemas import AdminUser, LoginRequest

logger = get_logger(__name__)

# Use pbkdf2_sha256 to avoid external bcrypt dependency issues
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

router = APIRouter(prefix="/api/auth", tags=["auth"])


class Token(BaseModel):
    message: str = "Login successful"
    token: str
    access_token: str
    token_type: str = "bearer"
    user: dict


# =========
# Utilities
# =========

def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, settings: Settings, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_current_admin(request: Request, authorization: Optional[str] = Header(None)) -> dict:
    """Reject the request unless it carries a valid admin bearer token."""
    if not authorization or not authorization.lower().startswith("bearer "):
        raise HTTPException(status_code=401, detail="Not authenticated")
    token = authorization.split(" ", 1)[1].strip()
    settings = get_settings(request)
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        raise HTTPException(status_code=403, detail="Invalid token")
    username = payload.get("sub")
    if not username or payload.get("role") != "admin":
        raise HTTPException(status_code=403, detail="Invalid token")
    return {"username": username, "user_id": payload.get("user_id"), "role": "admin"}


def find_admin(db: Database, username: str) -> Optional[dict]:
    return db.fetch_one(select(admin_users).where(admin_users.c.username == username))


def seed_admin(db: Database, settings: Settings) -> Optional[dict]:
    """Create the configured admin account unless it already exists."""
    if not settings.admin_username:
        return None
    existing = find_admin(db, settings.admin_username)
    if existing:
        return existing
    password_hash = settings.admin_password_hash
    if not password_hash and settings.admin_password:
        password_hash = hash_password(settings.admin_password)
    if not password_hash:
        logger.warning("No admin password configured; admin login is disabled.")
        return None
    admin = AdminUser(username=settings.admin_username, email=settings.admin_email, password_hash=password_hash)
    row = db.create_row(admin_users, admin.model_dump())
    logger.info(f"Seeded admin user '{admin.username}'")
    return row


# ======
# Routes
# ======
@router.post("/login", response_model=Token)
def login(data: LoginRequest, db: Database = Depends(get_db), settings: Settings = Depends(get_settings)):
    user = find_admin(db, data.username)
    if not user or not verify_password(data.password, user["password_hash"]):
        logger.warning(f"Failed login attempt for username={data.username!r}")
        raise HTTPException(status_code=401, detail="Invalid credentials")
    token = create_access_token({"sub": user["username"], "user_id": user["id"], "role": "admin"}, settings)
    return Token(
        token=token,
        access_token=token,
        user={"id": user["id"], "username": user["username"], "email": user["email"]},
    )


@router.post("/verify")
def verify(admin: dict = Depends(get_current_admin)):
    return {"message": "Token is valid", "user_id": admin["user_id"], "username": admin["username"]}
