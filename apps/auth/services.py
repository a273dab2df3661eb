from sqlalchemy.orm import Session, joinedload
from apps.auth.models import UserModel, Role
from apps.auth.schemas import UserCreate
from core.config import settings
from core.database import get_db
from core.transactions import run_transaction
from fastapi import Depends, HTTPException, status
from passlib.context import CryptContext
from jose import JWTError, jwt
from fastapi.security import OAuth2PasswordBearer
from datetime import datetime, timedelta
from typing import Optional
import logging

logger = logging.getLogger(__name__)

ROLES = (
    ("admin", "Administrator"),
    ("technician", "Workshop technician"),
    ("clerk", "Front office clerk"),
)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/token")


def get_password_hash(password):
    return pwd_context.hash(password)

def verify_password(plain_password, hashed_password):
    return pwd_context.verify(plain_password, hashed_password)

def ensure_roles(db: Session):
    """Insert any missing built-in role; does not commit."""
    for role_name, description in ROLES:
        if not db.query(Role).filter(Role.name == role_name).first():
            db.add(Role(name=role_name, description=description))
            logger.info(f"Created role: {role_name}")
    db.flush()

def create_user(db: Session, user: UserCreate):
    role_obj = db.query(Role).filter(Role.name == user.role).first()
    if not role_obj:
        raise HTTPException(status_code=400, detail=f"Role '{user.role}' does not exist.")
    if db.query(UserModel).filter(UserModel.email == user.email).first():
        raise HTTPException(status_code=409, detail="Email already registered")

    def work(session: Session) -> UserModel:
        db_user = UserModel(
            name=user.name,
            email=user.email,
            hashed_password=get_password_hash(user.password),
            role=role_obj
        )
        session.add(db_user)
        session.flush()
        return db_user

    db_user = run_transaction(db, work)
    db.refresh(db_user)
    return db_user

def authenticate_user(db: Session, email: str, password: str):
    user = db.query(UserModel).filter(UserModel.email == email).first()
    if user and verify_password(password, user.hashed_password):
        return user
    return None

def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Signed JWT carrying ``data`` plus an ``exp`` claim from settings."""
    lifetime = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    claims = {**data, "exp": datetime.utcnow() + lifetime}
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

def get_current_user(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)):
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Your session expired, log out and log in again",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        email: str = payload.get("sub")
        if email is None:
            raise credentials_exception
    except JWTError:
        raise credentials_exception
    user = (
        db.query(UserModel)
        .options(joinedload(UserModel.role))
        .filter(UserModel.email == email)
        .first()
    )
    if user is None:
        raise credentials_exception
    return user


def get_current_admin(current_user: UserModel = Depends(get_current_user)):
    if not current_user.role or current_user.role.name != "admin":
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin privileges required")
    return current_user
