"""Signup, login and the signed-in user's own profile."""
import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from househub.database import get_db
from househub.models.user import User
from househub.schemas.auth import ProfileUpdate, Token, UserCreate, UserLogin, UserResponse
from househub.dependencies import get_current_user
from househub.services.auth import create_access_token, get_password_hash, verify_password
from househub.services.roles import Role

router = APIRouter(prefix="/auth", tags=["auth"])
log = logging.getLogger("uvicorn.error")


def _normalize_email(email: str) -> str:
    return (email or "").strip().lower()


@router.post("/register", response_model=Token)
def register(data: UserCreate, db: Session = Depends(get_db)):
    """Self-service signup. New accounts start as guests; admins promote them later."""
    email = _normalize_email(data.email)
    if db.query(User).filter(User.email == email).first():
        raise HTTPException(status_code=400, detail="Email already registered")
    user = User(
        email=email,
        hashed_password=get_password_hash(data.password),
        full_name=(data.full_name or "").strip() or None,
        phone=(data.phone or "").strip() or None,
        role=Role.guest.value,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    log.info("[Auth] Registered user id=%s email=%s", user.id, user.email)
    token = create_access_token(user.id, user.email, user.role)
    return Token(access_token=token, user=UserResponse.model_validate(user))


@router.post("/login", response_model=Token)
def login(data: UserLogin, db: Session = Depends(get_db)):
    user = db.query(User).filter(User.email == _normalize_email(data.email)).first()
    if not user or not verify_password(data.password, user.hashed_password):
        log.info("[Auth] Failed login for email=%s", data.email)
        raise HTTPException(status_code=401, detail="Invalid email or password")
    token = create_access_token(user.id, user.email, user.role)
    return Token(access_token=token, user=UserResponse.model_validate(user))


@router.get("/me", response_model=UserResponse)
def me(current_user: User = Depends(get_current_user)):
    return UserResponse.model_validate(current_user)


@router.put("/me", response_model=UserResponse)
def update_me(
    data: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(current_user, field, value)
    db.commit()
    db.refresh(current_user)
    return UserResponse.model_validate(current_user)
