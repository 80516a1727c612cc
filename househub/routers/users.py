"""Admin user management (list, create, update role/profile, delete)."""
import logging
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from househub.database import get_db
from househub.models.user import User
from househub.schemas.auth import AdminUserCreate, UserDeleteRequest, UserResponse, UserUpdateRequest
from househub.dependencies import require_admin
from househub.services.auth import get_password_hash
from househub.services.filters import filter_users
from househub.services.roles import Role, parse_role

router = APIRouter(prefix="/api/users", tags=["users"])
log = logging.getLogger("uvicorn.error")


def _check_role_grant(actor: User, role: Role | None) -> None:
    """Only an owner can hand out the owner role."""
    if role == Role.owner and parse_role(actor.role) != Role.owner:
        raise HTTPException(status_code=403, detail="Only an owner can grant the owner role")


@router.get("", response_model=list[UserResponse])
def list_users(
    role: str | None = Query(None, description="Exact role, or 'all'"),
    search: str | None = Query(None, description="Case-insensitive match on name or email"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    users = db.query(User).order_by(User.full_name, User.email).all()
    return [UserResponse.model_validate(u) for u in filter_users(users, role=role, term=search)]


@router.post("", response_model=UserResponse)
def create_user(
    data: AdminUserCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    _check_role_grant(current_user, data.role)
    email = data.email.strip().lower()
    if db.query(User).filter(User.email == email).first():
        raise HTTPException(status_code=400, detail="Email already registered")
    user = User(
        email=email,
        hashed_password=get_password_hash(data.password),
        full_name=(data.full_name or "").strip() or None,
        phone=(data.phone or "").strip() or None,
        role=data.role.value,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    log.info("[Users] %s created user id=%s role=%s", current_user.email, user.id, user.role)
    return UserResponse.model_validate(user)


@router.post("/update", response_model=UserResponse)
def update_user(
    body: UserUpdateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    user = db.query(User).filter(User.id == body.user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    changes = body.user_data.model_dump(exclude_unset=True)
    if "role" in changes:
        _check_role_grant(current_user, body.user_data.role)
        if parse_role(user.role) == Role.owner and parse_role(current_user.role) != Role.owner:
            raise HTTPException(status_code=403, detail="Only an owner can change an owner's role")
        changes["role"] = body.user_data.role.value if body.user_data.role else Role.guest.value
    if "email" in changes and changes["email"]:
        email = changes["email"].strip().lower()
        clash = db.query(User).filter(User.email == email, User.id != user.id).first()
        if clash:
            raise HTTPException(status_code=400, detail="Email already registered")
        changes["email"] = email
    for field, value in changes.items():
        setattr(user, field, value)
    db.commit()
    db.refresh(user)
    log.info("[Users] %s updated user id=%s fields=%s", current_user.email, user.id, sorted(changes))
    return UserResponse.model_validate(user)


@router.post("/delete")
def delete_user(
    body: UserDeleteRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    if body.user_id == current_user.id:
        raise HTTPException(status_code=400, detail="You cannot delete your own account")
    user = db.query(User).filter(User.id == body.user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    if parse_role(user.role) == Role.owner and parse_role(current_user.role) != Role.owner:
        raise HTTPException(status_code=403, detail="Only an owner can delete an owner")
    db.delete(user)
    db.commit()
    log.info("[Users] %s deleted user id=%s", current_user.email, body.user_id)
    return {"status": "ok", "message": "User deleted"}
