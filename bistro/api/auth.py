"""
User authentication API endpoints
"""

from fastapi import APIRouter, Depends
from sqlmodel import Session, select
import structlog
import uuid

from bistro.core.auth import create_access_token, hash_password, verify_password
from bistro.core.database import get_session
from bistro.core.dependencies import get_current_user_id
from bistro.core.exceptions import ConflictError, ForbiddenError, NotFoundError, UnauthorizedError
from bistro.models.user import User
from bistro.schemas.token import TokenResponse
from bistro.schemas.user import UserCreate, UserLogin, UserResponse

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post("/register", response_model=UserResponse)
def register_user(
    user_data: UserCreate,
    session: Session = Depends(get_session)
):
    """Register a new customer"""
    existing_user = session.exec(
        select(User).where(User.email == user_data.email)
    ).first()

    if existing_user:
        raise ConflictError("The user with the provided email already exists")

    new_user = User(
        email=user_data.email,
        password_hash=hash_password(user_data.password),
        name=user_data.name,
        surname=user_data.surname,
        phone=user_data.phone,
        is_active=True,
    )

    session.add(new_user)
    session.commit()
    session.refresh(new_user)

    logger.info("User registered", user_id=str(new_user.id))
    return new_user


@router.post("/login", response_model=TokenResponse)
def login_user(
    login_data: UserLogin,
    session: Session = Depends(get_session)
):
    """Login user"""
    user = session.exec(
        select(User).where(User.email == login_data.email)
    ).first()

    if not user or not verify_password(login_data.password, user.password_hash):
        raise UnauthorizedError("Invalid email or password")

    if not user.is_active:
        raise ForbiddenError("User account is inactive")

    logger.info("User logged in", user_id=str(user.id))

    access_token = create_access_token(user_id=user.id, role=user.role.value)
    return TokenResponse(
        access_token=access_token,
        user_id=str(user.id),
        role=user.role.value,
    )


@router.get("/me", response_model=UserResponse)
def get_current_user_info(
    user_id: uuid.UUID = Depends(get_current_user_id),
    session: Session = Depends(get_session)
):
    """Get current user info"""
    user = session.get(User, user_id)
    if not user:
        raise NotFoundError("User not found")
    return user
