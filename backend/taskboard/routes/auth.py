"""
Account routes: registration, login and the current-user lookup.
"""

from fastapi import APIRouter, Depends, status
from starlette.concurrency import run_in_threadpool
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from taskboard.auth import get_current_user
from taskboard.database import get_session
from taskboard.exceptions import UnauthorizedError, ValidationError
from taskboard.logging_config import get_logger
from taskboard.models import User
from taskboard.schemas import AuthResponse, UserLogin, UserRead, UserRegister
from taskboard.security import create_access_token, hash_password, verify_password

logger = get_logger(__name__)

router = APIRouter()


def _auth_response(user: User) -> AuthResponse:
    return AuthResponse(
        token=create_access_token(user.id),
        user=UserRead.model_validate(user),
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_in: UserRegister,
    session: AsyncSession = Depends(get_session),
) -> AuthResponse:
    """Create an account and return a bearer token for it."""
    existing = await session.execute(select(User).where(User.email == user_in.email))
    if existing.scalars().first() is not None:
        raise ValidationError.for_field("email", "User already exists")

    user = User(
        name=user_in.name,
        email=user_in.email,
        password_hash=await run_in_threadpool(hash_password, user_in.password),
    )
    session.add(user)
    await session.flush()
    await session.refresh(user)
    await session.commit()

    logger.info(f"Registered user: id={user.id} email={user.email}")

    return _auth_response(user)


@router.post("/login", response_model=AuthResponse)
async def login(
    credentials: UserLogin,
    session: AsyncSession = Depends(get_session),
) -> AuthResponse:
    """Exchange email and password for a bearer token."""
    result = await session.execute(select(User).where(User.email == credentials.email))
    user = result.scalars().first()

    if user is None or not await run_in_threadpool(verify_password, credentials.password, user.password_hash):
        logger.warning(f"Failed login for {credentials.email}")
        raise UnauthorizedError("Invalid credentials")

    logger.info(f"User logged in: id={user.id}")

    return _auth_response(user)


@router.get("/me", response_model=UserRead)
async def read_current_user(
    current_user: User = Depends(get_current_user),
) -> UserRead:
    """Return the authenticated user."""
    return UserRead.model_validate(current_user)
