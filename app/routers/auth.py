import logging

from fastapi import APIRouter, HTTPException, status, Depends

from app.models.user import UserCreate, UserLogin, UserInDB, UserPublic
from app.core.security import get_password_hash, verify_password, create_access_token, get_current_user_id
from app.db import dynamo

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/register", response_model=UserPublic, status_code=status.HTTP_201_CREATED)
def register(user: UserCreate):
    # Check if user already exists
    existing = dynamo.get_user_by_email(user.email)
    if existing:
        raise HTTPException(status_code=400, detail="User already exists")

    user_db = UserInDB(
        email=user.email,
        password_hash=get_password_hash(user.password)
    )

    success = dynamo.put_user(user_db.model_dump())
    if not success:
        raise HTTPException(status_code=500, detail="Error saving user")

    logger.info(f"Registered user {user_db.user_id}")
    return UserPublic(**user_db.model_dump())


@router.get("/me", response_model=UserPublic)
def get_current_user(user_id: str = Depends(get_current_user_id)):
    """Get current user profile"""
    user = dynamo.get_user_by_id(user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    return UserPublic(
        user_id=user["user_id"],
        email=user["email"],
        created_at=user.get("created_at", ""),
    )


@router.post("/login")
def login(login_data: UserLogin):
    logger.info(f"Login attempt for email: {login_data.email}")
    user = dynamo.get_user_by_email(login_data.email)

    if not user:
        logger.warning(f"User not found: {login_data.email}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    if not verify_password(login_data.password, user["password_hash"]):
        logger.warning(f"Invalid password for user: {login_data.email}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    access_token = create_access_token(data={"sub": user["user_id"]})
    logger.info(f"Login successful for user: {login_data.email}")

    user_public = UserPublic(
        user_id=user["user_id"],
        email=user["email"],
        created_at=user.get("created_at", ""),
    )
    return {
        "access_token": access_token,
        "token_type": "bearer",
        "user": user_public.model_dump()
    }


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(user_id: str = Depends(get_current_user_id)):
    """
    Tokens are stateless, so signing out is the client dropping its token.
    The endpoint only confirms the token was still valid.
    """
    logger.info(f"User {user_id} signed out")
    return None
