import logging
from fastapi import APIRouter, HTTPException, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from followfeed.db.session import get_db
from followfeed.models.user import User
from followfeed.schemas.user import UserCreate, UserLogin, UserResponse, RefreshRequest, TokenResponse
from followfeed.core.auth import (
    authenticate_user,
    create_access_token,
    create_refresh_token,
    decode_token,
    get_password_hash,
    get_current_user,
)
from followfeed.core.config import settings

router = APIRouter()
logger = logging.getLogger(__name__)


def _issue_tokens(user_id: int) -> TokenResponse:
    return TokenResponse(
        access_token=create_access_token(data={"sub": str(user_id)}),
        refresh_token=create_refresh_token(data={"sub": str(user_id)}),
        access_token_expires=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
        refresh_token_expires=settings.REFRESH_TOKEN_EXPIRE_MINUTES,
    )


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(credentials: UserCreate, db: Session = Depends(get_db)):
    """Register a new user and return access token."""
    existing_email = db.query(User).filter(User.email == credentials.email).first()
    if existing_email:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered"
        )
    
    db_user = User(
        name=credentials.name,
        email=credentials.email,
        password_hash=get_password_hash(credentials.password),
    )
    
    try:
        db.add(db_user)
        db.commit()
        db.refresh(db_user)
    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered"
        )
    
    logger.info("Registered user %s", db_user.id)
    return _issue_tokens(db_user.id)

@router.post("/login", response_model=TokenResponse)
async def login(credentials: UserLogin, db: Session = Depends(get_db)):
    """Login user and return access token."""
    user = authenticate_user(db, credentials.email, credentials.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return _issue_tokens(user.id)

@router.post("/refresh", response_model=TokenResponse)
async def refresh_token(body: RefreshRequest):
    """Exchange a refresh token for a fresh token pair."""
    user_id = decode_token(body.refresh_token, expected_type="refresh")
    if user_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid refresh token")
    return _issue_tokens(user_id)

@router.get("/me", response_model=UserResponse)
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Get current user information."""
    return current_user
