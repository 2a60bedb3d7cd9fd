from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List
from followfeed.db.session import get_db
from followfeed.models.post import Post
from followfeed.models.user import User
from followfeed.schemas.post import PostCreate, PostResponse
from followfeed.core.auth import get_current_user
from followfeed.services import posts

router = APIRouter()

@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_in: PostCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Publish a post; every follower of the author gets a new-post notification
    """
    return await posts.create_post(db, current_user, post_in.title, post_in.body)

@router.get("", response_model=List[PostResponse])
async def list_posts(
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db)
):
    return db.query(Post).order_by(Post.created_at.desc(), Post.id.desc()).limit(limit).all()

@router.get("/{post_id}", response_model=PostResponse)
async def get_post(post_id: int, db: Session = Depends(get_db)):
    return posts.get_post(db, post_id)
