from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field

class PostCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    body: str = Field(..., min_length=1)

class PostResponse(BaseModel):
    id: int
    user_id: int
    title: str
    body: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
