from sqlalchemy import Column, Integer, DateTime, ForeignKey
from followfeed.db.session import Base
from datetime import datetime

class Follow(Base):
    """Directed edge: follower_id follows followed_id. The composite key keeps each pair unique."""
    __tablename__ = "follows"
    
    follower_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    followed_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    
    def __repr__(self):
        return f"<Follow follower_id={self.follower_id} followed_id={self.followed_id}>"
