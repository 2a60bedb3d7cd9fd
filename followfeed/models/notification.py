from sqlalchemy import Column, Integer, String, DateTime, UUID, ForeignKey, JSON
from followfeed.db.session import Base
from datetime import datetime
import uuid

class Notification(Base):
    __tablename__ = "notifications"
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Integer, ForeignKey('users.id', ondelete="CASCADE"), nullable=False, index=True)  # recipient
    type = Column(String, nullable=False)  # follow, new-post
    data = Column(JSON, nullable=False, default=dict)
    read_at = Column(DateTime, nullable=True)  # set once, never cleared
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
