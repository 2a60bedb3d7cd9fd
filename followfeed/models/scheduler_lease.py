from sqlalchemy import Column, String, DateTime
from followfeed.db.session import Base

class SchedulerLease(Base):
    """Row-level mutual exclusion for scheduled tasks shared by every replica."""
    __tablename__ = "scheduler_leases"
    
    name = Column(String, primary_key=True)
    owner = Column(String, nullable=False)
    expires_at = Column(DateTime, nullable=False, index=True)
