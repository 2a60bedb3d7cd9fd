from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from followfeed.core.config import settings

db_url_lower = settings.DATABASE_URL.lower()
is_postgres = "postgresql" in db_url_lower or "postgres" in db_url_lower
is_sqlite = db_url_lower.startswith("sqlite")

connect_args = {}
if is_postgres:
    # Set client encoding to UTF-8 for PostgreSQL connections
    connect_args["client_encoding"] = "UTF8"
if is_sqlite:
    # Sessions are handed across the threadpool and the scheduler thread
    connect_args["check_same_thread"] = False

engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    connect_args=connect_args,
    echo=False  # Set to True for SQL query debugging
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base=declarative_base()

def get_db():
    db=SessionLocal()
    try:
        yield db
        
    finally:
        db.close()

def get_session_factory():
    """For handlers that outlive a request (websockets): open short sessions themselves."""
    return SessionLocal
