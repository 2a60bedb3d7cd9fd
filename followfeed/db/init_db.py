import logging
from sqlalchemy import inspect, text
from followfeed.db.session import engine as default_engine, Base

# Import all models before create_all
from followfeed import models  # noqa: F401

logger = logging.getLogger(__name__)

def create_missing_tables(engine=None):
    engine = engine or default_engine
    logger.info("Creating missing tables...")
    Base.metadata.create_all(bind=engine)

def add_missing_columns(engine=None) -> list:
    """ALTER existing tables to add columns the models gained since they were created."""
    engine = engine or default_engine
    inspector = inspect(engine)
    added = []
    with engine.connect() as conn:
        for table_name, model_table in Base.metadata.tables.items():
            if table_name not in inspector.get_table_names():
                logger.warning("Table %s not found in DB, creating it...", table_name)
                model_table.create(bind=conn, checkfirst=True)
                conn.commit()
                continue
            existing_cols = [col["name"] for col in inspector.get_columns(table_name)]
            for col_name, col in model_table.columns.items():
                if col_name not in existing_cols:
                    sql = f'ALTER TABLE "{table_name}" ADD COLUMN "{col_name}" {col.type.compile(engine.dialect)};'
                    logger.info("Adding column %s.%s", table_name, col_name)
                    conn.execute(text(sql))
                    conn.commit()
                    added.append(f"{table_name}.{col_name}")
    return added

def sync_database(engine=None):
    create_missing_tables(engine)
    add_missing_columns(engine)
    logger.info("Database sync complete.")
