from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, declarative_base
from taskbrain.conf import DATABASE_URL, DB_LOG_ENABLED, POOL_SIZE, MAX_OVERFLOW, POOL_TIMEOUT
from taskbrain.core.log.logging_service import get_logger

logger = get_logger(__name__)

# echo=True prints all executed SQL. Keep it off unless debugging.
engine = create_engine(
    DATABASE_URL,
    echo=DB_LOG_ENABLED,
    pool_size=POOL_SIZE,
    max_overflow=MAX_OVERFLOW,
    pool_timeout=POOL_TIMEOUT,
)

@event.listens_for(engine, "connect")
def set_pg_timezone(dbapi_connection, connection_record):
    """
    Sets the session timezone to UTC for PostgreSQL connections so created_at
    and updated_at are compared in UTC. SQLite has no timezone support and
    needs nothing.
    """
    if hasattr(dbapi_connection, "server_version"):  # PostgreSQL connection
        try:
            with dbapi_connection.cursor() as cursor:
                cursor.execute("SET TIMEZONE TO 'UTC'")
        except Exception as e:
            # Log the error but don't fail the connection
            logger.warning(f"Could not set timezone to UTC: {e}")

# autoflush=False: nothing is flushed until commit or an explicit flush.
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
Base = declarative_base()

