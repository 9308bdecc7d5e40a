from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from feedback_app.config.env_config import settings
from feedback_app.utils.logger_utils import log_info

DATABASE_URL = settings.database_url

engine_options = {"echo": settings.DB_ECHO, "pool_pre_ping": True}

if DATABASE_URL.startswith("sqlite"):
    # In-memory SQLite must share one connection across the request threads
    engine_options["connect_args"] = {"check_same_thread": False}
    if DATABASE_URL in ("sqlite://", "sqlite:///:memory:"):
        engine_options["poolclass"] = StaticPool

engine = create_engine(DATABASE_URL, **engine_options)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

log_info(context="DATABASE", message=f"Database engine created for {engine.url.get_backend_name()}")


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
