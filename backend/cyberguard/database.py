import os
from pathlib import Path
from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

# Load .env from backend/ directory
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

SQLITE_PATH = Path(__file__).resolve().parent.parent / "cyberguard.db"


def _database_url() -> str:
    url = os.getenv("DATABASE_URL", "").strip()
    if url:
        return url
    if os.getenv("MYSQL_DB"):
        user = os.getenv("MYSQL_USER", "root")
        password = os.getenv("MYSQL_PASSWORD", "")
        host = os.getenv("MYSQL_HOST", "127.0.0.1")
        port = os.getenv("MYSQL_PORT", "3306")
        return f"mysql+pymysql://{user}:{password}@{host}:{port}/{os.getenv('MYSQL_DB')}"
    return f"sqlite:///{SQLITE_PATH}"


DATABASE_URL = _database_url()

if DATABASE_URL.startswith("sqlite"):
    # TestClient and uvicorn workers share the connection across threads
    _connect_args = {"check_same_thread": False}
elif DATABASE_URL.startswith("mysql"):
    _connect_args = {
        "connect_timeout": 5,  # Don't hang more than 5s on connection attempt
        "read_timeout": 10,
        "write_timeout": 10,
    }
else:
    _connect_args = {}

engine = create_engine(
    DATABASE_URL,
    pool_pre_ping=True,
    pool_recycle=300,          # Recycle stale connections every 5 min
    connect_args=_connect_args,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def init_db():
    # Import registers the tables on Base.metadata
    from . import models  # noqa: F401
    Base.metadata.create_all(bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
