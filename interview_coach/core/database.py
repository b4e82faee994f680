from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from interview_coach.core.config import settings

connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    connect_args["check_same_thread"] = False

engine = create_engine(settings.DATABASE_URL, future=True, connect_args=connect_args)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    # Register every model on Base.metadata before creating tables
    from interview_coach.models import user, session, question, response, feedback  # noqa: F401

    Base.metadata.create_all(bind=engine)
