from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine, Session
from bookstore.config import settings


def _build_engine(url: str):
    if url.startswith("sqlite"):
        # single shared connection so an in-memory db survives across sessions
        return create_engine(
            url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    return create_engine(
        url,
        echo=False,
        pool_pre_ping=True,      # checks dead connections
        pool_recycle=1800        # refresh every 30 min
    )


engine = _build_engine(settings.database_url)


def create_db_and_tables():
    from bookstore import models  # noqa: F401  registers every table
    SQLModel.metadata.create_all(engine)


def drop_db_and_tables():
    from bookstore import models  # noqa: F401
    SQLModel.metadata.drop_all(engine)


def get_session():
    with Session(engine) as session:
        yield session
