from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool


def build_engine(database_uri: str) -> Engine:
    """Create an engine that holds exactly one connection.

    All reminder reads and writes share this connection; ReminderStore
    serializes access to it with a lock.
    """
    if database_uri.startswith("sqlite"):
        return create_engine(
            database_uri,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
            echo=False,
        )
    return create_engine(
        database_uri,
        pool_size=1,
        max_overflow=0,
        pool_pre_ping=True,    # Validate the connection before use
        echo=False,
    )


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)

