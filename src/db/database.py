"""Generate database session"""

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.config import DATABASE_URL
from src.db.schema import Base


def create_session_factory(database_url: str = DATABASE_URL) -> sessionmaker[Session]:
    """Connect to the database and make sure all tables exist."""
    engine: Engine = create_engine(database_url)
    Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine)

