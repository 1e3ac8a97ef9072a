from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base


class ModelBase:
    def to_dict(self):
        return {
            column.name: getattr(self, column.name)
            for column in self.__table__.columns
        }


Base = declarative_base(cls=ModelBase)


def create_db_engine(url, pool_size=5, max_overflow=10):
    if url.startswith("sqlite"):
        # SQLite connections are handed between the threadpool workers
        return create_engine(url, echo=False, connect_args={"check_same_thread": False})
    return create_engine(
        url,
        echo=False,
        pool_size=pool_size,
        max_overflow=max_overflow,
        pool_pre_ping=True,
    )


def create_session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False)


def get_db(request: Request):
    db = request.app.state.SessionLocal()
    try:
        yield db
    finally:
        db.close()
