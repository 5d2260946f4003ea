from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from os import getenv

DATABASE_URL = getenv("DATABASE_URL", "postgresql+psycopg://taskpriority:taskpriority@db:5432/taskpriority")

# SQLite (usage local mono-utilisateur): les sessions passent d'un thread à l'autre
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, echo=False, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

def get_db():
    """Session DB par requête, fermée en fin de requête"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
