from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import declarative_base, sessionmaker
import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./storage/wms.db")
DATABASE_ECHO = os.getenv("DATABASE_ECHO", "0") == "1"

_is_sqlite = DATABASE_URL.startswith("sqlite")

# Rotas síncronas correm no threadpool do FastAPI
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False} if _is_sqlite else {},
    echo=DATABASE_ECHO
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def init_db():
    """Cria a pasta do ficheiro SQLite (se for o caso) e as tabelas"""
    if _is_sqlite:
        database = make_url(DATABASE_URL).database
        if database and database != ":memory:":
            folder = os.path.dirname(database)
            if folder:
                os.makedirs(folder, exist_ok=True)
    Base.metadata.create_all(bind=engine)


def get_db():
    """Sessão por pedido (dependency do FastAPI)"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
