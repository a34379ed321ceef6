# backend/database.py
import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.orm.exc import StaleDataError
from dotenv import load_dotenv

from config import settings
from utils.errors import TransactionAborted

load_dotenv()

logger = logging.getLogger(__name__)

# 1. Database URL from the environment (.env) or the local SQLite default
SQLALCHEMY_DATABASE_URL = settings.DATABASE_URL

# 2. Hosted Postgres providers still hand out postgres:// URLs, SQLAlchemy requires postgresql://
if SQLALCHEMY_DATABASE_URL and SQLALCHEMY_DATABASE_URL.startswith("postgres://"):
    SQLALCHEMY_DATABASE_URL = SQLALCHEMY_DATABASE_URL.replace("postgres://", "postgresql://", 1)

# 3. Driver specific options
if "sqlite" in SQLALCHEMY_DATABASE_URL:
    connect_args = {"check_same_thread": False} # Only for SQLite
else:
    connect_args = {}

engine = create_engine(
    SQLALCHEMY_DATABASE_URL, connect_args=connect_args
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def init_db():
    # Models register themselves on Base.metadata when imported
    import models.users, models.store, models.product, models.sale  # noqa: F401
    import models.purchase, models.supplier, models.order  # noqa: F401
    import models.notification, models.log, models.token  # noqa: F401
    Base.metadata.create_all(bind=engine)


def run_transaction(db: Session, fn, max_attempts: int = None):
    """Run ``fn(db)`` as one atomic unit and commit it.

    Any exception rolls the whole unit back and propagates unchanged. A
    ``StaleDataError`` means another writer changed a version-checked row
    between our read and our write; the unit is rolled back and ``fn`` is
    run again from scratch, up to ``max_attempts`` times.
    """
    attempts = max_attempts or settings.TRANSACTION_MAX_ATTEMPTS
    for attempt in range(1, attempts + 1):
        try:
            result = fn(db)
            db.commit()
            return result
        except StaleDataError:
            db.rollback()
            logger.warning("Write conflict, retrying transaction (attempt %s/%s)", attempt, attempts)
        except Exception:
            db.rollback()
            raise
    raise TransactionAborted(f"Transaction aborted after {attempts} conflicting attempts")
