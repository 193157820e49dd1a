from sqlalchemy import create_engine, Column, String, DateTime, Text
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from datetime import datetime
from config import settings

if settings.DATABASE_URL.startswith("sqlite"):
    # One shared connection so the in-memory database is visible to every session
    engine = create_engine(
        settings.DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
else:
    engine = create_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

ACTIVATION_STATUSES = ("pending", "success", "failed")

# Database Models
class ActivationRequestRecord(Base):
    __tablename__ = "activation_requests"

    id = Column(String(36), primary_key=True, index=True)
    installation_id = Column(String(255), nullable=False)
    product_version = Column(String(50), nullable=False)

    # Result
    confirmation_id = Column(String(255))
    status = Column(String(20), nullable=False, default="pending")  # pending, success, failed
    error_message = Column(Text)
    processing_time = Column(String(20))

    created_at = Column(DateTime, default=datetime.utcnow, index=True)

# Create tables
Base.metadata.create_all(bind=engine)

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
