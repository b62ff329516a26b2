from sqlalchemy import Column, Integer, String, Text, DateTime
from datetime import datetime
from lifetrack.database import Base


class Document(Base):
    __tablename__ = "documents"

    id = Column(Integer, primary_key=True, index=True)
    key = Column(String, nullable=False, unique=True, index=True)  # Storage key, e.g. "day_summaries"
    payload = Column(Text, nullable=False)  # JSON-encoded collection

    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)
