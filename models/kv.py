from sqlalchemy import Column, String, Text
from models.base import Base, TimestampMixin

class KeyValueEntry(Base, TimestampMixin):
    __tablename__ = "kv_entries"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)
