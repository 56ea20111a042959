from sqlalchemy import BigInteger, Column, String, Text

from .database import Base


class StoredBlob(Base):
    """A named text value, one row per key (the whole inventory is one row)."""

    __tablename__ = "stored_blobs"

    key = Column(String(120), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(BigInteger, nullable=False)
