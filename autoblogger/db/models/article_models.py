# /autoblogger/db/models/article_models.py

from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.sql import func
from ..base_class import Base


class Article(Base):
    # Write-once: a row is inserted when generation succeeds and never changes.
    slug = Column(String, primary_key=True, index=True)
    title = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime, server_default=func.now(), index=True, nullable=False)


class GenerationLock(Base):
    __tablename__ = "locks" # Override automatic pluralization
    id = Column(Integer, primary_key=True, autoincrement=True)
    marker = Column(String, nullable=False, default="lock")
    created_at = Column(DateTime, server_default=func.now(), index=True, nullable=False)
