"""
Task Model
"""
from sqlalchemy import Column, DateTime, Float, ForeignKey, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from gsd.database import Base
from gsd.models.identifiers import new_id


class Task(Base):
    __tablename__ = "tasks"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    list_id = Column(String(36), ForeignKey("lists.id"), nullable=False, index=True)
    origin_backlog_id = Column(String(36), ForeignKey("lists.id"), nullable=False)
    title = Column(String(500), nullable=False)
    description = Column(Text, nullable=True)
    order_index = Column(Float, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    completed_at = Column(DateTime(timezone=True), nullable=True, index=True)

    # Relationships
    list = relationship("TaskList", foreign_keys=[list_id])
    origin_backlog = relationship("TaskList", foreign_keys=[origin_backlog_id])

    @property
    def is_completed(self) -> bool:
        return self.completed_at is not None
