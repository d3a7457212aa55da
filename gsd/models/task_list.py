"""
Task List Model
"""
from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from gsd.database import Base
from gsd.models.identifiers import new_id


class TaskList(Base):
    __tablename__ = "lists"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    order_index = Column(Float, nullable=False)
    is_backlog = Column(Boolean, default=False, nullable=False)
    is_done = Column(Boolean, default=False, nullable=False)
    color = Column(String(7), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    user = relationship("User", back_populates="lists")

    @property
    def kind(self) -> str:
        if self.is_done:
            return "done"
        return "backlog" if self.is_backlog else "intermediate"
