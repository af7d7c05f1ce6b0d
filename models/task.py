import uuid
import enum
from sqlalchemy import Column, Text, TIMESTAMP, ForeignKey, Boolean, Integer, String, Index
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from .base import Base


class TaskColor(enum.Enum):
    PURPLE = "purple"
    BLUE = "blue"
    ORANGE = "orange"
    GREEN = "green"
    PINK = "pink"


class Task(Base):
    __tablename__ = "tasks"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    name = Column(Text, nullable=False)
    time = Column(String(5), nullable=False)       # HH:MM
    date = Column(String(10), nullable=False)      # YYYY-MM-DD
    deadline = Column(String(16), nullable=False)  # "{date} {time}"
    progress = Column(Integer, nullable=False, default=0)
    completed = Column(Boolean, nullable=False, default=False)
    icon = Column(Text, nullable=False, default="📝")
    color = Column(String(16), nullable=False, default=TaskColor.PURPLE.value)
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="tasks")

    __table_args__ = (
        Index("ix_tasks_user_created", "user_id", "created_at"),
        Index("ix_tasks_user_completed", "user_id", "completed"),
    )

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "userId": str(self.user_id),
            "name": self.name,
            "time": self.time,
            "date": self.date,
            "deadline": self.deadline,
            "progress": self.progress,
            "completed": self.completed,
            "icon": self.icon,
            "color": self.color,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
