import enum
import uuid
from datetime import datetime, UTC
from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Enum
from sqlalchemy.orm import relationship
from app.database import Base
from app.models.user import User


class TaskCategory(str, enum.Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class TaskStatus(str, enum.Enum):
    NOT_STARTED = "Not Started"
    IN_PROCESS = "In Process"
    COMPLETED = "Completed"


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


def _utcnow():
    return datetime.now(UTC)


class Task(Base):
    __tablename__ = "tasks"

    id = Column(String(32), primary_key=True, default=lambda: uuid.uuid4().hex)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    category = Column(
        Enum(TaskCategory, values_callable=_enum_values, native_enum=False, validate_strings=True),
        nullable=False,
        default=TaskCategory.MEDIUM,
    )
    status = Column(
        Enum(TaskStatus, values_callable=_enum_values, native_enum=False, validate_strings=True),
        nullable=False,
        default=TaskStatus.NOT_STARTED,
    )
    created_by = Column(String(32), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    assign_to = Column(String(32), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    due_date = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=_utcnow)
    updated_at = Column(DateTime, nullable=False, default=_utcnow, onupdate=_utcnow)

    creator = relationship(User, foreign_keys=[created_by], lazy="joined")
    assignee = relationship(User, foreign_keys=[assign_to], lazy="joined")

    @property
    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED
