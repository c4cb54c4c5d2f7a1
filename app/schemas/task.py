from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from app.models.task import TaskCategory, TaskStatus
from app.utils.csv_tasks import to_naive_utc


class TaskCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str
    description: str
    category: TaskCategory = TaskCategory.MEDIUM
    status: TaskStatus = TaskStatus.NOT_STARTED
    assign_to: Optional[str] = Field(None, alias="assignTo")
    due_date: Optional[datetime] = Field(None, alias="dueDate")

    @field_validator("title")
    @classmethod
    def strip_title(cls, v):
        return v.strip() if v is not None else v

    @field_validator("due_date")
    @classmethod
    def due_date_utc(cls, v):
        # stored naive, in UTC
        return to_naive_utc(v)


class TaskUpdate(BaseModel):
    """Partial update: only fields present in the request body are applied."""

    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[TaskCategory] = None
    status: Optional[TaskStatus] = None
    assign_to: Optional[str] = Field(None, alias="assignTo")
    due_date: Optional[datetime] = Field(None, alias="dueDate")

    @field_validator("title")
    @classmethod
    def strip_title(cls, v):
        return v.strip() if v is not None else v

    @field_validator("due_date")
    @classmethod
    def due_date_utc(cls, v):
        # stored naive, in UTC
        return to_naive_utc(v)


class TaskStatusUpdate(BaseModel):
    status: TaskStatus


class UserRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(serialization_alias="_id")
    name: str


class TaskOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(serialization_alias="_id")
    title: str
    description: str
    category: TaskCategory
    status: TaskStatus
    is_completed: bool = Field(serialization_alias="isCompleted")
    created_by: Optional[str] = Field(None, serialization_alias="createdBy")
    assign_to: Optional[str] = Field(None, serialization_alias="assignTo")
    due_date: Optional[datetime] = Field(None, serialization_alias="dueDate")
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")


class TaskPopulatedOut(TaskOut):
    """Task with createdBy/assignTo resolved to the referenced user's id and name."""

    created_by: Optional[UserRef] = Field(
        None, validation_alias="creator", serialization_alias="createdBy"
    )
    assign_to: Optional[UserRef] = Field(
        None, validation_alias="assignee", serialization_alias="assignTo"
    )
