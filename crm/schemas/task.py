from datetime import date, datetime

from pydantic import BaseModel

from ..models import TaskPriorityEnum, TaskStatusEnum


class TaskCreate(BaseModel):
    title: str
    description: str | None = None
    due_date: date | None = None
    priority: TaskPriorityEnum = TaskPriorityEnum.MEDIUM
    status: TaskStatusEnum = TaskStatusEnum.PENDING
    lead_id: int | None = None
    client_id: int | None = None


class TaskUpdate(BaseModel):
    title: str | None = None
    description: str | None = None
    due_date: date | None = None
    priority: TaskPriorityEnum | None = None
    status: TaskStatusEnum | None = None
    lead_id: int | None = None
    client_id: int | None = None


class TaskRead(BaseModel):
    id: int
    title: str
    description: str | None
    due_date: date | None
    priority: TaskPriorityEnum
    status: TaskStatusEnum
    lead_id: int | None
    client_id: int | None
    created_at: datetime

    model_config = {"from_attributes": True}
