from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import TaskStatusEnum
from ..schemas import TaskCreate, TaskRead, TaskUpdate
from ..services import tasks as tasks_service

router = APIRouter()


@router.get("/tasks", response_model=list[TaskRead])
def tasks_list(
    status: TaskStatusEnum | None = None, db: Session = Depends(get_db)
) -> list[TaskRead]:
    return tasks_service.list_tasks(db, status)


@router.post("/tasks", response_model=TaskRead, status_code=201)
def tasks_create(payload: TaskCreate, db: Session = Depends(get_db)) -> TaskRead:
    return tasks_service.create_task(db, payload)


@router.patch("/tasks/{task_id}", response_model=TaskRead)
def tasks_update(
    task_id: int, payload: TaskUpdate, db: Session = Depends(get_db)
) -> TaskRead:
    return tasks_service.update_task(db, task_id, payload)


@router.delete("/tasks/{task_id}", status_code=204)
def tasks_delete(task_id: int, db: Session = Depends(get_db)) -> Response:
    tasks_service.delete_task(db, task_id)
    return Response(status_code=204)
