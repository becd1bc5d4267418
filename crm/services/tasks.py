from sqlalchemy import select
from sqlalchemy.orm import Session

from ..errors import InvalidInput, NotFound
from ..models import Client, Lead, Task, TaskStatusEnum
from ..schemas import TaskCreate, TaskUpdate


def list_tasks(db: Session, status: TaskStatusEnum | None = None) -> list[Task]:
    query = select(Task).order_by(Task.due_date.asc().nulls_last(), Task.id.asc())
    if status:
        query = query.where(Task.status == status)
    return list(db.scalars(query))


def get_task(db: Session, task_id: int) -> Task:
    task = db.get(Task, task_id)
    if not task:
        raise NotFound("Task", task_id)
    return task


def _validate_links(db: Session, lead_id: int | None, client_id: int | None) -> list[str]:
    errors: list[str] = []
    if lead_id is not None and not db.get(Lead, lead_id):
        errors.append("Lead not found.")
    if client_id is not None and not db.get(Client, client_id):
        errors.append("Client not found.")
    return errors


def create_task(db: Session, payload: TaskCreate) -> Task:
    errors = _validate_links(db, payload.lead_id, payload.client_id)
    if not payload.title.strip():
        errors.insert(0, "Title is required.")
    if errors:
        raise InvalidInput(errors)
    task = Task(**payload.model_dump())
    task.title = task.title.strip()
    db.add(task)
    db.commit()
    db.refresh(task)
    return task


def update_task(db: Session, task_id: int, payload: TaskUpdate) -> Task:
    task = get_task(db, task_id)
    changes = payload.model_dump(exclude_unset=True)
    errors = _validate_links(db, changes.get("lead_id"), changes.get("client_id"))
    if "title" in changes and not (changes["title"] or "").strip():
        errors.insert(0, "Title is required.")
    if errors:
        raise InvalidInput(errors)
    for key, value in changes.items():
        if key in ("priority", "status") and value is None:
            continue
        setattr(task, key, value)
    db.commit()
    db.refresh(task)
    return task


def delete_task(db: Session, task_id: int) -> None:
    task = get_task(db, task_id)
    db.delete(task)
    db.commit()
