import logging
from typing import Optional
from fastapi import APIRouter, Depends, File, Request, UploadFile
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session
from app.database import get_db
from app.models.task import Task, TaskCategory, TaskStatus
from app.models.user import User
from app.schemas.response import envelope
from app.schemas.task import TaskCreate, TaskUpdate, TaskStatusUpdate, TaskOut, TaskPopulatedOut
from app.utils.auth import get_current_user
from app.utils.csv_tasks import read_csv_file, row_to_task_fields, task_to_row, iter_csv
from app.utils.errors import ApiError
from app.utils.files import save_upload, delete_file
from app.utils.notifications import notify_task_assigned

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks", tags=["tasks"], dependencies=[Depends(get_current_user)])


def _serialize(task: Task, populated: bool = False) -> dict:
    schema = TaskPopulatedOut if populated else TaskOut
    return schema.model_validate(task).model_dump(by_alias=True, mode="json")


def _get_task_or_error(db: Session, task_id: str, status_code: int = 402) -> Task:
    task = db.get(Task, task_id)
    if not task:
        raise ApiError(status_code, "Task not found")
    return task


def _get_assignee(db: Session, user_id: Optional[str]) -> Optional[User]:
    if user_id is None:
        return None
    user = db.get(User, user_id)
    if not user:
        raise ApiError(404, "Assigned user not found")
    return user


def _list_filters(request: Request) -> dict:
    """Accept both filters[priority]=high and filters.priority=high query styles."""
    params = request.query_params
    filters = {}
    for key in ("priority", "status"):
        value = params.get(f"filters[{key}]") or params.get(f"filters.{key}")
        if value:
            filters[key] = value
    return filters


@router.post("/register", status_code=201)
def add_task(task: TaskCreate, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    if not task.title or not task.description.strip():
        raise ApiError(400, "All fields are required")

    assignee = _get_assignee(db, task.assign_to)
    new = Task(
        title=task.title,
        description=task.description,
        category=task.category,
        status=task.status,
        created_by=user.id,
        assign_to=assignee.id if assignee else None,
        due_date=task.due_date,
    )
    db.add(new)
    db.commit()
    db.refresh(new)
    logger.info("Task %s created by %s", new.id, user.id)

    notify_task_assigned(assignee, new.title)
    return envelope(201, _serialize(new), "New Task added successfully")


@router.delete("/delete/{task_id}")
def delete_task(task_id: str, db: Session = Depends(get_db)):
    task = _get_task_or_error(db, task_id)
    data = _serialize(task)
    db.delete(task)
    db.commit()
    logger.info("Task %s deleted", task_id)
    return envelope(200, data, "Task deleted successfully")


@router.patch("/update/{task_id}")
def update_task(task_id: str, body: TaskUpdate, db: Session = Depends(get_db)):
    task = _get_task_or_error(db, task_id)
    changes = body.model_dump(include=body.model_fields_set)

    for field in ("title", "description"):
        if field in changes and (changes[field] is None or not changes[field].strip()):
            raise ApiError(400, "All fields are required")

    new_assignee = None
    if "assign_to" in changes:
        new_assignee = _get_assignee(db, changes["assign_to"])
        if new_assignee and new_assignee.id == task.assign_to:
            new_assignee = None

    for field, value in changes.items():
        # null category/status means "leave unchanged", not "clear"
        if value is None and field in ("category", "status"):
            continue
        setattr(task, field, value)

    db.commit()
    db.refresh(task)

    notify_task_assigned(new_assignee, task.title)
    return envelope(200, _serialize(task), "Task updated successfully")


@router.patch("/status/{task_id}")
def update_task_status(task_id: str, body: TaskStatusUpdate, db: Session = Depends(get_db)):
    task = _get_task_or_error(db, task_id)
    task.status = body.status
    db.commit()
    db.refresh(task)
    return envelope(200, _serialize(task), "Task status updated")


@router.get("/getTasks")
def get_tasks(db: Session = Depends(get_db), filters: dict = Depends(_list_filters)):
    query = db.query(Task)
    try:
        if "priority" in filters:
            query = query.filter(Task.category == TaskCategory(filters["priority"]))
        if "status" in filters:
            query = query.filter(Task.status == TaskStatus(filters["status"]))
    except ValueError as e:
        raise ApiError(400, str(e))

    tasks = query.order_by(Task.created_at).all()
    return envelope(200, [_serialize(t, populated=True) for t in tasks], "Tasks retrieved successfully")


@router.get("/getTask/{task_id}")
def get_task_by_id(task_id: str, db: Session = Depends(get_db)):
    task = _get_task_or_error(db, task_id, status_code=404)
    return envelope(200, _serialize(task, populated=True), "Task retrieved successfully")


def _find_user_by_name(db: Session, name: Optional[str]) -> Optional[User]:
    if not name:
        return None
    return db.query(User).filter(User.name == name.strip()).first()


def _import_rows(db: Session, rows: list[dict]) -> int:
    """Insert rows one by one in file order; earlier rows stay committed if a later one fails."""
    imported = 0
    # line 1 is the header
    for line, row in enumerate(rows, start=2):
        creator = _find_user_by_name(db, row.get("createdBy"))
        assignee = _find_user_by_name(db, row.get("assignTo"))
        if not creator or not assignee:
            raise ValueError(f"Invalid user in createdBy or assignTo on line {line}")

        fields = row_to_task_fields(row)
        db.add(Task(**fields, created_by=creator.id, assign_to=assignee.id))
        db.commit()
        imported += 1
    return imported


@router.post("/import")
def import_tasks(file: Optional[UploadFile] = File(None), db: Session = Depends(get_db)):
    if file is None or not file.filename:
        raise ApiError(400, "File not found. Please upload a CSV file.")

    path = save_upload(file)
    try:
        rows = read_csv_file(path)
        imported = _import_rows(db, rows)
    except Exception:
        logger.exception("Error during CSV import of %s", file.filename)
        db.rollback()
        raise ApiError(500, "Error importing tasks")
    finally:
        delete_file(path)

    logger.info("Imported %d tasks from %s", imported, file.filename)
    return envelope(200, imported, "Tasks imported successfully")


@router.get("/export")
def export_tasks(db: Session = Depends(get_db)):
    tasks = db.query(Task).order_by(Task.created_at).all()
    # resolve rows now; the session is closed before the body is streamed
    rows = [task_to_row(t) for t in tasks]
    return StreamingResponse(
        iter_csv(rows),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="tasks.csv"'},
    )
