"""Row mapping between Task records and the CSV import/export format.

Export writes one row per task with user references resolved to names;
import reads the same shape back. Rows look like::

    title,description,category,status,createdBy,assignTo,isCompleted,dueDate,createdAt,updatedAt
    Ship v1,Cut the release,high,Completed,alice,bob,TRUE,2026-03-01T00:00:00,...
"""
import csv
import io
from datetime import datetime, UTC
from typing import Iterable, Iterator, Optional
from app.models.task import Task, TaskCategory, TaskStatus

CSV_FIELDS = [
    "title",
    "description",
    "category",
    "status",
    "createdBy",
    "assignTo",
    "isCompleted",
    "dueDate",
    "createdAt",
    "updatedAt",
]


def read_csv_file(path) -> list[dict]:
    # utf-8-sig drops the BOM spreadsheet tools put in front of the header
    with open(path, newline="", encoding="utf-8-sig") as f:
        return list(csv.DictReader(f))


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is not None and value.tzinfo is not None:
        value = value.astimezone(UTC).replace(tzinfo=None)
    return value


def parse_datetime(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp into a naive UTC datetime; empty means None."""
    if value is None or not value.strip():
        return None
    return to_naive_utc(datetime.fromisoformat(value.strip()))


def format_datetime(value: Optional[datetime]) -> str:
    if value is None:
        return ""
    return to_naive_utc(value).isoformat()


def row_to_task_fields(row: dict) -> dict:
    """Coerce a CSV row into Task column values, leaving user references out.

    Raises ValueError for blank title/description, unknown enum values or
    unparseable dates.
    """
    title = (row.get("title") or "").strip()
    description = row.get("description") or ""
    if not title or not description.strip():
        raise ValueError("title and description are required")

    raw_category = (row.get("category") or "").strip()
    category = TaskCategory(raw_category) if raw_category else TaskCategory.MEDIUM

    is_completed = (row.get("isCompleted") or "").strip().upper() == "TRUE"
    raw_status = (row.get("status") or "").strip()
    if raw_status:
        status = TaskStatus(raw_status)
    elif is_completed:
        status = TaskStatus.COMPLETED
    else:
        status = TaskStatus.NOT_STARTED

    now = datetime.now(UTC).replace(tzinfo=None)
    created_at = parse_datetime(row.get("createdAt")) or now
    updated_at = parse_datetime(row.get("updatedAt")) or created_at

    return {
        "title": title,
        "description": description,
        "category": category,
        "status": status,
        "due_date": parse_datetime(row.get("dueDate")),
        "created_at": created_at,
        "updated_at": updated_at,
    }


def task_to_row(task: Task) -> dict:
    return {
        "title": task.title,
        "description": task.description,
        "category": task.category.value,
        "status": task.status.value,
        "createdBy": task.creator.name if task.creator else "",
        "assignTo": task.assignee.name if task.assignee else "",
        "isCompleted": "TRUE" if task.is_completed else "FALSE",
        "dueDate": format_datetime(task.due_date),
        "createdAt": format_datetime(task.created_at),
        "updatedAt": format_datetime(task.updated_at),
    }


def iter_csv(rows: Iterable[dict]) -> Iterator[str]:
    """Yield the CSV document chunk by chunk: the header first, then one chunk per row."""
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=CSV_FIELDS)

    writer.writeheader()
    yield buffer.getvalue()
    for row in rows:
        buffer.seek(0)
        buffer.truncate(0)
        writer.writerow(row)
        yield buffer.getvalue()
