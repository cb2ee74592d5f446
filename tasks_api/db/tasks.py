# db/tasks.py
from typing import Any, List, Tuple

from ..models.task import CreateTaskReq, Task, UpdateTaskReq
from .errors import NothingToUpdate, TaskNotFound

SELECT_TASKS = "SELECT task_id, name, priority FROM tasks ORDER BY task_id"
SELECT_TASK = "SELECT task_id, name, priority FROM tasks WHERE task_id = $1"
INSERT_TASK = "INSERT INTO tasks (name, priority) VALUES ($1, $2) RETURNING task_id"
DELETE_TASK = "DELETE FROM tasks WHERE task_id = $1"


def affected_rows(status: str) -> int:
    """Количество строк из статуса команды asyncpg ("UPDATE 1", "DELETE 0")."""
    try:
        return int(status.rsplit(" ", 1)[-1])
    except (AttributeError, ValueError):
        return 0


def update_fields(task: UpdateTaskReq) -> List[Tuple[str, Any]]:
    """Пары (колонка, значение) только для переданных полей, порядок: name, priority."""
    fields = []
    if task.name is not None:
        fields.append(("name", task.name))
    if task.priority is not None:
        fields.append(("priority", task.priority))
    return fields


def build_update(task_id: int, task: UpdateTaskReq) -> Tuple[str, list]:
    fields = update_fields(task)
    if not fields:
        raise NothingToUpdate()

    updates = [f"{column} = ${i}" for i, (column, _) in enumerate(fields, start=1)]
    args = [value for _, value in fields]
    args.append(task_id)

    query = f"UPDATE tasks SET {', '.join(updates)} WHERE task_id = ${len(args)}"
    return query, args


async def list_tasks(db) -> List[Task]:
    rows = await db.fetch(SELECT_TASKS)
    return [Task(**dict(row)) for row in rows]


async def get_task(db, task_id: int) -> Task:
    row = await db.fetchrow(SELECT_TASK, task_id)
    if row is None:
        raise TaskNotFound(task_id)
    return Task(**dict(row))


async def create_task(db, task: CreateTaskReq) -> int:
    row = await db.fetchrow(INSERT_TASK, task.name, task.priority)
    return row["task_id"]


async def update_task(db, task_id: int, task: UpdateTaskReq) -> int:
    # Проверка пустого тела идёт до обращения к базе
    query, args = build_update(task_id, task)
    status = await db.execute(query, *args)
    return affected_rows(status)


async def delete_task(db, task_id: int) -> int:
    status = await db.execute(DELETE_TASK, task_id)
    return affected_rows(status)
