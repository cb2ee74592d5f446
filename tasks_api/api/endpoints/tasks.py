# api/endpoints/tasks.py
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request

from ...db import tasks as repo
from ...models.task import INT32_MAX, INT32_MIN, CreateTaskReq, UpdateTaskReq

router = APIRouter()

TaskId = Annotated[int, Path(ge=INT32_MIN, le=INT32_MAX)]


def get_db(request: Request):
    """Пул подключений, созданный при старте приложения."""
    return request.app.state.db


@router.get("")
async def list_tasks(db=Depends(get_db)):
    tasks = await repo.list_tasks(db)
    return {"success": True, "data": [task.model_dump() for task in tasks]}


@router.get("/{task_id}")
async def get_task(task_id: TaskId, db=Depends(get_db)):
    task = await repo.get_task(db, task_id)
    return {"success": True, "data": task.model_dump()}


@router.post("", status_code=201)
async def create_task(task: CreateTaskReq, db=Depends(get_db)):
    task_id = await repo.create_task(db, task)
    return {"success": True, "data": {"task_id": task_id}}


@router.put("/{task_id}")
async def update_task(task_id: TaskId, task: UpdateTaskReq, db=Depends(get_db)):
    updated = await repo.update_task(db, task_id, task)
    if not updated:
        logging.info(f"Update matched no task with id {task_id}")
    return {"success": True}


@router.delete("/{task_id}")
async def delete_task(task_id: TaskId, db=Depends(get_db)):
    deleted = await repo.delete_task(db, task_id)
    if not deleted:
        logging.info(f"Delete matched no task with id {task_id}")
    return {"success": True}
