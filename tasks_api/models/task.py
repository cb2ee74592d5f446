# models/task.py
from typing import Annotated, Optional

from pydantic import BaseModel, Field

# Колонки task_id и priority в таблице — INTEGER (32 бита)
INT32_MIN = -2**31
INT32_MAX = 2**31 - 1

Int32 = Annotated[int, Field(ge=INT32_MIN, le=INT32_MAX)]


class Task(BaseModel):
    task_id: int
    name: str
    priority: Optional[int] = None


class CreateTaskReq(BaseModel):
    name: str
    priority: Optional[Int32] = None


class UpdateTaskReq(BaseModel):
    # null и отсутствие поля означают одно и то же: поле не меняется
    name: Optional[str] = None
    priority: Optional[Int32] = None
