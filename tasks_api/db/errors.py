# db/errors.py


class StorageError(Exception):
    """Любая ошибка базы данных. Текст ошибки отдаётся клиенту как есть."""


class TaskNotFound(StorageError):
    """Запрос вернул ноль строк там, где ожидалась одна."""

    def __init__(self, task_id: int):
        self.task_id = task_id
        super().__init__("no rows returned by a query that expected to return at least one row")


class NothingToUpdate(ValueError):
    def __init__(self):
        super().__init__("Nothing to update")
