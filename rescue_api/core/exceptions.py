# rescue_api/core/exceptions.py
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, List, Optional


class ErrorKind(str, Enum):
    """Тег ошибки: по нему API выбирает HTTP-статус."""
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INTERNAL = "internal"


@dataclass(frozen=True)
class FieldError:
    """Нарушение правила для одного поля (или пары полей, например `dates`)."""
    field: str
    reason: str

    def __str__(self) -> str:
        return f"{self.field}: {self.reason}"


class BaseAppException(Exception):
    """Базовый класс для всех кастомных исключений приложения."""
    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str = "App exception"):
        super().__init__(message)
        self.message = message

    @property
    def details(self) -> Optional[Any]:
        return None

# ==== Валидация ====

class ValidationError(BaseAppException):
    """Входные данные нарушают правило поля или правило между полями."""
    kind = ErrorKind.VALIDATION

    def __init__(self, errors: Iterable[FieldError]):
        self.errors: List[FieldError] = list(errors)
        if not self.errors:
            raise ValueError("ValidationError requires at least one FieldError")
        super().__init__("; ".join(str(e) for e in self.errors))

    @classmethod
    def single(cls, field: str, reason: str) -> "ValidationError":
        return cls([FieldError(field, reason)])

    @property
    def field(self) -> str:
        return self.errors[0].field

    @property
    def reason(self) -> str:
        return self.errors[0].reason

    @property
    def details(self) -> List[dict]:
        return [{"field": e.field, "reason": e.reason} for e in self.errors]

    def under(self, prefix: str) -> "ValidationError":
        """Та же ошибка, но с путём поля относительно владельца (`shift.name`)."""
        return ValidationError(FieldError(f"{prefix}.{e.field}", e.reason) for e in self.errors)

# ==== NotFound ====

class NotFoundError(BaseAppException):
    """Ссылка указывает на несуществующую запись."""
    kind = ErrorKind.NOT_FOUND

    def __init__(self, entity: str, entity_id: Any):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} with id={entity_id} not found.")

    @property
    def details(self) -> dict:
        return {"entity": self.entity, "id": self.entity_id}

# ==== Конфликты ====

class ConflictError(BaseAppException):
    """Нарушено ограничение уникальности (имя компании, телефон бойца)."""
    kind = ErrorKind.CONFLICT

    def __init__(self, message: str = "Unique constraint violated", field: Optional[str] = None):
        super().__init__(message)
        self.field = field

    @property
    def details(self) -> Optional[dict]:
        return {"field": self.field} if self.field else None

# ==== Внутренние ====

class InternalError(BaseAppException):
    """Непредвиденный сбой. Детали только в логах, не в ответе."""
    kind = ErrorKind.INTERNAL

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)

# ==== Агрегат ====

class AggregateSaveError(BaseAppException):
    """Сохранение команды не удалось; `cause` хранит исходную ошибку."""

    def __init__(self, cause: BaseAppException):
        self.cause = cause
        self.kind = cause.kind
        super().__init__(f"Error saving team: {cause.message}")

    @property
    def details(self) -> Optional[Any]:
        return self.cause.details
