#rescue_api/schemas/response.py
from pydantic import BaseModel, Field
from typing import Any, Optional

class ErrorDetail(BaseModel):
    """
    ErrorDetail — детальное описание ошибки (код, сообщение, детали).
    """
    code: str = Field(..., examples=["validation"], description="Код ошибки (machine-readable)")
    message: str = Field(..., examples=["name: exceeds max length 50"], description="Сообщение об ошибке")
    details: Optional[Any] = Field(None, examples=[[{"field": "name", "reason": "exceeds max length 50"}]], description="Дополнительные детали")

class ErrorResponse(BaseModel):
    """
    ErrorResponse — стандартная структура для ошибки.
    """
    error: ErrorDetail

class SuccessResponse(BaseModel):
    """
    SuccessResponse — подтверждение операции.
    """
    result: Any = Field(..., description="Результат запроса (обычно ID записи)")
    detail: Optional[str] = Field(None, examples=["Team created"], description="Дополнительная информация")
