# rescue_api/main.py

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import os
import logging

from rescue_api.api.company import router as company_router
from rescue_api.api.roster import router as roster_router
from rescue_api.api.shift import router as shift_router
from rescue_api.api.team import router as team_router
from rescue_api.api.team_type import router as team_type_router

from rescue_api.core.settings import settings
from rescue_api.database import engine
from rescue_api.models.base import Base
import rescue_api.models  # noqa: F401  регистрирует все таблицы в Base.metadata
from rescue_api.core.exceptions import BaseAppException, ErrorKind
from rescue_api.schemas.response import ErrorDetail, ErrorResponse

# Логирование
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger("Rescue.API")

STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.INTERNAL: 500,
}

app = FastAPI(
    title="Rescue Teams API",
    version="1.0.0",
    description="Emergency-response team records: shifts, companies, team types and team rosters",
)

# Middlewares
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Роутеры
app.include_router(company_router)
app.include_router(roster_router)
app.include_router(shift_router)
app.include_router(team_router)
app.include_router(team_type_router)

# Health check & root
@app.get("/", tags=["Health"])
def root():
    return {"status": "Rescue Teams API is running!"}

@app.get("/health", tags=["Health"])
def health():
    return {"ok": True}

@app.on_event("startup")
async def startup_event():
    logger.info(f"Starting Rescue Teams API ({settings.ENV})")
    Base.metadata.create_all(bind=engine)

@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Stopping Rescue Teams API")

@app.exception_handler(BaseAppException)
async def app_exception_handler(request: Request, exc: BaseAppException):
    status_code = STATUS_BY_KIND.get(exc.kind, 500)
    if exc.kind is ErrorKind.INTERNAL:
        # Детали сбоя только в логах
        logger.error(f"{request.method} {request.url.path} failed: {exc!r}")
        detail = ErrorDetail(code=exc.kind.value, message="Internal server error.")
    else:
        logger.info(f"{request.method} {request.url.path} -> {status_code}: {exc.message}")
        detail = ErrorDetail(code=exc.kind.value, message=exc.message, details=exc.details)
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=detail).model_dump())

@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """
    Ошибки типов, найденные pydantic, отдаются так же, как ошибки правил: 400 и ErrorResponse.
    """
    details = [
        {"field": ".".join(str(part) for part in err["loc"] if part != "body"), "reason": err["msg"]}
        for err in exc.errors()
    ]
    message = "; ".join(f"{d['field']}: {d['reason']}" for d in details)
    logger.info(f"{request.method} {request.url.path} -> 400: {message}")
    detail = ErrorDetail(code=ErrorKind.VALIDATION.value, message=message, details=details)
    return JSONResponse(status_code=400, content=ErrorResponse(error=detail).model_dump())

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "rescue_api.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", 8000)),
        reload=settings.DEBUG,
    )
