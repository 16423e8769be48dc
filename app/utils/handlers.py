import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.utils.exceptions import AppException, EmptyInputException, PasswordHashException

logger = logging.getLogger(__name__)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Обработчик кастомных исключений приложения."""
    logger.warning(f"Ошибка приложения: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"status": "error", "message": exc.detail}
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Обработчик ошибок валидации (Pydantic)."""
    errors = exc.errors()
    simplified_errors = [
        {"field": ".".join(map(str, error["loc"][1:])), "message": error["msg"]}
        for error in errors
    ]
    logger.warning(f"Ошибка валидации: {simplified_errors}")
    return JSONResponse(
        status_code=422,
        content={"status": "validation_error", "errors": simplified_errors}
    )


async def password_hash_exception_handler(request: Request, exc: PasswordHashException) -> JSONResponse:
    """Обработчик ошибок хеширования паролей, не перехваченных сервисом."""
    if isinstance(exc, EmptyInputException):
        logger.warning(f"Пустой пароль: {exc}")
        return JSONResponse(
            status_code=422,
            content={"status": "validation_error", "errors": [{"field": "password", "message": str(exc)}]}
        )

    logger.error(f"Ошибка хеширования пароля ({type(exc).__name__}): {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"status": "error", "message": "Произошла внутренняя ошибка сервера"}
    )


async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Обработчик ошибок базы данных."""
    logger.error(f"Database error: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"status": "db_error", "message": "Ошибка при работе с базой данных"}
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Обработчик всех остальных непредвиденных ошибок."""
    logger.critical(f"НЕПРЕДВИДЕННАЯ ОШИБКА: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"status": "critical_error", "message": "Произошла внутренняя ошибка сервера"}
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Регистрация всех обработчиков исключений."""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(PasswordHashException, password_hash_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
