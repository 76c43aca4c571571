"""Global exception handlers for the FastAPI application."""

import traceback

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..messages import MessageCode, get_default_message
from src.utils.logger import get_logger

logger = get_logger(__name__)


class MarketplaceException(Exception):
    """Base exception for the marketplace API with unified message codes."""

    def __init__(
        self,
        message_code: MessageCode,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: dict | None = None,
        headers: dict | None = None,
        message: str | None = None,
    ):
        self.message_code = message_code
        self.status_code = status_code
        self.message: str = message or get_default_message(message_code)
        self.details = details or {}
        self.headers = headers or {}
        super().__init__(self.message)

    def to_response_dict(self) -> dict:
        """Convert exception to API response format."""
        return {
            "message_code": self.message_code,
            "message": self.message,
            "details": self.details,
        }


def _serializable_errors(errors) -> list[dict]:
    serializable_errors = []
    for error in errors:
        error_dict = dict(error)
        if "input" in error_dict and hasattr(error_dict["input"], "isoformat"):
            error_dict["input"] = error_dict["input"].isoformat()
        # ctx may carry the raised ValueError itself
        if "ctx" in error_dict:
            error_dict["ctx"] = {k: str(v) for k, v in error_dict["ctx"].items()}
        error_dict.pop("url", None)
        serializable_errors.append(error_dict)
    return serializable_errors


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""

    @app.exception_handler(MarketplaceException)
    async def marketplace_exception_handler(
        request: Request, exc: MarketplaceException
    ) -> JSONResponse:
        """Handle custom marketplace exceptions."""
        log = logger.error if exc.status_code >= 500 else logger.warning
        log(
            f"Marketplace exception: {exc.message_code.value}",
            path=request.url.path,
            method=request.method,
            message_code=exc.message_code.value,
            details=exc.details,
        )

        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_response_dict(),
            headers=exc.headers,
        )

    @app.exception_handler(HTTPException)
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Handle FastAPI and Starlette HTTP exceptions."""
        logger.warning(
            f"HTTP exception {exc.status_code}: {exc.detail}",
            path=request.url.path,
            method=request.method,
        )

        message_code = (
            MessageCode.NOT_FOUND
            if exc.status_code == status.HTTP_404_NOT_FOUND
            else MessageCode.BAD_REQUEST
            if exc.status_code < 500
            else MessageCode.INTERNAL_ERROR
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "message_code": message_code,
                "message": str(exc.detail),
                "details": {"description": "HTTP exception occurred"},
            },
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle request validation errors."""
        logger.warning(
            "Validation error occurred",
            path=request.url.path,
            method=request.method,
        )

        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "message_code": MessageCode.VALIDATION_ERROR,
                "message": get_default_message(MessageCode.VALIDATION_ERROR),
                "details": {
                    "description": "Request validation failed",
                    "validation_errors": _serializable_errors(exc.errors()),
                },
            },
        )

    @app.exception_handler(ValidationError)
    async def pydantic_validation_exception_handler(
        request: Request, exc: ValidationError
    ) -> JSONResponse:
        """Handle Pydantic validation errors raised inside handlers."""
        logger.warning(
            "Pydantic validation error occurred",
            path=request.url.path,
            method=request.method,
        )

        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "message_code": MessageCode.VALIDATION_ERROR,
                "message": "Validation failed",
                "details": {
                    "validation_errors": _serializable_errors(exc.errors()),
                },
            },
        )

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_exception_handler(
        request: Request, exc: SQLAlchemyError
    ) -> JSONResponse:
        """Handle SQLAlchemy database errors."""
        logger.error(
            f"Database error: {str(exc)}",
            path=request.url.path,
            method=request.method,
            exception_type=type(exc).__name__,
        )

        if isinstance(exc, IntegrityError):
            return JSONResponse(
                status_code=status.HTTP_409_CONFLICT,
                content={
                    "message_code": MessageCode.CONFLICT,
                    "message": "Data integrity constraint violated",
                    "details": {"database_error": "Constraint violation"},
                },
            )

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "message_code": MessageCode.INTERNAL_ERROR,
                "message": "Database error occurred",
                "details": {"database_error": "Internal database error"},
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Handle all other unhandled exceptions."""
        logger.error(
            f"Unhandled exception: {str(exc)}",
            path=request.url.path,
            method=request.method,
            exception_type=type(exc).__name__,
            traceback=traceback.format_exc(),
        )

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "message_code": MessageCode.INTERNAL_ERROR,
                "message": "Internal server error",
                "details": {"error_type": type(exc).__name__},
            },
        )
