from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException


class UniformServiceError(Exception):
    """Base error for stock and issuance failures, rendered as {"error": message}."""

    status_code = 400
    default_message = "Request could not be processed."

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ItemNotFound(UniformServiceError):
    status_code = 404
    default_message = "Inventory item not found"


class StudentNotFound(UniformServiceError):
    status_code = 404
    default_message = "Student not found"


class InsufficientStock(UniformServiceError):
    status_code = 400
    default_message = "Insufficient stock"


class InvalidInput(UniformServiceError):
    status_code = 400
    default_message = "Invalid data"


class InvalidState(UniformServiceError):
    status_code = 400
    default_message = "Inventory quantity cannot go below zero"


class DuplicateItem(UniformServiceError):
    status_code = 409
    default_message = "Inventory item already exists for this school, item type and size"


def _format_validation_errors(exc: RequestValidationError) -> str:
    messages = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        if location:
            messages.append(f"{location}: {err.get('msg')}")
        else:
            messages.append(str(err.get("msg")))
    return "; ".join(messages) or "Invalid data"


def setup_exception_handlers(app: FastAPI):

    @app.exception_handler(UniformServiceError)
    async def uniform_service_error_handler(request: Request, exc: UniformServiceError):
        return JSONResponse(content={"error": exc.message}, status_code=exc.status_code)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return JSONResponse(
            content={"error": str(exc.detail)},
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(content={"error": _format_validation_errors(exc)}, status_code=400)
