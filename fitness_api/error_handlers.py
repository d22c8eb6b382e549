"""
Global exception handlers

Every failure leaves the API as {"error": <message>, "code": <CODE>}.
"""
import traceback

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from fitness_api.utils.errors import FitnessApiError
from fitness_api.utils.validators import field_error_code


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(FitnessApiError)
    async def fitness_error_handler(request: Request, exc: FitnessApiError):
        if exc.http_status >= 500:
            print(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
        return JSONResponse(status_code=exc.http_status, content=exc.to_response())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        print(f"Validation error on {request.method} {request.url.path}: {exc.errors()}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=build_validation_error_response(exc),
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        print(f"Error in {request.method} {request.url.path}: {type(exc).__name__}: {exc}")
        traceback.print_exception(type(exc), exc, exc.__traceback__)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": f"Internal server error: {exc}", "code": "INTERNAL_ERROR"},
        )


def build_validation_error_response(exc: RequestValidationError) -> dict:
    """Report the first failing body field with a MISSING_/INVALID_ code"""
    errors = exc.errors()
    if not errors:
        return {"error": "Invalid request body", "code": "INVALID_BODY"}

    first = errors[0]
    loc = [part for part in first.get("loc", ()) if part != "body"]
    if first.get("type") == "json_invalid" or not loc or not isinstance(loc[0], str):
        return {"error": "Request body must be a valid JSON object", "code": "INVALID_BODY"}

    field = loc[0]
    missing = first.get("type") == "missing"
    message = f"{field} is required" if missing else f"{field}: {first.get('msg', 'invalid value')}"
    return {"error": message, "code": field_error_code(field, missing)}
