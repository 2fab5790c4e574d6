from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from datetime import datetime
import logging

from app.exceptions import BookingDomainError
from app.services.email import email_service

logger = logging.getLogger("app")


async def booking_domain_exception_handler(request: Request, exc: BookingDomainError):
    logger.info(
        "Booking rejected | path=%s | status=%s | reason=%s",
        request.url.path,
        exc.status_code,
        exc.message,
    )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = [
        {
            "field": ".".join(str(part) for part in error["loc"][1:]),
            "message": error["msg"],
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=400, content={"detail": "Validation failed", "errors": errors}
    )


# Global unhandled exception handler -> logs ERROR and sends email
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(
        "Unhandled error | path=%s | method=%s | client=%s",
        request.url.path,
        request.method,
        request.client.host if request.client else "unknown",
    )

    if email_service.enabled and email_service.is_configured():
        error_data = {
            "path": request.url.path,
            "method": request.method,
            "client": request.client.host if request.client else "unknown",
            "exception": exc,
            "timestamp": datetime.utcnow().strftime("%Y-%m-%d %H:%M:%S"),
        }
        email_service.send_error_email(error_data)

    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BookingDomainError, booking_domain_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
