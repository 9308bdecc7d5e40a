import logging
from fastapi.responses import JSONResponse
from feedback_app.constants.error import ERROR
from feedback_app.exceptions.custom_exception import CustomException

logger = logging.getLogger(__name__)


def custom_exception_handler(request, exc: CustomException):
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "statusCode": exc.status_code,
            "message": exc.message
        }
    )


def internal_exception_handler(request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={
            "statusCode": 500,
            "message": ERROR.INTERNAL_ERROR
        }
    )
