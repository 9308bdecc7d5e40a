from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi import status
from feedback_app.constants.error import ERROR


def validation_exception_handler(request, exc: RequestValidationError):

    errors = []

    for err in exc.errors():
        field = err["loc"][-1] if err["loc"] else "body"

        default_msg = err["msg"].removeprefix("Value error, ")

        custom_msg = getattr(ERROR, f"REQUIRED_{str(field).upper()}", default_msg)

        errors.append({
            "field": field,
            "message": custom_msg
        })

    message = errors[0]["message"] if errors else ERROR.VALIDATION_FAILED

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "statusCode": 400,
            "message": message,
            "errors": errors
        }
    )
