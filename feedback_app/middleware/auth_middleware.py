from fastapi import Depends, Request
from sqlalchemy.orm import Session
from feedback_app.utils.auth_utils import verify_jwt
from feedback_app.config.database_config import get_db
from feedback_app.config.env_config import settings
from feedback_app.exceptions.custom_exception import CustomException, UnauthorizedException
from feedback_app.constants.error import ERROR
from feedback_app.schema.auth_schema import UserData
from feedback_app.services.auth_service import get_user_by_id
from feedback_app.utils.logger_utils import handle_middleware_error


def auth_middleware(request: Request, db: Session = Depends(get_db)) -> UserData:
    """
    Resolve the bearer token into the calling user. Routes receive the
    returned principal as a parameter and pass it on to the services.
    """
    try:
        token = request.headers.get("Authorization")
        if token is None:
            raise UnauthorizedException("Authorization header missing")

        if token.startswith("Bearer "):
            token = token[7:]

        payload = verify_jwt(
            token=token,
            secret_key=settings.SECRET_KEY,
            algorithm=settings.ALGORITHM
        )

        if not payload or "id" not in payload:
            raise UnauthorizedException("Invalid or expired token")

        if get_user_by_id(db, payload["id"]) is None:
            raise UnauthorizedException("Token user no longer exists")

        return UserData(**payload)

    except CustomException as e:
        # server-side failures keep their status; everything else is a bad token
        if e.status_code >= 500:
            raise
        handle_middleware_error(
            error=e,
            context="auth_middleware",
            custom_exception=UnauthorizedException(ERROR.UNAUTHORIZED)
        )
    except Exception as e:
        handle_middleware_error(
            error=e,
            context="auth_middleware",
            custom_exception=UnauthorizedException(ERROR.UNAUTHORIZED)
        )
