from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from feedback_app.schema.auth_schema import RegisterRequest, SignInRequest
from feedback_app.models.user_model import User
from feedback_app.exceptions import (
    CustomException,
    ConflictException,
    InvalidInputException,
    UnauthorizedException,
)
from feedback_app.constants.error import ERROR
from feedback_app.utils.auth_utils import verify_password, hash_password, generate_jwt
from feedback_app.utils.logger_utils import log_database_operation
from feedback_app.config.env_config import settings
import logging

logger = logging.getLogger(__name__)


def generate_token(user_id: str) -> str:
    return generate_jwt(
        data={"id": user_id},
        expire_minutes=settings.ACCESS_TOKEN_EXP_TIME,
        secret_key=settings.SECRET_KEY,
        algorithm=settings.ALGORITHM
    )


def _auth_payload(user: User) -> dict:
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "token": generate_token(user.id),
    }


def register_user(db: Session, data: RegisterRequest):
    """
    Create a new account and sign it in.
    Fails on a taken email before looking at the password.
    """
    try:
        existing = db.query(User).filter(User.email == data.email).first()
        if existing:
            raise ConflictException(ERROR.USER_ALREADY_EXISTS)

        if len(data.password) < settings.PASSWORD_MIN_LENGTH:
            raise InvalidInputException(
                ERROR.PASSWORD_TOO_SHORT.format(min_length=settings.PASSWORD_MIN_LENGTH)
            )

        new_user = User(
            name=data.name,
            email=data.email,
            password=hash_password(data.password),
        )
        db.add(new_user)
        db.commit()
        db.refresh(new_user)
        log_database_operation("INSERT", "register_user", {"user_id": new_user.id})

        logger.info(f"User {new_user.id} registered")
        return _auth_payload(new_user)

    except CustomException:
        raise
    except IntegrityError as e:
        # Lost a race against a concurrent registration with the same email
        db.rollback()
        logger.warning(f"Integrity error - email already exists: {e}")
        raise ConflictException(ERROR.USER_ALREADY_EXISTS)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error in register_user: {e}", exc_info=True)
        raise CustomException(status_code=500, message=ERROR.INTERNAL_ERROR)


def sign_in_user(db: Session, data: SignInRequest):
    """
    Unknown email and wrong password produce the same error.
    """
    try:
        user = db.query(User).filter(User.email == data.email).first()

        if not user or not verify_password(password=data.password, hashed=user.password):
            raise UnauthorizedException(ERROR.INVALID_CREDENTIALS)

        logger.info(f"User {user.id} signed in")
        return _auth_payload(user)

    except CustomException:
        raise
    except SQLAlchemyError as e:
        logger.error(f"Database error in sign_in_user: {e}", exc_info=True)
        raise CustomException(status_code=500, message=ERROR.INTERNAL_ERROR)


def get_user_by_id(db: Session, user_id: str):
    try:
        return db.query(User).filter(User.id == user_id).first()
    except SQLAlchemyError as e:
        logger.error(f"Database error in get_user_by_id: {e}", exc_info=True)
        raise CustomException(status_code=500, message=ERROR.INTERNAL_ERROR)
