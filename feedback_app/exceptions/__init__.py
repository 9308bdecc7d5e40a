from feedback_app.exceptions.custom_exception import (
    CustomException,
    InvalidInputException,
    ConflictException,
    UnauthorizedException,
    NotFoundException,
)
from feedback_app.exceptions.custom_exception_handler import custom_exception_handler, internal_exception_handler
from feedback_app.exceptions.validation_exception_handler import validation_exception_handler

__all__ = [
    "CustomException",
    "InvalidInputException",
    "ConflictException",
    "UnauthorizedException",
    "NotFoundException",
    "custom_exception_handler",
    "internal_exception_handler",
    "validation_exception_handler",
]
