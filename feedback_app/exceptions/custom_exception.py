class CustomException(Exception):
    """Application error carrying the HTTP status code and message to render."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class InvalidInputException(CustomException):
    def __init__(self, message: str):
        super().__init__(status_code=400, message=message)


class ConflictException(CustomException):
    # Duplicate resources are reported as bad requests, not 409
    def __init__(self, message: str):
        super().__init__(status_code=400, message=message)


class UnauthorizedException(CustomException):
    def __init__(self, message: str):
        super().__init__(status_code=401, message=message)


class NotFoundException(CustomException):
    """Absent resources and resources owned by someone else alike."""

    def __init__(self, message: str):
        super().__init__(status_code=404, message=message)
