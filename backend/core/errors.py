"""Error types raised by the user directory and the user routes.

Each error knows the HTTP status it maps to and the JSON payload returned to
the client, so the exception handlers in ``backend.main`` only render them.
"""

from fastapi import status

REQUIRED_USER_FIELDS = ('name', 'username', 'email', 'password')


class UserDirectoryError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_payload(self) -> dict:
        return {'message': self.message}


class MissingFieldsError(UserDirectoryError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, required: tuple[str, ...] = REQUIRED_USER_FIELDS) -> None:
        super().__init__('Missing required fields')
        self.required = list(required)

    def to_payload(self) -> dict:
        return {'message': self.message, 'required': self.required}


class UserConflictError(UserDirectoryError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self) -> None:
        super().__init__('Username or email already exists')


class UserNotFoundError(UserDirectoryError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self) -> None:
        super().__init__('User not found')


class UnexpectedFaultError(UserDirectoryError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, error: str) -> None:
        super().__init__(message)
        self.error = error

    def to_payload(self) -> dict:
        return {'message': self.message, 'error': self.error}
