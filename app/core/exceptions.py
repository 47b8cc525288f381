# app/core/exceptions.py
"""Errors raised by services and turned into HTTP responses in ``app.main``."""


class AppError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """A request payload failed its schema; carries the first message only."""

    status_code = 400


class BadRequest(AppError):
    status_code = 400


class InvalidId(BadRequest):
    pass


class Conflict(AppError):
    # no dedicated 409 on this API
    status_code = 400


class Unauthorized(AppError):
    status_code = 401


class NotFound(AppError):
    status_code = 404
