from .base import (
    AppError,
    ArticleNotFoundError,
    AuthenticationRequiredError,
    ConstraintViolationError,
    DomainError,
    InfrastructureError,
    RateLimitedError,
    StorageError,
    ValidationError,
)
from .http import handle_app_error, register_error_handler

__all__ = [
    "AppError",
    "ArticleNotFoundError",
    "AuthenticationRequiredError",
    "ConstraintViolationError",
    "DomainError",
    "InfrastructureError",
    "RateLimitedError",
    "StorageError",
    "ValidationError",
    "handle_app_error",
    "register_error_handler",
]
