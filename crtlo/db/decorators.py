"""Decorators for data route handlers."""

from functools import wraps
from http import HTTPStatus

from fastapi import HTTPException

from crtlo.exceptions import AuthError, ValidationError
from crtlo.utils.logger import logger


def handle_route_errors(operation: str):
    """
    Decorator to handle component failures consistently across data endpoints.

    Client errors pass through untouched. Anything else rolls back the
    repository session, is logged with context, and becomes a 500 with the
    message `Failed to <operation>: <error>`.

    Args:
        operation: Description of the operation (e.g., "process question")

    Returns:
        Decorator function
    """

    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except (HTTPException, AuthError, ValidationError):
                raise
            except Exception as e:
                repository = kwargs.get("repository")
                owner_id = kwargs.get("owner_id")

                if repository is not None:
                    await repository.session.rollback()

                logger.exception(
                    "[ROUTES] Operation failed",
                    operation=operation,
                    user_id=owner_id,
                    error=str(e),
                )

                raise HTTPException(
                    status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
                    detail=f"Failed to {operation}: {str(e)}",
                ) from e

        return wrapper

    return decorator
