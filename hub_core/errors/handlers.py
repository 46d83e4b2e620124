# =============================================================================
# hub_core/errors/handlers.py
# Error Handling Utilities for MediGo Hub
# =============================================================================

from __future__ import annotations
import functools
import traceback
from typing import Optional, Callable, TypeVar, Any
import streamlit as st

from hub_core.logging import get_logger
from .exceptions import MediGoHubError

logger = get_logger(__name__)

T = TypeVar("T")


def handle_error(
    error: Exception,
    show_user_message: bool = True,
    log_error: bool = True,
    user_message: Optional[str] = None,
) -> None:
    """
    Centralized error handling function.

    Args:
        error: The exception to handle
        show_user_message: Whether to display error to user via st.error
        log_error: Whether to log the error
        user_message: Custom message to show user (uses error message if None)
    """
    if isinstance(error, MediGoHubError):
        message = user_message or error.message
        code = error.code
        details = error.details
        recoverable = error.recoverable
    else:
        message = user_message or str(error)
        code = "UNKNOWN"
        details = {"traceback": traceback.format_exc()}
        recoverable = True

    if log_error:
        logger.error(
            f"[{code}] {message}",
            extra={"details": details},
            exc_info=not isinstance(error, MediGoHubError),
        )

    if show_user_message:
        if recoverable:
            st.error(f"Error: {message}")
        else:
            st.error(f"Error crítico: {message}. Contacte a soporte.")

        if details and st.session_state.get("debug_mode", False):
            with st.expander("Detalles del error", expanded=False):
                st.json(details)


def safe_execute(
    func: Callable[..., T],
    *args,
    default: Optional[T] = None,
    error_message: Optional[str] = None,
    reraise: bool = False,
    **kwargs,
) -> Optional[T]:
    """
    Execute a function with automatic error handling.

    Usage:
        modules = safe_execute(
            get_visible_modules,
            category, granted,
            default=[],
            error_message="No se pudieron cargar los módulos",
        )
    """
    try:
        return func(*args, **kwargs)
    except Exception as e:
        handle_error(e, user_message=error_message)
        if reraise:
            raise
        return default


class ErrorContext:
    """
    Context manager for error handling with automatic logging and user feedback.

    Usage:
        with ErrorContext("Cerrando sesión"):
            auth.logout()
    """

    def __init__(
        self,
        operation: str,
        recoverable: bool = True,
        show_success: bool = False,
        success_message: Optional[str] = None,
    ):
        self.operation = operation
        self.recoverable = recoverable
        self.show_success = show_success
        self.success_message = success_message

    def __enter__(self) -> ErrorContext:
        logger.info(f"Starting: {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        if exc_type is not None:
            if isinstance(exc_val, MediGoHubError):
                handle_error(exc_val)
            else:
                handle_error(exc_val, user_message=f"Error durante: {self.operation}")

            return self.recoverable

        logger.info(f"Completed: {self.operation}")
        if self.show_success:
            st.success(self.success_message or f"{self.operation} completado")

        return False


def fail_closed(default_factory: Callable[[], Any]):
    """
    Decorator for functions that run during page render.

    Any exception is logged and replaced by a fresh value from
    ``default_factory`` (an empty list, False, ...). Nothing is shown to the
    user: a denied or empty result is the visible outcome.

    Usage:
        @fail_closed(list)
        def get_filtered_navigation(role, permissions, ...):
            ...
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> T:
            try:
                return func(*args, **kwargs)
            except MediGoHubError as e:
                logger.warning(f"{func.__name__} failed closed: {e}")
                return default_factory()
            except Exception as e:
                logger.error(f"{func.__name__} failed closed: {e}", exc_info=True)
                return default_factory()

        return wrapper

    return decorator
