"""
Failure-logging decorators for best-effort helpers.

suppress_exceptions turns a failure into a logged sentinel return value, the
contract of the temp-file helpers. log_errors records the failure and lets it
propagate, so background tasks still report their error in the TaskResult.
"""
import logging
from functools import wraps
from typing import Any, Callable, Optional, ParamSpec, TypeVar

from core.logging.logger import get_logger

P = ParamSpec('P')
T = TypeVar('T')

logger = get_logger(__name__)


def _report(log: Optional[logging.Logger], log_level: str, text: str, error: Exception) -> None:
    log = log or logger
    emit = getattr(log, log_level, log.error)
    emit(f"{text}: {error}", exc_info=True)


def suppress_exceptions(
    logger_instance: Optional[logging.Logger] = None,
    message: str = "Operation failed",
    return_value: Any = None,
    log_level: str = "error"
) -> Callable[[Callable[P, T]], Callable[P, Optional[T]]]:
    """
    Log any exception raised by the wrapped call and return ``return_value``.

    Example:
        @suppress_exceptions(logger, f"{TAG_IO} Cannot convert image to file")
        def image_to_temp_file(image, cache_dir): ...
    """
    def decorator(func: Callable[P, T]) -> Callable[P, Optional[T]]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> Optional[T]:
            try:
                return func(*args, **kwargs)
            except Exception as e:
                _report(logger_instance, log_level, message, e)
                return return_value
        return wrapper
    return decorator


def log_errors(
    logger_instance: Optional[logging.Logger] = None,
    message: str = "Error in {func_name}",
    log_level: str = "error",
    reraise: bool = True
) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """
    Log an exception from the wrapped call, then re-raise it.

    ``message`` may name the function through ``{func_name}``. With
    ``reraise=False`` the call returns None instead.
    """
    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            try:
                return func(*args, **kwargs)
            except Exception as e:
                _report(logger_instance, log_level, message.format(func_name=func.__name__), e)
                if reraise:
                    raise
                return None  # type: ignore
        return wrapper
    return decorator
