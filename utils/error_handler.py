"""
Error handling utilities for GeoSmart Mapper.

Collaborator failures (storage, image analysis) are logged here and turned
into the Spanish advisory text from ``utils.error_messages``. The advisory is
attached to the exception as ``user_message``/``suggestions`` so whoever
shows it does not need to look it up again.
"""

import functools
from typing import Callable, Type
from utils.logger import get_logger
from utils.error_messages import get_error_message
from core.exceptions import GeoSmartError


logger = get_logger(__name__)


def _advise(exception: Exception, user_message: str = None) -> dict:
    advisory = get_error_message(exception)
    if user_message:
        advisory['message'] = user_message

    if isinstance(exception, GeoSmartError):
        exception.user_message = advisory['message']
        exception.suggestions = advisory['suggestions']

    return advisory


def handle_errors(
    error_type: Type[Exception] = GeoSmartError,
    user_message: str = None,
    log_level: str = "ERROR",
    reraise: bool = False,
    default_return=None
):
    """
    Decorator for operations whose failure should degrade to an advisory.

    Args:
        error_type: Exception type handled by the decorator; anything else propagates
        user_message: Advisory text replacing the default one for the exception
        log_level: Level used to log the failure
        reraise: Re-raise after logging instead of returning ``default_return``
        default_return: Value returned when the failure is swallowed

    Example:
        @handle_errors(ImageAnalysisError, user_message=MSG_ANALYSIS_FAILED,
                       log_level="WARNING")
        def suggest(self, data_url):
            ...
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except error_type as e:
                log = getattr(logger, log_level.lower(), logger.error)
                log(f"{func.__name__} failed: {type(e).__name__}: {e}", exc_info=True)
                _advise(e, user_message)
                if reraise:
                    raise
                return default_return

        return wrapper
    return decorator


def log_and_describe_error(exception: Exception, context: str = None) -> dict:
    """
    Log a failure and return its advisory (title, message, suggestions, details).

    Args:
        exception: The exception that occurred
        context: Operation in progress, e.g. "capture"
    """
    where = f" during {context}" if context else ""
    logger.error(f"Error{where}: {type(exception).__name__}: {exception}")
    return _advise(exception)
