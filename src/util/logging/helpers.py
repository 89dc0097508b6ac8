"""
Helpers for the logging system.
"""

from loguru import logger


def get_logger(name=None):
    """
    Return the Loguru logger bound to a module name.

    Args:
        name: Module name, usually __name__

    Returns:
        logger: Bound logger
    """
    if name:
        return logger.bind(module=name)
    return logger


def log_error_with_context(logger, error, context=None):
    """
    Log an error with extra context in a consistent format.

    Args:
        logger: Logger instance
        error: Exception object
        context: Dict with extra information (e.g. course slug)
    """
    error_info = {
        "error_type": type(error).__name__,
        "error_message": str(error),
        "context": context or {},
    }

    logger.opt(exception=error).warning(f"Error details: {error_info}")
