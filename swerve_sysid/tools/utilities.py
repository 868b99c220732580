#!/usr/bin/env python3



from typing import Callable, Union
import functools
import logging


LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def log_exceptions(func: Callable) -> Callable:
    """
    Decorator that logs exceptions with full traceback and re-raises them.

    Used on the control emission path: a failing ``set_control`` is the
    drivetrain's problem, but it should never disappear silently.

    Example:
    >>> from swerve_sysid.tools import log_exceptions
    >>>
    >>> class Mechanism:
    ...
    ...     @log_exceptions
    ...     def drive(self, output):
    ...         ...

    What happens:
    - Exception is caught
    - Logged with traceback
    - Re-raised (caller sees the original exception)
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except Exception as e:
            # Logger of the module where the function is defined
            logger = logging.getLogger(func.__module__)
            logger.error(
                f"Exception in {func.__name__}: {e}",
                exc_info=True
            )
            raise

    return wrapper


def configure_logging(level: Union[int, str] = logging.WARNING) -> None:
    """
    Configure root logging for command-line tools.

    Args:
        level: Logging level, as a number or a name such as "DEBUG"
    """
    if isinstance(level, str):
        level = level.upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)
