from .utilities import log_exceptions, configure_logging


__all__ = [
    "log_exceptions",
    "configure_logging",
]
