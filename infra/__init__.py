from .paths import PROJECT_ROOT, STORAGE_DIR, LOG_DIR, DEFAULT_LOG_FILE
from .logger import configure_logging, get_logger

__all__ = [
    "PROJECT_ROOT",
    "STORAGE_DIR",
    "LOG_DIR",
    "DEFAULT_LOG_FILE",
    "configure_logging",
    "get_logger",
]
