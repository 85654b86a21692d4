# Fuzzmenu — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global logger instance for fuzzmenu."""
import logging

logger: logging.Logger = logging.getLogger("fuzzmenu")
