"""Structured logging utilities."""
import json
import logging
from datetime import datetime, timezone
from typing import Dict, Any, Optional

LOGGER_NAME = "tzlookup"


def setup_logging(level: str = "INFO"):
    """Setup structured JSON logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format='%(message)s',
        handlers=[logging.StreamHandler()]
    )


def log_structured(level: str, message: str, **kwargs):
    """
    Log structured JSON message.
    
    Args:
        level: Log level (debug, info, warning, error, etc.)
        message: Log message
        **kwargs: Additional structured fields
    """
    logger = logging.getLogger(LOGGER_NAME)
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    if not logger.isEnabledFor(numeric_level):
        return
    
    log_entry = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "level": level.upper(),
        "message": message,
        **kwargs
    }
    
    logger.log(numeric_level, json.dumps(log_entry, default=str))


def log_error(error: Exception, context: Optional[Dict[str, Any]] = None):
    """
    Log an exception with its context and forward it to error tracking.
    
    Args:
        error: The exception to record
        context: Extra fields describing where it happened
    """
    from tzlookup.utils.error_tracking import capture_exception
    
    context = context or {}
    log_structured(
        "error",
        str(error),
        error_type=type(error).__name__,
        **context
    )
    capture_exception(error, context)
