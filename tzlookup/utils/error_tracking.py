"""Error tracking and monitoring setup."""
import os
import logging
from typing import Optional

try:
    import sentry_sdk
    from sentry_sdk.integrations.logging import LoggingIntegration
    SENTRY_AVAILABLE = True
except ImportError:
    SENTRY_AVAILABLE = False

_initialized = False


def filter_sensitive_data(event, hint):
    """Filter sensitive data from Sentry events."""
    # Database paths can point into user home directories
    contexts = event.get('contexts')
    if isinstance(contexts, dict):
        for key in list(contexts.keys()):
            if 'path' in key.lower():
                contexts[key] = {"value": '***REDACTED***'}
    
    if 'environment' in event:
        env = event['environment']
        if isinstance(env, dict):
            sensitive_env_vars = ['API_KEY', 'SECRET', 'PASSWORD', 'TOKEN', 'AUTH', 'DSN']
            for key in list(env.keys()):
                if any(sensitive in key.upper() for sensitive in sensitive_env_vars):
                    env[key] = '***REDACTED***'
    
    return event


def setup_error_tracking(
    dsn: Optional[str] = None,
    environment: Optional[str] = None,
    release: Optional[str] = None,
    traces_sample_rate: float = 0.0
) -> bool:
    """
    Setup Sentry error tracking.
    
    Args:
        dsn: Sentry DSN (if None, will try to get from SENTRY_DSN env var)
        environment: Environment name (development, staging, production)
        release: Release version
        traces_sample_rate: Percentage of transactions to trace (0.0 to 1.0)
    
    Returns:
        True if Sentry was initialized, False otherwise
    """
    global _initialized
    
    if not SENTRY_AVAILABLE:
        logging.getLogger("tzlookup").debug(
            "Sentry SDK not available. Install with: pip install tzlookup[monitoring]"
        )
        return False
    
    dsn = dsn or os.getenv("SENTRY_DSN")
    if not dsn:
        logging.getLogger("tzlookup").debug("Sentry DSN not provided. Error tracking disabled.")
        return False
    
    environment = environment or os.getenv("ENVIRONMENT", "development")
    release = release or os.getenv("RELEASE", "unknown")
    
    try:
        sentry_sdk.init(
            dsn=dsn,
            environment=environment,
            release=release,
            integrations=[
                LoggingIntegration(level=logging.INFO, event_level=logging.ERROR),
            ],
            traces_sample_rate=traces_sample_rate,
            before_send=filter_sensitive_data,
            attach_stacktrace=True,
            send_default_pii=False,
            debug=os.getenv("SENTRY_DEBUG", "false").lower() == "true",
        )
    except Exception as e:
        logging.getLogger("tzlookup").error(f"Failed to initialize Sentry: {e}")
        return False
    
    _initialized = True
    logging.getLogger("tzlookup").info(
        f"Sentry error tracking initialized for environment: {environment}"
    )
    return True


def capture_exception(error: Exception, context: Optional[dict] = None) -> bool:
    """Capture exception and send to Sentry if it was initialized."""
    if not SENTRY_AVAILABLE or not _initialized:
        return False
    
    with sentry_sdk.new_scope() as scope:
        if context:
            for key, value in context.items():
                scope.set_context(key, {"value": str(value)})
        sentry_sdk.capture_exception(error)
    return True

