"""
Logging Sanitizer Utility

Provides utilities to sanitize sensitive data before logging or persisting it
in job logs. Settings values (mail provider keys, SMTP credentials) and
exception messages pass through here before they leave the process.
"""

from typing import Dict, Any


# Fields that should never be logged
SENSITIVE_FIELDS = {
    'password',
    'smtp_password',
    'secret',
    'secret_key',
    'token',
    'api_key',
    'apikey',
    'resend_api_key',
    'service_role_key',
    'auth_token',
    'access_token',
    'refresh_token',
    'csrf_token',
    'authorization',
}


def sanitize_value(value: Any, redact_text: str = '[REDACTED]') -> Any:
    """Sanitize nested dicts and lists; other values are returned unchanged."""
    if isinstance(value, dict):
        return sanitize_dict(value, redact_text)
    if isinstance(value, (list, tuple)):
        return [sanitize_value(item, redact_text) for item in value]
    return value


def sanitize_dict(data: Dict[str, Any], redact_text: str = '[REDACTED]') -> Dict[str, Any]:
    """
    Sanitize a dictionary by replacing sensitive field values with redaction text.

    Args:
        data: Dictionary to sanitize
        redact_text: Text to use for redacted values (default: '[REDACTED]')

    Returns:
        Sanitized dictionary with sensitive values replaced

    Example:
        >>> data = {'from_address': 'wartung@example.org', 'api_key': 'abc'}
        >>> sanitize_dict(data)
        {'from_address': 'wartung@example.org', 'api_key': '[REDACTED]'}
    """
    if not data:
        return data

    sanitized = {}
    for key, value in data.items():
        # Check if key (case-insensitive) matches any sensitive field
        if str(key).lower() in SENSITIVE_FIELDS:
            sanitized[key] = redact_text
        else:
            sanitized[key] = sanitize_value(value, redact_text)

    return sanitized


def sanitize_exception_message(exception: Exception) -> str:
    """
    Sanitize exception messages to ensure they don't contain sensitive data.

    Args:
        exception: Exception to sanitize

    Returns:
        Sanitized exception message
    """
    message = str(exception) or type(exception).__name__

    # Database driver errors may echo connection strings with credentials
    lowered = message.lower()
    if any(field in lowered for field in SENSITIVE_FIELDS) or '://' in lowered and '@' in lowered:
        return f"{type(exception).__name__}: [Message contains sensitive data]"

    return message
