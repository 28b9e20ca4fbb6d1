"""Log sanitizer - removes sensitive data from log messages.

Owners are WhatsApp handles ("whatsapp:+5511987654321"), so phone numbers
end up in almost every reminder log line. Mask them before they hit disk.
"""

import re
from typing import Union

# Patterns to detect and redact sensitive data
SENSITIVE_PATTERNS = [
    # Email addresses
    (r'\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Z|a-z]{2,}\b', '[EMAIL]'),

    # Twilio account SIDs
    (r'\bAC[0-9a-f]{32}\b', '[TWILIO_SID]'),

    # API keys, tokens, secrets in key=value format
    (r'(password|secret|token|api_key|apikey|auth|bearer|credential)["\s:=]+[^\s,}"\']{8,}',
     r'\1=[REDACTED]'),

    # Bearer tokens
    (r'(Bearer|Basic)\s+[A-Za-z0-9\-_\.]+', r'\1 [REDACTED]'),

    # Anthropic keys
    (r'sk-ant-[A-Za-z0-9\-_]+', '[API_KEY]'),
]

# International phone numbers: keep country code and last 4 digits
_PHONE_PATTERN = re.compile(r'\+(\d{2})\d{4,11}(\d{4})\b')

# Compiled patterns for efficiency
_COMPILED_PATTERNS = [(re.compile(p, re.IGNORECASE), r) for p, r in SENSITIVE_PATTERNS]


def mask_phone(text: str) -> str:
    """Mask the middle digits of international phone numbers.

    Args:
        text: Text that may contain "+5511987654321" style numbers

    Returns:
        Text with numbers like "+55*****4321"
    """
    if not text:
        return text
    return _PHONE_PATTERN.sub(lambda m: f"+{m.group(1)}*****{m.group(2)}", text)


def sanitize_log(text: str) -> str:
    """Remove sensitive data from text for safe logging.

    Args:
        text: The text to sanitize

    Returns:
        Sanitized text with sensitive data replaced by placeholders
    """
    if not text:
        return text

    result = text
    for pattern, replacement in _COMPILED_PATTERNS:
        result = pattern.sub(replacement, result)

    return mask_phone(result)


def sanitize_for_log(value: Union[str, bytes, None], max_length: int = 200) -> str:
    """Sanitize and truncate a value for logging.

    Args:
        value: The value to sanitize (string or bytes)
        max_length: Maximum length of returned string

    Returns:
        Sanitized, truncated string safe for logging
    """
    if value is None:
        return "<None>"

    if isinstance(value, bytes):
        text = value.decode('utf-8', errors='replace')
    else:
        text = str(value)

    # Sanitize first
    sanitized = sanitize_log(text)

    # Truncate if needed
    if len(sanitized) > max_length:
        return sanitized[:max_length] + f"... [{len(text)} chars total]"

    return sanitized
