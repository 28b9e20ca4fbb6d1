"""Utility modules for the reminder assistant."""

from .log_sanitizer import mask_phone, sanitize_log, sanitize_for_log

__all__ = ["mask_phone", "sanitize_log", "sanitize_for_log"]
