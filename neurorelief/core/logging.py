"""
Logging Utility
Structured logging for request handlers, services and the audit trail

- Clinical free text (notes, symptoms) never goes into log lines
- Audit entries are single-line JSON so they can be shipped as-is
"""

import logging
import re
import sys
import json
from typing import Optional, Dict, Any
from datetime import datetime

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(level: str = "INFO") -> None:
    """Configure the root logger once at startup"""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a module"""
    return logging.getLogger(name)


def sanitize_message(message: str) -> str:
    """
    Strip values that must not reach the logs

    Args:
        message: Original log message

    Returns:
        Sanitized log message
    """
    # Remove email addresses
    message = re.sub(r'\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Z|a-z]{2,}\b', '[email]', message)

    # Remove long alphanumeric strings (likely tokens)
    message = re.sub(r'\b[A-Za-z0-9]{32,}\b', '[token]', message)

    # Keep first line of multi-line messages only
    if '\n' in message:
        message = message.split('\n')[0] + ' [truncated]'

    return message


def log_error(message: str, logger_name: Optional[str] = None, exc_info: bool = False):
    """Log error message with sensitive values removed"""
    logger = get_logger(logger_name or __name__)
    logger.error(sanitize_message(message), exc_info=exc_info)


def log_audit(event_type: str, user_id: Optional[str], details: Dict[str, Any]):
    """
    Log audit event with structured data

    Args:
        event_type: Type of audit event
        user_id: User ID (if applicable)
        details: Identifiers only (record ids, types, date ranges)
    """
    logger = get_logger("audit")
    audit_entry = {
        "timestamp": datetime.utcnow().isoformat(),
        "event_type": event_type,
        "user_id": user_id,
        "details": details
    }
    logger.info(f"[AUDIT] {json.dumps(audit_entry, default=str)}")
