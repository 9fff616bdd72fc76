"""Security event logging for authentication operations.

Events go to a dedicated ``security`` logger so they can be routed
separately from application logs.
"""

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any
from uuid import UUID


class SecurityEventType(str, Enum):
    """Types of security events that are logged."""

    LOGIN_SUCCESS = "login_success"
    LOGIN_FAILED = "login_failed"
    LOGOUT = "logout"
    TOKEN_REFRESH = "token_refresh"
    TOKEN_REJECTED = "token_rejected"
    USER_CREATED = "user_created"


security_logger = logging.getLogger("security")


def log_security_event(
    event_type: SecurityEventType,
    user_id: UUID | str | None = None,
    user_email: str | None = None,
    ip_address: str | None = None,
    user_agent: str | None = None,
    details: dict[str, Any] | None = None,
    success: bool = True,
) -> None:
    """Log a security event.

    Args:
        event_type: The type of security event
        user_id: The ID of the user performing the action
        user_email: The email of the user performing the action
        ip_address: The client IP address
        user_agent: The client user agent
        details: Additional event-specific details
        success: Whether the operation succeeded
    """
    event_data: dict[str, Any] = {
        "event_type": event_type.value,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "success": success,
        "actor": {
            "user_id": str(user_id) if user_id else None,
            "email": user_email,
            "ip_address": ip_address,
            "user_agent": user_agent,
        },
    }
    if details:
        event_data["details"] = details

    if success:
        security_logger.info(
            f"Security event: {event_type.value}",
            extra={"security_event": event_data},
        )
    else:
        security_logger.warning(
            f"Security event (failed): {event_type.value}",
            extra={"security_event": event_data},
        )
