"""
Notification channels package.
"""

from .channels import LoggingNotificationChannel, PushGatewayNotificationChannel

__all__ = [
    "LoggingNotificationChannel",
    "PushGatewayNotificationChannel",
]
