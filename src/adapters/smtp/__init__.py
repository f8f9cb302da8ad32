"""Notification adapters - Verification message delivery."""

from .console import ConsoleVerificationNotifier, build_verification_link
from .sender import SmtpVerificationNotifier, VerificationDeliveryError

__all__ = [
    "ConsoleVerificationNotifier",
    "SmtpVerificationNotifier",
    "VerificationDeliveryError",
    "build_verification_link",
]
