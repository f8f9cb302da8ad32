"""
Console notifier adapter - Implements VerificationNotifier protocol.

This module provides a console-based implementation of the domain's
notification port, logging verification links for development use.
"""

import logging

logger = logging.getLogger(__name__)


def build_verification_link(public_base_url: str, token: str) -> str:
    """Join the public base URL and the verify route for token."""
    return f"{public_base_url.rstrip('/')}/v1/verify/{token}"


class ConsoleVerificationNotifier:
    """
    Implements VerificationNotifier protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    For demo/development purposes - prints verification links to stdout.
    """

    def __init__(self, public_base_url: str = "http://localhost:3000") -> None:
        self._public_base_url = public_base_url

    def send_verification_link(self, to_address: str, token: str) -> None:
        """
        Log verification link to console (simulates email delivery).

        The link is logged at INFO level to be visible in docker-compose logs.

        Args:
            to_address: Recipient email address (normalized by domain layer)
            token: Verification token
        """
        link = build_verification_link(self._public_base_url, token)
        logger.info("[VERIFICATION] Email: %s Link: %s", to_address, link)
