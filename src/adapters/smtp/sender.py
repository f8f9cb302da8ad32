"""
SMTP notifier adapter - Implements VerificationNotifier protocol.

Sends the verification link as a plain-text email over STARTTLS. Each
call makes a single delivery attempt bounded by a socket timeout; there
is no retry loop. Failures are re-raised as
VerificationDeliveryError for the domain service to record.
"""

import logging
import smtplib
from email.mime.text import MIMEText

from .console import build_verification_link

logger = logging.getLogger(__name__)

SUBJECT = "Verify your account"

BODY_TEMPLATE = """Hello,

To verify your account, open the link below:
{link}

If you did not create this account, you can ignore this email.
"""


class VerificationDeliveryError(Exception):
    """The SMTP server rejected the message or could not be reached."""

    pass


class SmtpVerificationNotifier:
    """
    Implements VerificationNotifier protocol via smtplib.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(
        self,
        host: str,
        port: int,
        username: str | None,
        password: str | None,
        sender: str | None = None,
        public_base_url: str = "http://localhost:3000",
        timeout: float = 10.0,
    ) -> None:
        self._host = host
        self._port = port
        self._username = username
        self._password = password
        self._sender = sender or username or "noreply@localhost"
        self._public_base_url = public_base_url
        self._timeout = timeout

    def build_message(self, to_address: str, token: str) -> MIMEText:
        link = build_verification_link(self._public_base_url, token)
        msg = MIMEText(BODY_TEMPLATE.format(link=link))
        msg["Subject"] = SUBJECT
        msg["From"] = self._sender
        msg["To"] = to_address
        return msg

    def send_verification_link(self, to_address: str, token: str) -> None:
        """
        Send the verification email in one bounded attempt.

        Raises:
            VerificationDeliveryError: If delivery fails
        """
        msg = self.build_message(to_address, token)
        try:
            with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as server:
                server.starttls()
                if self._username and self._password:
                    server.login(self._username, self._password)
                server.sendmail(self._sender, [to_address], msg.as_string())
        except (smtplib.SMTPException, OSError) as exc:
            raise VerificationDeliveryError(f"SMTP delivery via {self._host}:{self._port} failed: {exc}") from exc
        logger.info("Verification email sent to %s", to_address)
