"""Test doubles shared across test packages."""


class RecordingNotifier:
    """Notifier that remembers every (address, token) it was asked to deliver."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, str]] = []

    def send_verification_link(self, to_address: str, token: str) -> None:
        self.sent.append((to_address, token))

    @property
    def last_token(self) -> str:
        return self.sent[-1][1]
