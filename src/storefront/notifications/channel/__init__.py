"""Mailer registry: singleton access to the configured email adapter.

Uses the fake adapter unless a real one is installed with ``set_mailer``.
"""

from storefront.notifications.channel.email_port import EmailPort

_mailer: EmailPort | None = None


def get_mailer() -> EmailPort:
    global _mailer
    if _mailer is None:
        from storefront.notifications.channel.fake_email import FakeEmailAdapter

        _mailer = FakeEmailAdapter()
    return _mailer


def set_mailer(mailer: EmailPort) -> None:
    global _mailer
    _mailer = mailer


def reset_mailer() -> None:
    """Drop the current adapter (useful for testing)."""
    global _mailer
    _mailer = None
