"""
Console email sender adapter - Implements EmailSender protocol.

This module provides a console-based implementation of the domain's
email sender port, logging messages instead of delivering them.
"""

import logging

logger = logging.getLogger(__name__)


class ConsoleEmailSender:
    """
    Implements EmailSender protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    For demo/development purposes - the confirmation link (and its code)
    ends up in the application log.
    """

    def send(self, to: str, subject: str, text: str, html: str | None = None) -> bool:
        """
        Log the message at INFO level (simulates email delivery).

        Args:
            to: Recipient email address
            subject: Subject line
            text: Plain-text body
            html: Optional HTML body, logged when present

        Returns:
            Always True
        """
        logger.info("[EMAIL] To: %s Subject: %s", to, subject)
        logger.info("[EMAIL] %s", html or text)
        return True
