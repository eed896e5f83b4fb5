"""
SMTP email sender adapter - Implements EmailSender protocol.

Delivers multipart (text + optional HTML) messages over SMTP with implicit
TLS, one connection per message.
"""

import logging
import smtplib
import ssl
from email.message import EmailMessage

logger = logging.getLogger(__name__)


class SmtpEmailSender:
    """Implements EmailSender protocol via smtplib.SMTP_SSL."""

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        sender: str,
        timeout: float = 10.0,
    ) -> None:
        self._host = host
        self._port = port
        self._username = username
        self._password = password
        self._sender = sender
        self._timeout = timeout

    def build_message(self, to: str, subject: str, text: str, html: str | None = None) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self._sender
        message["To"] = to
        message["Subject"] = subject
        message.set_content(text)
        if html:
            message.add_alternative(html, subtype="html")
        return message

    def send(self, to: str, subject: str, text: str, html: str | None = None) -> bool:
        """
        Send the message.

        Delivery failures are logged and reported as False; they never
        propagate to the caller.
        """
        message = self.build_message(to, subject, text, html)
        try:
            with smtplib.SMTP_SSL(
                self._host,
                self._port,
                timeout=self._timeout,
                context=ssl.create_default_context(),
            ) as client:
                if self._username:
                    client.login(self._username, self._password)
                client.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Email delivery to %s failed - %s", to, e)
            return False

        logger.info("Email sent to %s: %s", to, subject)
        return True
