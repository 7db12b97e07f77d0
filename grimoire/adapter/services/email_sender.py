import asyncio
import logging
import smtplib
from email.message import EmailMessage

from grimoire.app.services.email_sender import EmailDeliveryError, IEmailSender

logger = logging.getLogger(__name__)


class SmtpEmailSender(IEmailSender):
    """SMTP transport; the blocking smtplib call runs in a worker thread"""

    def __init__(
        self,
        host: str,
        port: int = 587,
        username: str = "",
        password: str = "",
        from_address: str = "noreply@grimoire.app",
        timeout: float = 10,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.from_address = from_address
        self.timeout = timeout

    async def send(self, to_address: str, subject: str, html_body: str) -> None:
        msg = EmailMessage()
        msg["From"] = self.from_address
        msg["To"] = to_address
        msg["Subject"] = subject
        msg.set_content("This message requires an HTML capable mail client.")
        msg.add_alternative(html_body, subtype="html")

        try:
            await asyncio.to_thread(self._send_sync, msg)
        except (smtplib.SMTPException, OSError) as exc:
            logger.error(f"Failed to send email '{subject}': {exc}")
            raise EmailDeliveryError(str(exc)) from exc

        logger.info(f"Email sent: {subject}")

    def _send_sync(self, msg: EmailMessage) -> None:
        """Synchronous email sending (called in thread pool)."""
        if self.port == 465:
            server = smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout)
        else:
            server = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
        with server:
            if self.port != 465:
                server.starttls()
            if self.username and self.password:
                server.login(self.username, self.password)
            server.send_message(msg)


class LoggingEmailSender(IEmailSender):
    """Development transport: logs the subject and recipient instead of sending"""

    async def send(self, to_address: str, subject: str, html_body: str) -> None:
        logger.info(f"Email not sent (no SMTP_HOST configured): '{subject}' to {to_address}")
