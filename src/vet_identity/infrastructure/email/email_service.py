import asyncio
import logging
import smtplib
import ssl
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from vet_config.settings import Settings
from vet_identity.domain.shared import Result
from vet_identity.domain.user.errors import EmailErrors

logger = logging.getLogger(__name__)


class EmailService:
    """SMTP notifier.

    ``send`` never raises for delivery problems: transport errors come back
    as an ``Email.Exception`` failure. The blocking smtplib calls run in a
    worker thread.
    """

    def __init__(self, settings: Settings):
        self._settings = settings

    async def send(
        self,
        to: str,
        subject: str,
        body: str,
        text_body: str | None = None,
    ) -> Result[None]:
        if not self._settings.smtp_enabled:
            logger.warning("SMTP disabled, email not sent to %s", to)
            return Result.success()

        message = self._create_message(to, subject, body, text_body)
        try:
            await asyncio.to_thread(self._send_email, to, message)
        except Exception as e:
            logger.error("Failed to send email to %s: %s", to, e)
            return Result.failure(EmailErrors.exception(str(e)))

        return Result.success()

    def _create_message(
        self,
        to_email: str,
        subject: str,
        html_body: str,
        text_body: str | None = None,
    ) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = f"{self._settings.smtp_from_name} <{self._settings.smtp_from_email}>"
        msg["To"] = to_email

        if text_body:
            msg.attach(MIMEText(text_body, "plain"))
        msg.attach(MIMEText(html_body, "html"))

        return msg

    def _send_email(self, to_email: str, message: MIMEMultipart) -> None:
        if not self._settings.smtp_host:
            msg = "SMTP host not configured"
            raise RuntimeError(msg)

        smtp_password = (
            self._settings.smtp_password.get_secret_value()
            if self._settings.smtp_password
            else ""
        )

        if self._settings.smtp_use_tls and not self._settings.smtp_starttls:
            # Implicit TLS (port 465)
            context = ssl.create_default_context()
            with smtplib.SMTP_SSL(
                self._settings.smtp_host,
                self._settings.smtp_port,
                context=context,
            ) as server:
                if self._settings.smtp_user:
                    server.login(self._settings.smtp_user, smtp_password)
                server.send_message(message)
        else:
            # STARTTLS (port 587) or plain
            with smtplib.SMTP(
                self._settings.smtp_host,
                self._settings.smtp_port,
            ) as server:
                if self._settings.smtp_starttls:
                    context = ssl.create_default_context()
                    server.starttls(context=context)
                if self._settings.smtp_user:
                    server.login(self._settings.smtp_user, smtp_password)
                server.send_message(message)

        logger.info("Email sent to %s", to_email)
