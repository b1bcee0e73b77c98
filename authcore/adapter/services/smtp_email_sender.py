import asyncio
import logging
import smtplib
import ssl
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional

from authcore.app.services.email_sender import IEmailSender

logger = logging.getLogger(__name__)


def redact_email(email: str) -> str:
    """Redact an email address for logging"""
    if "@" not in email:
        return "redacted"
    local, domain = email.split("@", 1)
    return f"{local[:2]}***@{domain}"


class SmtpEmailSender(IEmailSender):
    """
    Activation email over SMTP.

    When no SMTP host is configured (development), the activation link is
    logged instead of sent. The blocking smtplib call runs in a worker
    thread so it never stalls the event loop.
    """

    def __init__(
        self,
        *,
        activation_url_base: str,
        smtp_host: Optional[str] = None,
        smtp_port: int = 587,
        smtp_user: Optional[str] = None,
        smtp_password: Optional[str] = None,
        smtp_use_tls: bool = True,
        from_email: Optional[str] = None,
        timeout: float = 10.0,
    ):
        self.activation_url_base = activation_url_base.rstrip("/")
        self.smtp_host = smtp_host
        self.smtp_port = smtp_port
        self.smtp_user = smtp_user
        self.smtp_password = smtp_password
        self.smtp_use_tls = smtp_use_tls
        self.from_email = from_email or smtp_user
        self.timeout = timeout

    @property
    def is_configured(self) -> bool:
        return bool(self.smtp_host and self.from_email)

    def activation_link(self, token: str) -> str:
        return f"{self.activation_url_base}/{token}"

    async def send_activation(self, email: str, token: str, name: str) -> bool:
        link = self.activation_link(token)
        subject = "Activate your account"
        text_body = (
            f"Hi {name},\n\n"
            f"Confirm your email address to activate your account:\n{link}\n\n"
            "The link is valid for a limited time. If you did not sign up, ignore this email."
        )

        if not self.is_configured:
            logger.info(
                f"SMTP not configured, activation link for {redact_email(email)}: {link}"
            )
            return True

        return await asyncio.to_thread(self._send, email, subject, text_body)

    def _send(self, to_email: str, subject: str, text_body: str) -> bool:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = self.from_email
        msg["To"] = to_email
        msg.attach(MIMEText(text_body, "plain"))

        context = ssl.create_default_context()
        try:
            if self.smtp_use_tls:
                with smtplib.SMTP(self.smtp_host, self.smtp_port, timeout=self.timeout) as server:
                    server.starttls(context=context)
                    if self.smtp_user and self.smtp_password:
                        server.login(self.smtp_user, self.smtp_password)
                    server.sendmail(self.from_email, to_email, msg.as_string())
            else:
                with smtplib.SMTP_SSL(
                    self.smtp_host, self.smtp_port, context=context, timeout=self.timeout
                ) as server:
                    if self.smtp_user and self.smtp_password:
                        server.login(self.smtp_user, self.smtp_password)
                    server.sendmail(self.from_email, to_email, msg.as_string())
        except (smtplib.SMTPException, ssl.SSLError, OSError) as exc:
            logger.error(
                f"Activation email to {redact_email(to_email)} failed: "
                f"{type(exc).__name__}: {exc}"
            )
            return False

        logger.info(f"Activation email sent to {redact_email(to_email)}")
        return True
