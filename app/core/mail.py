# app/core/mail.py
import smtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from email.utils import formataddr, make_msgid
from typing import AsyncGenerator, Optional

from pydantic import BaseModel, EmailStr
from starlette.concurrency import run_in_threadpool

from app.core.config import settings
from app.core.errors import NotificationError
from app.core.logger import logger


class MailMessage(BaseModel):
    from_name: str
    # Trusted configuration value; deployments may use a local-only sender
    from_address: str
    to_address: EmailStr
    to_name: Optional[str] = None
    subject: str
    html: str


class MailClient:
    def __init__(
        self,
        host: str,
        port: int,
        user: str = "",
        password: str = "",
        use_ssl: bool = True,
    ):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.use_ssl = use_ssl

    def _build_mime(self, message: MailMessage) -> MIMEMultipart:
        mime = MIMEMultipart("alternative")
        mime["From"] = formataddr((message.from_name, message.from_address))
        mime["To"] = formataddr((message.to_name or "", message.to_address))
        mime["Subject"] = message.subject
        mime["Message-ID"] = make_msgid()
        mime.attach(MIMEText(message.html, "html"))
        return mime

    def _connect(self) -> smtplib.SMTP:
        if self.use_ssl:
            return smtplib.SMTP_SSL(self.host, self.port)
        return smtplib.SMTP(self.host, self.port)

    def _deliver(self, message: MailMessage) -> str:
        mime = self._build_mime(message)
        with self._connect() as server:
            if self.user:
                server.login(self.user, self.password)
            server.sendmail(message.from_address, [message.to_address], mime.as_string())
        return mime["Message-ID"]

    async def send_mail(self, message: MailMessage) -> str:
        """Deliver ``message`` and return its Message-ID.

        smtplib blocks, so the delivery runs in the threadpool.
        """
        try:
            message_id = await run_in_threadpool(self._deliver, message)
        except (smtplib.SMTPException, OSError) as e:
            raise NotificationError(f"Could not send email to {message.to_address}: {e}") from e

        logger.info(f"[Mail] Sent '{message.subject}' to {message.to_address} ({message_id})")
        return message_id


_mail_client: Optional[MailClient] = None


def init_mail_client() -> MailClient:
    """Create the process-wide mail client on first use."""
    global _mail_client

    if _mail_client is None:
        _mail_client = MailClient(
            host=settings.SMTP_HOST,
            port=settings.SMTP_PORT,
            user=settings.SMTP_USER,
            password=settings.SMTP_PASSWORD,
            use_ssl=settings.SMTP_USE_SSL,
        )

    return _mail_client


async def get_mail_client() -> AsyncGenerator[MailClient, None]:
    """FastAPI dependency injection for the mail client."""
    yield init_mail_client()


def close_mail_client():
    """Drop the mail client on application shutdown."""
    global _mail_client
    _mail_client = None
