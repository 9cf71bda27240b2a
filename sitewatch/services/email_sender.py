"""Email sender service - delivers notifications over SMTP."""
import asyncio
import logging
import smtplib
import ssl
from dataclasses import dataclass
from email.mime.text import MIMEText
from typing import List

logger = logging.getLogger(__name__)


@dataclass
class EmailConfig:
    """SMTP configuration for sending emails."""
    host: str
    port: int = 587
    username: str = ""
    password: str = ""
    use_tls: bool = True
    from_address: str = ""
    to_address: str = ""  # Comma-separated list of email addresses
    timeout: float = 30


def parse_recipients(to_address: str) -> List[str]:
    """Parse comma-separated email addresses into a list."""
    if not to_address:
        return []
    return [addr.strip() for addr in to_address.split(",") if addr.strip()]


class EmailSenderService:
    """Service for sending plain-text email via SMTP."""

    def is_configured(self, config: EmailConfig) -> bool:
        return bool(config.host and parse_recipients(config.to_address))

    async def send_email(self, config: EmailConfig, subject: str, body: str) -> bool:
        """Send an email without blocking the event loop.

        Returns True on success, False on failure.
        """
        if not self.is_configured(config):
            logger.warning("Email not configured - missing host or recipients")
            return False

        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._send_blocking, config, subject, body)

    def _build_message(self, config: EmailConfig, subject: str, body: str) -> MIMEText:
        recipients = parse_recipients(config.to_address)
        msg = MIMEText(body, "plain", "utf-8")
        msg["Subject"] = subject
        msg["From"] = config.from_address or config.username
        msg["To"] = ", ".join(recipients)
        return msg

    def _send_blocking(self, config: EmailConfig, subject: str, body: str) -> bool:
        recipients = parse_recipients(config.to_address)
        from_addr = config.from_address or config.username
        msg = self._build_message(config, subject, body)

        try:
            with smtplib.SMTP(config.host, config.port, timeout=config.timeout) as server:
                if config.use_tls:
                    server.starttls(context=ssl.create_default_context())
                if config.username and config.password:
                    server.login(config.username, config.password)
                server.sendmail(from_addr, recipients, msg.as_string())

            logger.info(f"Email sent to {len(recipients)} recipient(s): {subject}")
            return True

        except smtplib.SMTPAuthenticationError as e:
            logger.error(f"SMTP authentication failed for user '{config.username}': {e}")
            return False
        except smtplib.SMTPRecipientsRefused as e:
            logger.error(f"Recipients refused by server: {e}")
            return False
        except smtplib.SMTPException as e:
            logger.error(f"SMTP error: {type(e).__name__}: {e}")
            return False
        except OSError as e:
            # Connection refused, DNS failure, timeout
            logger.error(f"Cannot reach SMTP server {config.host}:{config.port}: {e}")
            return False


# Global instance
email_sender_service = EmailSenderService()
