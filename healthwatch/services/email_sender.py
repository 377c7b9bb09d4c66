"""Email sender service - delivers alert emails via SMTP."""
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
    port: int
    username: str
    password: str
    use_tls: bool = True
    from_address: str = ""
    to_address: str = ""  # Comma-separated list of email addresses

    @property
    def sender(self) -> str:
        return self.from_address or self.username

    @property
    def recipients(self) -> List[str]:
        return [addr.strip() for addr in self.to_address.split(",") if addr.strip()]


class EmailSenderService:
    """Service for sending plain-text emails via SMTP."""

    async def send_email(self, config: EmailConfig, subject: str, body: str) -> bool:
        """Send an email. Returns True on success, False on failure."""
        recipients = config.recipients
        if not config.host or not recipients:
            logger.warning("Email not configured - missing host or recipient")
            return False

        msg = MIMEText(body, "plain")
        msg["Subject"] = subject
        msg["From"] = config.sender
        msg["To"] = ", ".join(recipients)

        try:
            with smtplib.SMTP(config.host, config.port, timeout=30) as server:
                if config.use_tls:
                    server.starttls(context=ssl.create_default_context())
                if config.username and config.password:
                    server.login(config.username, config.password)
                server.sendmail(config.sender, recipients, msg.as_string())

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
            # Connection refused, timeouts, DNS
            logger.error(f"Failed to connect to SMTP server {config.host}:{config.port}: {e}")
            return False


# Global instance
email_sender_service = EmailSenderService()
