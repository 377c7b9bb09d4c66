"""Alerter service - sends email and webhook alerts when an endpoint goes down."""
import logging
from datetime import datetime, timezone
from typing import Optional

import httpx

from ..config import Settings, settings as default_settings
from .email_sender import EmailConfig, EmailSenderService, email_sender_service

logger = logging.getLogger(__name__)


class AlerterService:
    """Notifier used by the sweep on down-edges.

    Every configured channel is attempted. ``notify`` succeeds only if at
    least one channel is configured and all of them delivered.
    """

    def __init__(
        self,
        config: Optional[Settings] = None,
        email_sender: Optional[EmailSenderService] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config or default_settings
        self.email_sender = email_sender or email_sender_service
        self.transport = transport

    @property
    def email_enabled(self) -> bool:
        return bool(self.config.alert_email_to)

    @property
    def webhook_enabled(self) -> bool:
        return bool(self.config.webhook_url)

    def _build_email_subject(self, endpoint: str) -> str:
        return f"[Health Check Alert] Service Down: {endpoint}"

    def _build_email_body(self, endpoint: str, reason: str, now: datetime) -> str:
        return "\n".join([
            "The service at the following URL is down:",
            "",
            endpoint,
            "",
            f"Error: {reason}",
            f"Time: {now.strftime('%a, %d %b %Y %H:%M:%S GMT')}",
        ])

    def _email_config(self) -> EmailConfig:
        return EmailConfig(
            host=self.config.smtp_host,
            port=self.config.smtp_port,
            username=self.config.smtp_username,
            password=self.config.smtp_password,
            use_tls=self.config.smtp_use_tls,
            from_address=self.config.alert_email_from,
            to_address=self.config.alert_email_to,
        )

    async def notify(self, endpoint: str, reason: str) -> bool:
        """Alert that an endpoint went down. Returns True if delivered."""
        if not self.email_enabled and not self.webhook_enabled:
            logger.error(
                f"No alert channel configured. Skipping notification for {endpoint}."
            )
            return False

        now = datetime.now(timezone.utc)
        delivered = True

        if self.email_enabled:
            subject = self._build_email_subject(endpoint)
            body = self._build_email_body(endpoint, reason, now)
            sent = await self.email_sender.send_email(self._email_config(), subject, body)
            delivered = delivered and sent

        if self.webhook_enabled:
            payload = {
                "endpoint": endpoint,
                "event": "down",
                "details": reason,
                "timestamp": now.isoformat().replace("+00:00", "Z"),
            }
            sent = await self._send_webhook(self.config.webhook_url, payload)
            delivered = delivered and sent

        return delivered

    async def _send_webhook(self, url: str, payload: dict) -> bool:
        """Send a webhook POST request."""
        try:
            async with httpx.AsyncClient(timeout=10, transport=self.transport) as client:
                response = await client.post(url, json=payload)
            if response.status_code < 400:
                logger.info(f"Webhook sent: {payload['event']} for {payload['endpoint']}")
                return True
            logger.warning(f"Webhook returned {response.status_code}")
            return False
        except httpx.HTTPError as e:
            logger.error(f"Failed to send webhook: {e}")
            return False
