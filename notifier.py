"""
notifier.py
-----------
Owner notification for new contact messages.

Sends through a transactional-email HTTP API (Brevo v3 `smtp/email` payload).
Delivery is best effort: every attempt ends in a DeliveryRecord (sent, failed
or skipped) that is logged and kept in a short in-memory history. Nothing in
here raises back into the request that stored the message.
"""

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from html import escape
from typing import Any, Deque, Dict, List, Optional

import requests

from config import Settings
from logger import get_logger

logger = get_logger(__name__)

SENT = "sent"
FAILED = "failed"
SKIPPED = "skipped"


@dataclass
class DeliveryRecord:
    """Outcome of one notification attempt."""

    message_id: Optional[int]
    status: str
    detail: str = ""
    attempted_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class EmailNotifier:
    def __init__(
        self,
        api_key: Optional[str],
        recipient: Optional[str],
        sender_email: str,
        sender_name: str = "Portfolio Contact",
        api_url: str = "https://api.brevo.com/v3/smtp/email",
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
        history_size: int = 100,
    ):
        self.api_key = api_key
        self.recipient = recipient
        self.sender_email = sender_email
        self.sender_name = sender_name
        self.api_url = api_url
        self.timeout = timeout
        self.session = session or requests.Session()
        self.deliveries: Deque[DeliveryRecord] = deque(maxlen=history_size)

    @classmethod
    def from_settings(cls, settings: Settings, session: Optional[requests.Session] = None) -> "EmailNotifier":
        return cls(
            api_key=settings.email_api_key,
            recipient=settings.email_recipient,
            sender_email=settings.email_sender,
            sender_name=settings.email_sender_name,
            api_url=settings.email_api_url,
            timeout=settings.email_timeout_seconds,
            session=session,
        )

    @property
    def configured(self) -> bool:
        return bool(self.api_key and self.recipient)

    def build_payload(self, message: Dict[str, Any]) -> Dict[str, Any]:
        name = escape(message.get("sender_name") or "")
        email = escape(message.get("sender_email") or "")
        phone = escape(message.get("sender_phone") or "Not provided")
        subject = message.get("subject") or "New message from portfolio"
        body = escape(message.get("message") or "").replace("\n", "<br>")
        html = (
            "<h2>New portfolio contact message</h2>"
            f"<p><strong>Name:</strong> {name}</p>"
            f"<p><strong>Email:</strong> {email}</p>"
            f"<p><strong>Phone:</strong> {phone}</p>"
            f"<p><strong>Subject:</strong> {escape(subject)}</p>"
            f"<p>{body}</p>"
        )
        payload = {
            "sender": {"name": self.sender_name, "email": self.sender_email},
            "to": [{"email": self.recipient}],
            "subject": f"Portfolio contact: {subject}",
            "htmlContent": html,
        }
        if message.get("sender_email"):
            payload["replyTo"] = {"email": message["sender_email"], "name": message.get("sender_name") or ""}
        return payload

    def notify_new_message(self, message: Dict[str, Any]) -> DeliveryRecord:
        """Email the owner about a stored contact message and record the outcome."""
        message_id = message.get("id")
        if not self.configured:
            record = DeliveryRecord(message_id, SKIPPED, "email API not configured")
            logger.warning(f"Skipping notification for contact message {message_id}: email API not configured")
            return self._record(record)

        try:
            response = self.session.post(
                self.api_url,
                json=self.build_payload(message),
                headers={"api-key": self.api_key, "accept": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Failed to send notification for contact message {message_id}: {e}")
            return self._record(DeliveryRecord(message_id, FAILED, str(e)))

        if not 200 <= response.status_code < 300:
            detail = f"HTTP {response.status_code}: {response.text[:200]}"
            logger.error(f"Email API rejected notification for contact message {message_id}: {detail}")
            return self._record(DeliveryRecord(message_id, FAILED, detail))

        logger.info(f"Notification sent for contact message {message_id}")
        return self._record(DeliveryRecord(message_id, SENT, f"HTTP {response.status_code}"))

    def _record(self, record: DeliveryRecord) -> DeliveryRecord:
        self.deliveries.append(record)
        return record

    def history(self) -> List[DeliveryRecord]:
        return list(self.deliveries)
