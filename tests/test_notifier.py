"""
Tests for notifier.py - best-effort owner email.
"""

import requests

from notifier import FAILED, SENT, SKIPPED, EmailNotifier

MESSAGE = {
    "id": 7,
    "sender_name": "Jane <script>",
    "sender_email": "jane@x.com",
    "sender_phone": None,
    "subject": "Hello",
    "message": "Line one\nLine two",
}


class TestPayload:
    def test_payload_shape(self, notifier):
        payload = notifier.build_payload(MESSAGE)

        assert payload["sender"] == {"name": "Portfolio Contact", "email": "no-reply@example.com"}
        assert payload["to"] == [{"email": "owner@example.com"}]
        assert payload["replyTo"]["email"] == "jane@x.com"
        assert payload["subject"] == "Portfolio contact: Hello"

    def test_user_text_is_escaped(self, notifier):
        html = notifier.build_payload(MESSAGE)["htmlContent"]

        assert "<script>" not in html
        assert "Jane &lt;script&gt;" in html
        assert "Line one<br>Line two" in html
        assert "Not provided" in html


class TestDelivery:
    def test_sent(self, notifier, email_session):
        record = notifier.notify_new_message(MESSAGE)

        assert record.status == SENT
        assert record.message_id == 7
        url, kwargs = email_session.calls[0]
        assert kwargs["headers"]["api-key"] == "test-api-key"
        assert kwargs["timeout"] == notifier.timeout

    def test_network_failure_recorded_not_raised(self, notifier, email_session):
        email_session.error = requests.Timeout("timed out")

        record = notifier.notify_new_message(MESSAGE)

        assert record.status == FAILED
        assert "timed out" in record.detail
        assert notifier.history() == [record]

    def test_rejected_by_api(self, notifier, email_session):
        email_session.respond_with(401, "unauthorized")

        record = notifier.notify_new_message(MESSAGE)

        assert record.status == FAILED
        assert record.detail.startswith("HTTP 401")

    def test_skipped_without_api_key(self, email_session):
        notifier = EmailNotifier(api_key=None, recipient="owner@example.com", sender_email="a@b.c", session=email_session)

        record = notifier.notify_new_message(MESSAGE)

        assert record.status == SKIPPED
        assert email_session.calls == []
        assert notifier.configured is False

    def test_history_is_bounded(self, email_session):
        notifier = EmailNotifier(
            api_key="k", recipient="owner@example.com", sender_email="a@b.c", session=email_session, history_size=2
        )
        for message_id in range(3):
            notifier.notify_new_message({**MESSAGE, "id": message_id})

        assert [record.message_id for record in notifier.history()] == [1, 2]
