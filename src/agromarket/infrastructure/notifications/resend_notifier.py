"""Email delivery through the Resend HTTP API."""

from __future__ import annotations

import requests

from agromarket.application.notifications import (
    Notification,
    NotificationError,
    Notifier,
)


class ResendNotifier(Notifier):

    def __init__(
        self,
        api_key: str,
        sender: str,
        url: str = "https://api.resend.com/emails",
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        if not api_key:
            raise ValueError("A Resend API key is required")
        self._api_key = api_key
        self._sender = sender
        self._url = url
        self._timeout = timeout
        self._session = session or requests.Session()

    def send(self, notification: Notification) -> str:
        payload = {
            "from": self._sender,
            "to": [notification.recipient],
            "subject": notification.subject,
            "html": notification.html,
            "text": notification.text,
        }
        headers = {"Authorization": f"Bearer {self._api_key}"}
        try:
            response = self._session.post(
                self._url, json=payload, headers=headers, timeout=self._timeout
            )
        except requests.exceptions.RequestException as e:
            raise NotificationError(f"Email service is unavailable: {e}") from e

        if not 200 <= response.status_code < 300:
            raise NotificationError(
                f"Email service answered {response.status_code}: {response.text[:200]}"
            )
        try:
            return str(response.json().get("id", ""))
        except ValueError:
            return ""
