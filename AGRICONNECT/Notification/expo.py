# AGRICONNECT/Notification/expo.py
"""
Expo push gateway client.

- is_expo_push_token: token check from exponent_server_sdk
- send_batched: one PushMessage per valid recipient, published through
  PushClient.publish_multiple (chunked to the gateway limit) in a worker thread
- send_message: POST a single message as-is, return Expo's raw JSON
"""
import logging
from typing import Any, Dict, List

import httpx
import requests
from exponent_server_sdk import PushClient, PushMessage, PushServerError
from starlette.concurrency import run_in_threadpool

from AGRICONNECT.core import config

logger = logging.getLogger("notification.expo")

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "Accept-Encoding": "gzip, deflate",
    "Content-Type": "application/json",
}

_client = httpx.AsyncClient(headers=DEFAULT_HEADERS, timeout=config.HTTP_TIMEOUT_SECONDS)
_push_client = PushClient(host=config.EXPO_HOST, timeout=config.HTTP_TIMEOUT_SECONDS)


class PushGatewayError(Exception):
    """The Expo gateway rejected the request or could not be reached."""


def is_expo_push_token(token: Any) -> bool:
    return PushClient.is_exponent_push_token(token)


def to_push_messages(messages: List[Dict[str, Any]]) -> List[PushMessage]:
    """
    Expand dict messages into one PushMessage per recipient, dropping invalid tokens.
    """
    push_messages = []
    for message in messages:
        to = message.get("to")
        for token in to if isinstance(to, list) else [to]:
            if not is_expo_push_token(token):
                logger.warning("[Expo] skipping invalid push token: %s", token)
                continue
            push_messages.append(PushMessage(
                to=token,
                title=message.get("title"),
                body=message.get("body"),
                data=message.get("data"),
                sound=message.get("sound"),
            ))
    return push_messages


def _ticket_to_dict(ticket) -> Dict[str, Any]:
    return {
        "to": ticket.push_message.to,
        "status": ticket.status,
        "id": ticket.id,
        "message": ticket.message,
        "details": ticket.details,
    }


class ExpoPushClient:
    def __init__(
        self,
        client: httpx.AsyncClient,
        push_client: PushClient,
        push_url: str = config.EXPO_PUSH_URL,
    ):
        self.client = client
        self.push_client = push_client
        self.push_url = push_url

    async def send_message(self, message: Dict[str, Any]) -> Dict[str, Any]:
        """Send one message as-is and return Expo's raw response."""
        try:
            resp = await self.client.post(self.push_url, json=message)
        except httpx.RequestError as e:
            logger.exception("[Expo] request error")
            raise PushGatewayError(f"Expo request error: {e}") from e

        try:
            body = resp.json()
        except ValueError as e:
            raise PushGatewayError(f"Expo returned non-JSON response ({resp.status_code})") from e

        if resp.status_code >= 400:
            logger.error("[Expo] push error %s %s", resp.status_code, body)
            raise PushGatewayError(f"Expo push failed ({resp.status_code}): {body}")
        return body

    async def send_batched(self, messages: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Drop invalid tokens, then publish the rest in gateway-sized chunks.
        Returns every ticket received.
        """
        push_messages = to_push_messages(messages)
        if not push_messages:
            return []

        try:
            tickets = await run_in_threadpool(self.push_client.publish_multiple, push_messages)
        except PushServerError as e:
            logger.error("[Expo] push server error: %s %s", e, getattr(e, "errors", None))
            raise PushGatewayError(f"Expo push errors: {getattr(e, 'errors', None) or e}") from e
        except requests.RequestException as e:
            logger.exception("[Expo] request error")
            raise PushGatewayError(f"Expo request error: {e}") from e

        for ticket in tickets:
            if ticket.status != "ok":
                logger.warning("[Expo] ticket error for %s: %s", ticket.push_message.to, ticket.message)
        logger.info("✅ Notification tickets: %d", len(tickets))
        return [_ticket_to_dict(t) for t in tickets]


def get_push_client() -> ExpoPushClient:
    return ExpoPushClient(_client, _push_client)


async def close_client() -> None:
    await _client.aclose()
