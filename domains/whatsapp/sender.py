"""Outbound WhatsApp messages through the Twilio REST API."""

import asyncio

from twilio.base.exceptions import TwilioException
from twilio.rest import Client

from config import TWILIO_ACCOUNT_SID, TWILIO_AUTH_TOKEN, TWILIO_WHATSAPP_FROM
from logger import logger
from utils import sanitize_for_log


class DeliveryError(Exception):
    """A message could not be handed to WhatsApp."""


def _whatsapp_address(number: str) -> str:
    return number if number.startswith("whatsapp:") else f"whatsapp:{number}"


def is_twilio_configured() -> bool:
    """Check if Twilio credentials are configured."""
    return all([TWILIO_ACCOUNT_SID, TWILIO_AUTH_TOKEN, TWILIO_WHATSAPP_FROM])


async def send_whatsapp(owner: str, text: str) -> str:
    """Send a WhatsApp message to an owner.

    Args:
        owner: Recipient, as received in the webhook "From" field
        text: Message body

    Returns:
        Twilio message SID

    Raises:
        DeliveryError: If Twilio is not configured or rejects the message
    """
    if not is_twilio_configured():
        raise DeliveryError("Twilio credentials not configured")

    def send_message():
        client = Client(TWILIO_ACCOUNT_SID, TWILIO_AUTH_TOKEN)
        return client.messages.create(
            body=text,
            from_=_whatsapp_address(TWILIO_WHATSAPP_FROM),
            to=_whatsapp_address(owner)
        )

    try:
        # Sync Twilio client, keep it off the event loop
        msg = await asyncio.to_thread(send_message)
    except TwilioException as e:
        logger.error(f"Twilio error sending to {sanitize_for_log(owner)}: {e}")
        raise DeliveryError(str(e)) from e

    logger.info(f"WhatsApp message sent to {sanitize_for_log(owner)}: {msg.sid}")
    return msg.sid
