"""WhatsApp transport via Twilio - inbound webhook and outbound delivery."""

from .sender import DeliveryError, send_whatsapp
from .webhook import create_app

__all__ = ["DeliveryError", "create_app", "send_whatsapp"]
