"""Twilio WhatsApp webhook.

Twilio POSTs each inbound message as a form; the reply goes back inline as
TwiML. Scheduled notifications use the REST API instead (see sender.py).
"""

from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

from fastapi import FastAPI, Request, Response
from twilio.request_validator import RequestValidator
from twilio.twiml.messaging_response import MessagingResponse

from config import TIMEZONE, TWILIO_AUTH_TOKEN
from logger import logger
from utils import sanitize_for_log
from domains.reminders import (
    NoAction,
    ReminderScheduler,
    SendToOwner,
    TextGenerator,
    handle_incoming_text,
)
from domains.reminders import messages

TWIML_MEDIA_TYPE = "application/xml"


def _twiml(text: Optional[str] = None) -> Response:
    response = MessagingResponse()
    if text:
        response.message(text)
    return Response(content=str(response), media_type=TWIML_MEDIA_TYPE)


def create_app(
    reminders: ReminderScheduler,
    text_generator: TextGenerator,
    chat=None,
    validate_signature: bool = False,
    lifespan=None,
) -> FastAPI:
    """Build the webhook application.

    Args:
        reminders: Scheduler handling reminder commands and requests
        text_generator: Wording for reminder confirmations
        chat: Optional ChatAssistant answering everything else
        validate_signature: Reject requests without a valid X-Twilio-Signature
        lifespan: Optional FastAPI lifespan (starts the scheduler in bot.py)

    Returns:
        FastAPI app
    """
    app = FastAPI(
        title="Lembrete",
        description="WhatsApp reminder assistant",
        version="1.0.0",
        lifespan=lifespan
    )
    tz = ZoneInfo(TIMEZONE)

    # ============================================================
    # Health Check
    # ============================================================

    @app.get("/")
    async def root():
        """Health check endpoint."""
        return {
            "status": "ok",
            "service": "Lembrete",
            "timestamp": datetime.now(tz).isoformat()
        }

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "ok", "armed": len(reminders.armed_ids)}

    # ============================================================
    # WhatsApp
    # ============================================================

    @app.post("/whatsapp/webhook")
    async def whatsapp_webhook(request: Request):
        """Handle one inbound WhatsApp message."""
        form = await request.form()
        fields = {key: str(value) for key, value in form.items()}

        if validate_signature:
            validator = RequestValidator(TWILIO_AUTH_TOKEN or "")
            signature = request.headers.get("X-Twilio-Signature", "")
            if not validator.validate(str(request.url), fields, signature):
                logger.warning("Rejected webhook call with invalid Twilio signature")
                return Response(status_code=403)

        owner = fields.get("From", "")
        body = fields.get("Body", "").strip()
        num_media = int(fields.get("NumMedia", "0") or 0)

        if not owner:
            return _twiml()

        logger.info(f"Message from {sanitize_for_log(owner)}: {sanitize_for_log(body, max_length=80)}")

        if not body:
            return _twiml(messages.MEDIA_NOT_SUPPORTED if num_media else None)

        try:
            action = await handle_incoming_text(owner, body, reminders, text_generator)
            if isinstance(action, SendToOwner):
                return _twiml(action.text)

            if isinstance(action, NoAction) and chat is not None:
                return _twiml(await chat.reply(owner, body))

            return _twiml()

        except Exception as e:
            logger.error(f"Error handling message from {sanitize_for_log(owner)}: {e}")
            return _twiml(messages.INTERNAL_ERROR)

    return app
