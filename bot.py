"""WhatsApp Reminder Assistant - Main entry point.

Receives WhatsApp messages through a Twilio webhook, turns Portuguese
requests like "me lembre amanhã às 14h de enviar o relatório" into
scheduled reminders and sends them back at the right time.
"""

from contextlib import asynccontextmanager

import uvicorn
from apscheduler.schedulers.asyncio import AsyncIOScheduler

from claude_client import ClaudeClient
from logger import logger
from config import (
    ANTHROPIC_API_KEY,
    CLAUDE_MODEL,
    HOST,
    PORT,
    REMINDERS_FILE,
    TWILIO_VALIDATE_SIGNATURE,
)
from domains.assistant import ChatAssistant
from domains.reminders import (
    ClaudeTextGenerator,
    ReminderScheduler,
    ReminderStore,
    TemplateTextGenerator,
)
from domains.whatsapp import create_app, send_whatsapp
from domains.whatsapp.sender import is_twilio_configured


def build_app():
    """Wire the scheduler, store, text generation and webhook together."""
    scheduler = AsyncIOScheduler()
    store = ReminderStore(REMINDERS_FILE)

    claude = ClaudeClient(api_key=ANTHROPIC_API_KEY, model=CLAUDE_MODEL) if ANTHROPIC_API_KEY else None
    if claude:
        text_generator = ClaudeTextGenerator(claude)
        chat = ChatAssistant(claude)
    else:
        logger.warning("ANTHROPIC_API_KEY not set - using template messages, chat disabled")
        text_generator = TemplateTextGenerator()
        chat = None

    if not is_twilio_configured():
        logger.warning("Twilio credentials not configured - reminders will fail to deliver")

    reminders = ReminderScheduler(scheduler, store, send_whatsapp, text_generator=text_generator)

    @asynccontextmanager
    async def lifespan(app):
        # AsyncIOScheduler binds to the running loop, so start it here
        scheduler.start()
        report = await reminders.reconcile_on_start()
        logger.info(f"Scheduler started: {report.armed} reminders armed, {report.reaped} reaped")
        yield
        scheduler.shutdown(wait=False)
        logger.info("Scheduler stopped")

    return create_app(
        reminders,
        text_generator,
        chat=chat,
        validate_signature=TWILIO_VALIDATE_SIGNATURE,
        lifespan=lifespan
    )


def main():
    """Entry point."""
    logger.info("Starting WhatsApp Reminder Assistant...")
    uvicorn.run(build_app(), host=HOST, port=PORT)


if __name__ == "__main__":
    main()
