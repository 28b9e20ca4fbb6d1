"""Global configuration for the WhatsApp reminder assistant."""

import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()


def _parse_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on", "y")


# Timezone used to interpret "amanhã às 14h" and friends
TIMEZONE = os.getenv("TIMEZONE", "America/Sao_Paulo")

# Reminders persistence (single JSON collection, rewritten on every mutation)
REMINDERS_FILE = Path(os.getenv("REMINDERS_FILE", "data/reminders.json"))

# Forward offset applied when a resolved time is not in the future
REMINDER_GRACE_SECONDS = int(os.getenv("REMINDER_GRACE_SECONDS", "60"))

# Claude API
ANTHROPIC_API_KEY = os.getenv("ANTHROPIC_API_KEY")
CLAUDE_MODEL = os.getenv("CLAUDE_MODEL", "claude-sonnet-4-20250514")

# Conversational fallback
CONTEXT_WINDOW_MESSAGES = int(os.getenv("CONTEXT_WINDOW_MESSAGES", "15"))

# Twilio WhatsApp
TWILIO_ACCOUNT_SID = os.getenv("TWILIO_ACCOUNT_SID")
TWILIO_AUTH_TOKEN = os.getenv("TWILIO_AUTH_TOKEN")
TWILIO_WHATSAPP_FROM = os.getenv("TWILIO_WHATSAPP_FROM")
TWILIO_VALIDATE_SIGNATURE = _parse_bool("TWILIO_VALIDATE_SIGNATURE", False)

# Webhook server
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR = Path(os.getenv("LOG_DIR", "logs"))
LOG_DIR.mkdir(parents=True, exist_ok=True)
