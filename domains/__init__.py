"""Domain modules for the WhatsApp reminder assistant."""
