"""Reminders domain configuration - language tables and scheduling constants."""

from config import REMINDER_GRACE_SECONDS

# Phrases that mark a message as a reminder request.
# Stored without accents; matching folds accents on the incoming text.
REMINDER_TRIGGERS = [
    "me lembre",
    "me lembra",
    "lembre-me",
    "nao me deixe esquecer",
    "me avise",
    "me recorde",
    "me faca lembrar",
    "me cobre",
    "me alerta",
    "nao esqueca de",
]

# Commands recognised before the parsing pipeline (substring match)
CLEAR_COMMANDS = ["apagar todos os lembretes", "apagar lembretes", "limpar lembretes"]
CANCEL_COMMANDS = ["cancelar lembrete"]
LIST_COMMANDS = ["meus lembretes", "listar lembretes"]

MONTHS = {
    "janeiro": 1, "fevereiro": 2, "marco": 3, "abril": 4,
    "maio": 5, "junho": 6, "julho": 7, "agosto": 8,
    "setembro": 9, "outubro": 10, "novembro": 11, "dezembro": 12,
}

# Spelled-out numbers, unaccented
UNITS = {
    "zero": 0, "um": 1, "uma": 1, "dois": 2, "duas": 2, "tres": 3,
    "quatro": 4, "cinco": 5, "seis": 6, "sete": 7, "oito": 8, "nove": 9,
}
TEENS = {
    "dez": 10, "onze": 11, "doze": 12, "treze": 13, "catorze": 14,
    "quatorze": 14, "quinze": 15, "dezesseis": 16, "dezessete": 17,
    "dezoito": 18, "dezenove": 19,
}
TENS = {"vinte": 20, "trinta": 30, "quarenta": 40, "cinquenta": 50}

# Words that introduce a duration ("em 10 minutos", "daqui a 2 horas")
RELATIVE_MARKERS = ["daqui a", "dentro de", "em"]

# Tokens that make the general-purpose date parser worth trying
TEMPORAL_HINTS = [
    "hoje", "semana", "semanas", "mes", "meses", "ano", "anos", "dias",
    "proximo", "proxima", "manha", "tarde", "noite", "segunda", "terca",
    "quarta", "quinta", "sexta", "sabado", "domingo",
]

# Hour used when only a period of the day is given ("hoje a noite")
PERIOD_HOURS = {"manha": 8, "tarde": 14, "noite": 20}

# Settings handed to dateparser for the fallback strategy
DATEPARSER_LANGUAGES = ["pt"]

# Seconds added to "now" when a resolved time is already in the past
GRACE_SECONDS = REMINDER_GRACE_SECONDS
