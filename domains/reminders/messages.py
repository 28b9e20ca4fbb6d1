"""User-facing strings and formatting (pt-BR)."""

from datetime import datetime

NO_DATE = "🤔 Não consegui entender a data/hora. Ex: 'amanhã às 14h' ou '05/09/2025 às 11h'."
INVALID_DATE = "🤔 Essa data não existe no calendário. Ex: 'dia 5 de setembro às 10h' ou '05/09/2025 às 11h'."
EMPTY_PAYLOAD = "⚠️ Você precisa dizer o que lembrar. Ex: 'Me avise amanhã às 10h de pagar a conta'."

NO_REMINDERS = "🙌 Você não tem lembretes ativos."
NOTHING_TO_CLEAR = "🙌 Você não tem lembretes para apagar."
CANCEL_NOT_FOUND = "⚠️ Não encontrei nenhum lembrete correspondente ao que você quer cancelar."
CANCEL_WHICH = "Qual lembrete você quer cancelar? Ex: 'cancelar lembrete pagar a conta'."

INTERNAL_ERROR = "⚠️ Ocorreu um erro ao processar sua mensagem. Tente novamente mais tarde."
MEDIA_NOT_SUPPORTED = "📎 Por enquanto eu só entendo mensagens de texto."


def format_due_at(due_at: datetime) -> str:
    """Format a due time the way Brazilian users read it: 05/09/2025 às 11:32."""
    return due_at.strftime("%d/%m/%Y às %H:%M")


def format_reminder_list(reminders) -> str:
    """Numbered list of an owner's reminders."""
    if not reminders:
        return NO_REMINDERS

    lines = ["📅 Seus lembretes:", ""]
    for i, r in enumerate(reminders, start=1):
        lines.append(f"{i}. *{r.payload}* → {format_due_at(r.due_at)}")
    return "\n".join(lines)


def format_cancelled(reminder) -> str:
    return f"❌ Lembrete cancelado: *{reminder.payload}*"


def format_cleared(count: int) -> str:
    if count == 0:
        return NOTHING_TO_CLEAR
    if count == 1:
        return "🗑️ Seu lembrete foi apagado."
    return f"🗑️ Todos os seus {count} lembretes foram apagados."


def format_confirmation(reminder) -> str:
    return f"✅ Combinado! Vou te lembrar de *{reminder.payload}* em {format_due_at(reminder.due_at)}."


def format_notification(reminder) -> str:
    return f"⏰ Lembrete: *{reminder.payload}*"
