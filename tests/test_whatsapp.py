"""Tests for the Twilio webhook and outbound sender."""

from unittest.mock import AsyncMock, Mock, patch
from zoneinfo import ZoneInfo

import pytest
from fastapi.testclient import TestClient
from twilio.base.exceptions import TwilioException

from domains.reminders import messages
from domains.reminders.scheduler import ReminderScheduler
from domains.whatsapp import DeliveryError, create_app, send_whatsapp

SP_TZ = ZoneInfo("America/Sao_Paulo")


@pytest.fixture
def reminders(mock_scheduler, store, deliver, text_generator):
    rs = ReminderScheduler(mock_scheduler, store, deliver, text_generator=text_generator, tz=SP_TZ)
    rs.ready.set()
    return rs


@pytest.fixture
def chat():
    assistant = Mock()
    assistant.reply = AsyncMock(return_value="Oi! Como posso ajudar?")
    return assistant


@pytest.fixture
def client(reminders, text_generator, chat):
    return TestClient(create_app(reminders, text_generator, chat=chat))


def post(client, body, owner="whatsapp:+5511987654321", **extra):
    return client.post("/whatsapp/webhook", data={"From": owner, "Body": body, "NumMedia": "0", **extra})


class TestHealth:
    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok", "armed": 0}


class TestWebhook:
    def test_reminder_request_is_confirmed(self, client, store):
        response = post(client, "me lembre em 10 minutos de ligar para a mãe")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/xml")
        assert "<Message>" in response.text
        assert "ligar para a mãe" in response.text

    def test_parse_error_is_returned(self, client):
        response = post(client, "me lembre de relaxar")
        assert "Não consegui entender a data/hora" in response.text

    def test_small_talk_goes_to_chat(self, client, chat):
        response = post(client, "bom dia")

        chat.reply.assert_awaited_once_with("whatsapp:+5511987654321", "bom dia")
        assert "Oi! Como posso ajudar?" in response.text

    def test_small_talk_without_chat_is_silent(self, reminders, text_generator):
        client = TestClient(create_app(reminders, text_generator))
        response = post(client, "bom dia")

        assert response.status_code == 200
        assert "<Message>" not in response.text

    def test_media_only_message(self, client):
        response = post(client, "", NumMedia="1")
        assert messages.MEDIA_NOT_SUPPORTED in response.text

    def test_handler_exception_gives_generic_reply(self, client):
        with patch("domains.whatsapp.webhook.handle_incoming_text", AsyncMock(side_effect=RuntimeError("boom"))):
            response = post(client, "me lembre em 10 minutos de algo")

        assert response.status_code == 200
        assert messages.INTERNAL_ERROR in response.text

    def test_invalid_signature_rejected(self, reminders, text_generator):
        client = TestClient(create_app(reminders, text_generator, validate_signature=True))
        response = post(client, "meus lembretes")
        assert response.status_code == 403


class TestSender:
    @pytest.mark.asyncio
    async def test_not_configured(self):
        with patch("domains.whatsapp.sender.TWILIO_ACCOUNT_SID", None):
            with pytest.raises(DeliveryError):
                await send_whatsapp("whatsapp:+5511987654321", "oi")

    @pytest.mark.asyncio
    async def test_sends_through_twilio(self):
        with patch("domains.whatsapp.sender.TWILIO_ACCOUNT_SID", "AC" + "0" * 32), \
             patch("domains.whatsapp.sender.TWILIO_AUTH_TOKEN", "token"), \
             patch("domains.whatsapp.sender.TWILIO_WHATSAPP_FROM", "+14155238886"), \
             patch("domains.whatsapp.sender.Client") as mock_client:
            mock_client.return_value.messages.create.return_value = Mock(sid="SM123")

            sid = await send_whatsapp("whatsapp:+5511987654321", "⏰ Lembrete: *pagar a conta*")

        assert sid == "SM123"
        mock_client.return_value.messages.create.assert_called_once_with(
            body="⏰ Lembrete: *pagar a conta*",
            from_="whatsapp:+14155238886",
            to="whatsapp:+5511987654321"
        )

    @pytest.mark.asyncio
    async def test_twilio_error_becomes_delivery_error(self):
        with patch("domains.whatsapp.sender.TWILIO_ACCOUNT_SID", "AC" + "0" * 32), \
             patch("domains.whatsapp.sender.TWILIO_AUTH_TOKEN", "token"), \
             patch("domains.whatsapp.sender.TWILIO_WHATSAPP_FROM", "+14155238886"), \
             patch("domains.whatsapp.sender.Client") as mock_client:
            mock_client.return_value.messages.create.side_effect = TwilioException("bad number")

            with pytest.raises(DeliveryError):
                await send_whatsapp("+5511987654321", "oi")
