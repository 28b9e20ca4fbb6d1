"""Tests for payload extraction and the full parse pipeline."""

import re

import pytest

from domains.reminders import messages
from domains.reminders.errors import ParseError
from domains.reminders.parser import ParsedReminder, parse_reminder_request
from domains.reminders.payload import accent_pattern, extract_payload


class TestAccentPattern:
    def test_matches_with_and_without_accents(self):
        pattern = re.compile(accent_pattern("nao esqueca de"), re.IGNORECASE)
        assert pattern.search("Não esqueça de")
        assert pattern.search("nao esqueca de")


class TestExtractPayload:
    @pytest.mark.parametrize("text,expected", [
        ("Me lembre em 10 minutos de ligar para a mãe", "ligar para a mãe"),
        ("me avise amanhã às 10h de pagar a conta", "pagar a conta"),
        ("Me lembre amanhã às 14h de enviar o relatório", "enviar o relatório"),
        ("Me avise ao meio-dia de almoçar", "almoçar"),
        ("me lembre daqui a 2 horas e 30 minutos de tirar o bolo do forno", "tirar o bolo do forno"),
        ("Não me deixe esquecer dia 5 de setembro às 9h de levar o carro na revisão",
         "levar o carro na revisão"),
        ("me lembre 05/09/2025 às 11h32 que tenho dentista", "tenho dentista"),
    ])
    def test_strips_trigger_and_time(self, text, expected):
        assert extract_payload(text) == expected

    def test_keeps_original_casing(self):
        assert extract_payload("ME LEMBRE em 5 minutos de Ligar pro João") == "Ligar pro João"

    def test_keeps_quantities_in_payload(self):
        assert extract_payload("me lembre às 10h de beber 2 litros de água") == "beber 2 litros de água"

    @pytest.mark.parametrize("text", ["me lembre", "Me lembre amanhã às 10h", "", None])
    def test_empty_payload(self, text):
        result = extract_payload(text)
        assert isinstance(result, ParseError)
        assert result.reason == "empty_payload"
        assert result.message == messages.EMPTY_PAYLOAD


class TestParseReminderRequest:
    def test_scenario_relative(self, now):
        result = parse_reminder_request("me lembre em 10 minutos de ligar para a mãe", now=now)
        assert isinstance(result, ParsedReminder)
        assert result.payload == "ligar para a mãe"
        assert result.due_at.hour == 15 and result.due_at.minute == 10

    def test_scenario_tomorrow(self, now):
        result = parse_reminder_request("me lembre amanhã às 14h de enviar o relatório", now=now)
        assert result.payload == "enviar o relatório"
        assert (result.due_at.day, result.due_at.hour) == (4, 14)

    def test_no_date_reported_before_payload(self, now):
        result = parse_reminder_request("me lembre de relaxar", now=now)
        assert isinstance(result, ParseError)
        assert result.reason == "no_date"

    def test_empty_payload(self, now):
        result = parse_reminder_request("me lembre amanhã às 10h", now=now)
        assert isinstance(result, ParseError)
        assert result.reason == "empty_payload"


class TestExtractPayloadLooseDates:
    @pytest.mark.parametrize("text,expected", [
        ("me lembre em 2h30 de tirar o bolo", "tirar o bolo"),
        ("me lembre daqui a 1h30 de ligar", "ligar"),
        ("me lembre sexta de pagar o aluguel", "pagar o aluguel"),
        ("me lembre na próxima semana de ir ao médico", "ir ao médico"),
        ("me lembre 15 de outubro de pagar a fatura", "pagar a fatura"),
        ("me lembre na próxima quarta-feira de levar o lixo", "levar o lixo"),
        ("me lembre de renovar o seguro mês que vem", "renovar o seguro"),
        ("me lembre de pagar o aluguel sábado", "pagar o aluguel"),
        ("me lembre em 3 dias de trocar o filtro", "trocar o filtro"),
        ("me lembre hoje à noite de ligar pra mãe", "ligar pra mãe"),
    ])
    def test_strips_date_words(self, text, expected):
        assert extract_payload(text) == expected

    def test_weekday_inside_payload_stays(self):
        assert extract_payload("me lembre amanhã de pedir a segunda via do boleto") == "pedir a segunda via do boleto"

    def test_quantity_after_as_stays(self):
        assert extract_payload("me lembre amanhã de levar as 3 crianças na escola") == "levar as 3 crianças na escola"
