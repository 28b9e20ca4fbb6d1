"""Tests for the lexical normalizer."""

import pytest

from domains.reminders.normalizer import normalize, strip_accents, words_to_number


class TestStripAccents:
    def test_folds_case_and_accents(self):
        assert strip_accents("Amanhã às Três") == "amanha as tres"

    def test_cedilla(self):
        assert strip_accents("março") == "marco"


class TestWordsToNumber:
    @pytest.mark.parametrize("words,expected", [
        ("nove", 9),
        ("quinze", 15),
        ("quarenta e oito", 48),
        ("meia", 30),
    ])
    def test_values(self, words, expected):
        assert words_to_number(words) == expected


class TestNormalize:
    def test_empty(self):
        assert normalize("") == ""
        assert normalize(None) == ""

    def test_punctuation_and_spaces_collapse(self):
        assert normalize("Me lembre,   amanhã!") == "me lembre amanha"

    def test_hour_marker(self):
        assert normalize("me avise amanhã às 14h") == "me avise amanha as 14:00"

    def test_hour_and_minutes_marker(self):
        assert normalize("às 9h15") == "as 09:15"

    def test_spelled_out_half_past_at_night(self):
        assert normalize("Me lembre às nove e meia da noite") == "me lembre as 21:30"

    def test_period_of_day_shifts_hour(self):
        assert normalize("3 horas da tarde") == "15:00"
        assert normalize("8 da manhã") == "08:00"

    def test_digit_pair(self):
        assert normalize("às 9 e 22") == "as 09:22"

    def test_noon_and_midnight(self):
        assert normalize("ao meio-dia") == "as 12:00"
        assert normalize("à meia-noite") == "as 00:00"

    def test_tens_and_unit_is_one_number(self):
        assert normalize("às vinte e três horas") == "as 23:00"

    def test_spelled_duration_becomes_digits(self):
        assert normalize("daqui a dez minutos") == "daqui a 10 minutos"

    def test_duration_is_not_a_clock(self):
        assert normalize("em 2 horas") == "em 2 horas"

    def test_dates_untouched(self):
        assert normalize("05/09/2025 às 11h32") == "05/09/2025 as 11:32"

    @pytest.mark.parametrize("text", [
        "Me lembre às nove e meia da noite de tomar o remédio",
        "me avise daqui a 2 horas e 30 minutos",
        "dia 5 de setembro às 3 da tarde",
        "ao meio-dia de almoçar",
        "05/09/2025 às 11h32",
    ])
    def test_idempotent(self, text):
        once = normalize(text)
        assert normalize(once) == once
