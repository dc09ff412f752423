"""Tests for attendee domain rules (CPF, roles)"""
from profoli.domain.attendee import (
    normalize_cpf, is_valid_cpf_length, format_cpf, parse_roles, clean_roles,
    payment_status_label,
)


class TestCpf:
    def test_normalize_strips_punctuation(self):
        assert normalize_cpf("123.456.789-00") == "12345678900"

    def test_normalize_same_digits_any_format(self):
        assert normalize_cpf("123 456 789 00") == normalize_cpf("12345678900")

    def test_normalize_none(self):
        assert normalize_cpf(None) == ""

    def test_length(self):
        assert is_valid_cpf_length("12345678900")
        assert not is_valid_cpf_length("1234567890")
        assert not is_valid_cpf_length("123456789001")

    def test_format(self):
        assert format_cpf("12345678900") == "123.456.789-00"
        assert format_cpf("123") == "123"


class TestRoles:
    def test_parse_native_list(self):
        assert parse_roles(["Pastor", "Regente"]) == ["Pastor", "Regente"]

    def test_parse_legacy_json_string(self):
        assert parse_roles('["Pastor"]') == ["Pastor"]

    def test_parse_malformed(self):
        assert parse_roles("not json") is None
        assert parse_roles('{"a": 1}') is None
        assert parse_roles([1, 2]) is None
        assert parse_roles(None) is None

    def test_clean_roles(self):
        assert clean_roles([" Pastor ", "Pastor", "", "Regente"]) == ["Pastor", "Regente"]


def test_payment_status_label():
    assert payment_status_label("paid") == "Pago"
    assert payment_status_label("exempt") == "Isento"
    assert payment_status_label("pending") == "Pendente"
