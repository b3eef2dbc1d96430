"""Tests for the CPF, CNPJ and phone helpers."""

import pytest

from common import documents


class TestCPF:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("529.982.247-25", "52998224725"),
            (52998224725, "52998224725"),
            (1144477735, "01144477735"),
            ("123456789012345", "12345678901"),
            (None, "00000000000"),
        ],
    )
    def test_normalize(self, value: str | int | None, expected: str) -> None:
        assert documents.normalize_cpf(value) == expected

    def test_format(self) -> None:
        assert documents.format_cpf("52998224725") == "529.982.247-25"

    @pytest.mark.parametrize(
        "value,valid",
        [
            ("529.982.247-25", True),
            ("11144477735", True),
            ("12345678909", True),
            ("52998224724", False),
            ("11111111111", False),
            ("5299822472", False),
            ("", False),
        ],
    )
    def test_validate(self, value: str, valid: bool) -> None:
        assert documents.validate_cpf(value) is valid

    def test_is_same_cpf_ignores_formatting(self) -> None:
        assert documents.is_same_cpf("529.982.247-25", "52998224725")
        assert not documents.is_same_cpf("52998224725", "11144477735")
        assert not documents.is_same_cpf(None, "52998224725")


class TestCNPJ:
    def test_normalize_and_format(self) -> None:
        assert documents.normalize_cnpj("11.444.777/0001-61") == "11444777000161"
        assert documents.format_cnpj("11444777000161") == "11.444.777/0001-61"

    @pytest.mark.parametrize(
        "value,valid",
        [
            ("11.444.777/0001-61", True),
            ("11444777000162", False),
            ("00000000000000", False),
            ("1144477700016", False),
        ],
    )
    def test_validate(self, value: str, valid: bool) -> None:
        assert documents.validate_cnpj(value) is valid


class TestPhone:
    def test_normalize_truncates(self) -> None:
        assert documents.normalize_phone("+55 (95) 99123-4567") == "55959912345"

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("95", "95"),
            ("9599", "(95) 99"),
            ("9532241234", "(95) 3224-1234"),
            ("95991234567", "(95) 99123-4567"),
        ],
    )
    def test_format(self, value: str, expected: str) -> None:
        assert documents.format_phone(value) == expected

    def test_validate(self) -> None:
        assert documents.validate_phone("(95) 99123-4567")
        assert documents.validate_phone("9532241234")
        assert not documents.validate_phone("991234567")
