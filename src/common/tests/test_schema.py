"""Tests for common schema utilities."""

import pytest
from pydantic import ValidationError

from common.schema import CPFMixin
from events.schema import CheckinParticipantSchema


class TestCPFMixin:
    def test_normalizes_formatted_cpf(self) -> None:
        assert CPFMixin(cpf="529.982.247-25").cpf == "52998224725"

    def test_accepts_bad_check_digits(self) -> None:
        assert CPFMixin(cpf="123.456.789-00").cpf == "12345678900"

    def test_pads_cpf_that_lost_leading_zeros(self) -> None:
        assert CPFMixin(cpf="1234567890").cpf == "01234567890"

    @pytest.mark.parametrize("value", ["123.456.789-0912", "000.000.000-00", "abc"])
    def test_rejects(self, value: str) -> None:
        with pytest.raises(ValidationError):
            CPFMixin(cpf=value)


class TestCheckinParticipantSchema:
    def test_typed_cpf_needs_valid_check_digits(self) -> None:
        with pytest.raises(ValidationError):
            CheckinParticipantSchema(cpf="123.456.789-00", nome="Rui Costa")

    def test_looked_up_cpf_keeps_its_digits(self) -> None:
        schema = CheckinParticipantSchema(cpf="123.456.789-00", nome="Rui Costa", source="local")

        assert schema.cpf == "12345678900"
