"""Brazilian document helpers: CPF, CNPJ and phone numbers.

Everything we persist is digits only; formatting is for display.
"""

import re

_NON_DIGITS = re.compile(r"\D")


def only_digits(value: str | int | None) -> str:
    """Strip every non-digit character."""
    return _NON_DIGITS.sub("", str(value if value is not None else ""))


def normalize_cpf(value: str | int | None) -> str:
    """Keep digits, truncate to 11 and left-pad with zeros.

    SAS returns CPFs as integers, so leading zeros are lost on the way in.
    """
    return only_digits(value)[:11].zfill(11)


def format_cpf(value: str | int | None) -> str:
    """Format a CPF as 000.000.000-00."""
    n = normalize_cpf(value)
    return f"{n[:3]}.{n[3:6]}.{n[6:9]}-{n[9:]}"


def is_same_cpf(a: str | None, b: str | None) -> bool:
    """Compare two CPFs ignoring formatting."""
    if not a or not b:
        return False
    return normalize_cpf(a) == normalize_cpf(b)


def _cpf_check_digit(digits: str) -> int:
    weight = len(digits) + 1
    total = sum(int(d) * (weight - i) for i, d in enumerate(digits))
    rest = 11 - (total % 11)
    return 0 if rest >= 10 else rest


def validate_cpf(value: str | int | None) -> bool:
    """Validate length, repeated digits and both check digits of a CPF."""
    digits = only_digits(value)
    if len(digits) != 11 or len(set(digits)) == 1:
        return False
    return _cpf_check_digit(digits[:9]) == int(digits[9]) and _cpf_check_digit(digits[:10]) == int(digits[10])


def normalize_cnpj(value: str | int | None) -> str:
    """Keep digits, truncate to 14 and left-pad with zeros."""
    return only_digits(value)[:14].zfill(14)


def format_cnpj(value: str | int | None) -> str:
    """Format a CNPJ as 00.000.000/0000-00."""
    n = normalize_cnpj(value)
    return f"{n[:2]}.{n[2:5]}.{n[5:8]}/{n[8:12]}-{n[12:]}"


def _cnpj_check_digit(digits: str) -> int:
    weights = [6, 5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2][-len(digits) :]
    total = sum(int(d) * w for d, w in zip(digits, weights))
    rest = total % 11
    return 0 if rest < 2 else 11 - rest


def validate_cnpj(value: str | int | None) -> bool:
    """Validate length, repeated digits and both check digits of a CNPJ."""
    digits = only_digits(value)
    if len(digits) != 14 or len(set(digits)) == 1:
        return False
    return _cnpj_check_digit(digits[:12]) == int(digits[12]) and _cnpj_check_digit(digits[:13]) == int(digits[13])


def normalize_phone(value: str | None) -> str:
    """Digits only, at most 11 (DDD + number)."""
    return only_digits(value)[:11]


def format_phone(value: str | None) -> str:
    """Format as (99) 99999-9999 or (99) 9999-9999 depending on length."""
    digits = normalize_phone(value)
    if len(digits) <= 2:
        return digits
    if len(digits) <= 6:
        return f"({digits[:2]}) {digits[2:]}"
    if len(digits) <= 10:
        return f"({digits[:2]}) {digits[2:6]}-{digits[6:]}"
    return f"({digits[:2]}) {digits[2:7]}-{digits[7:]}"


def validate_phone(value: str | None) -> bool:
    """A phone has 10 or 11 digits."""
    return len(only_digits(value)) in (10, 11)
