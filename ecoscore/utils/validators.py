from typing import Optional
import re

VALID_BARCODE_LENGTHS = (8, 12, 13, 14)


def clean_barcode(barcode: str) -> str:
    return re.sub(r"\D", "", barcode or "")


def _check_digit(digits: str, odd_weight: int, even_weight: int) -> int:
    total = 0
    for i, digit in enumerate(digits):
        total += int(digit) * (odd_weight if i % 2 == 0 else even_weight)
    return (10 - (total % 10)) % 10


def validate_barcode(barcode: Optional[str]) -> bool:
    """
    Valide un code-barres EAN-8 / UPC-A / EAN-13 / GTIN-14

    Les caractères non numériques sont ignorés. Les codes à 14 chiffres
    sont acceptés sans contrôle de la clé.
    """
    cleaned = clean_barcode(barcode)

    if len(cleaned) not in VALID_BARCODE_LENGTHS:
        return False

    if len(cleaned) == 13:
        return _check_digit(cleaned[:12], 1, 3) == int(cleaned[12])

    if len(cleaned) == 12:
        return _check_digit(cleaned[:11], 3, 1) == int(cleaned[11])

    if len(cleaned) == 8:
        return _check_digit(cleaned[:7], 3, 1) == int(cleaned[7])

    return True


LIKE_ESCAPE = "\\"


def escape_like(text: str) -> str:
    """Neutralise les jokers LIKE (% et _) pour une recherche littérale"""
    return (
        text.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
