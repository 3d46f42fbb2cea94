"""Display Formatting - strings the catalog views show for names, numbers and units.

Invariants:
    - Height and weight arrive in decimetres/hectograms; rendered with one decimal
    - format_pokemon_number pads to 4 digits and parse_pokemon_number reverses it
"""

from decimal import ROUND_HALF_UP, Decimal


def capitalize(text: str) -> str:
    return text[:1].upper() + text[1:]


def format_pokemon_name(name: str) -> str:
    """'mr-mime' -> 'Mr Mime'."""
    return " ".join(capitalize(part) for part in name.split("-"))


def _tenths(value: int) -> str:
    # Decimal keeps x/10 exact; float formatting would round 0.05 steps unevenly
    return str((Decimal(value) / 10).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def format_weight(weight: int) -> str:
    return f"{_tenths(weight)} kg"


def format_height(height: int) -> str:
    return f"{_tenths(height)} m"


def format_pokemon_number(pokemon_id: int) -> str:
    return f"#{pokemon_id:04d}"


def parse_pokemon_number(number: str) -> int:
    """'#0025' -> 25."""
    return int(number.strip().lstrip("#"))


def format_stat_name(stat_name: str) -> str:
    """'special-attack' -> 'special attack'."""
    return stat_name.replace("-", " ")
