from __future__ import annotations

CURRENCY_SYMBOLS = {"USD": "$", "GBP": "£", "EUR": "€"}


def format_money(currency: str, value: float) -> str:
    code = currency.strip().upper()
    symbol = CURRENCY_SYMBOLS.get(code)
    amount = f"{abs(value):,.2f}"
    sign = "-" if value < 0 else ""
    if symbol:
        return f"{sign}{symbol}{amount}"
    return f"{sign}{code} {amount}"
