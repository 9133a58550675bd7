# app/utils.py


def format_currency(amount_cents: int) -> str:
    """
    1234567 -> "$12,345.67"
    """
    return f"${amount_cents / 100:,.2f}"
