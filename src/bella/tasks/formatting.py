"""Small text helpers shared by task prompts."""


def money(value: float, *, cents: bool = False) -> str:
    """Format dollars, e.g. ``$50,000`` or ``$102.58``."""
    return f"${value:,.2f}" if cents else f"${value:,.0f}"


def quote(phrase: str) -> str:
    return f"'{phrase}'"


def percent(value: float) -> str:
    """Format a contribution percentage without a trailing ``.0``."""
    return f"{value:g}%"
