def format_compact(num: float) -> str:
    """Abbreviate large amounts: 1_250_000 -> '1.3M'."""
    if num >= 1e9:
        return f"{num / 1e9:.1f}B"
    if num >= 1e6:
        return f"{num / 1e6:.1f}M"
    if num >= 1e3:
        return f"{num / 1e3:.1f}K"
    return f"{num:.0f}"


def format_percent(value: float | None) -> str:
    return f"{value * 100:.1f}%" if value else "N/A"


def format_money(value: float | None) -> str:
    return f"${format_compact(value)}" if value else "N/A"
