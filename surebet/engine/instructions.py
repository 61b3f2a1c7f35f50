"""Human-readable instruction generation.

Converts evaluated markets into clear step-by-step instructions that humans
can execute manually.

Output must be:
- Exact bet amounts
- Clear bookmaker names
- Specific odds
- Guaranteed payout and profit
"""

from ..core.models import AllocationLeg, Market, SurebetRecord, SurebetResult
from ..utils.odds import decimal_to_american, format_american_odds


def _event_name(market: Market) -> str:
    if market.home and market.away:
        return f"{market.home} vs {market.away}"
    return market.home or market.away or "Unknown event"


def format_result(market: Market, result: SurebetResult) -> str:
    """
    Format an evaluated market as human-readable instructions.

    Example output:
    ```
    SUREBET - Sinner vs Alcaraz (Home/Away)
    Sport: Tennis | League: ATP Finals

    Guaranteed Profit: $3.73 (3.73%)
    Edge: 96.4000%

    INSTRUCTIONS:
    1. Bet $49.40 on [Home] at 2.10 (+110) with Bet365
    2. Bet $50.60 on [Away] at 2.05 (+105) with Pinnacle

    Total Stake: $100.00
    Guaranteed Payout: $103.73
    ```
    """
    lines = []

    header = "SUREBET" if result.is_surebet else "NO SUREBET"
    title = f"{header} - {_event_name(market)}"
    if market.market:
        title += f" ({market.market})"
    lines.append(title)

    details = [
        f"{name}: {value}"
        for name, value in (
            ("Sport", market.sport),
            ("League", market.league),
            ("Date", market.date),
        )
        if value
    ]
    if details:
        lines.append(" | ".join(details))
    lines.append("")

    if not result.is_surebet:
        lines.append(f"Reason: {result.rejection_reason}")
        if result.edge_percentage:
            lines.append(f"Edge: {result.edge_percentage:.4f}%")
        return "\n".join(lines)

    lines.append(f"Guaranteed Profit: ${result.profit:.2f} ({result.profit_percentage:.2f}%)")
    lines.append(f"Edge: {result.edge_percentage:.4f}%")
    lines.append("")

    lines.append("INSTRUCTIONS:")
    for i, leg in enumerate(result.allocation, 1):
        lines.append(format_leg(leg, i))
    lines.append("")

    total_stake = sum(leg.stake for leg in result.allocation)
    lines.append(f"Total Stake: ${total_stake:.2f}")
    lines.append(f"Guaranteed Payout: ${result.payout:.2f}")

    if result.advisory:
        lines.append(f"NOTE: {result.advisory}")

    return "\n".join(lines)


def format_leg(leg: AllocationLeg, step_num: int) -> str:
    """
    Format a single allocation leg.

    Example: "1. Bet $49.40 on [Home] at 2.10 (+110) with Bet365"
    """
    american = format_american_odds(decimal_to_american(leg.decimal_odd))

    return (
        f"{step_num}. Bet ${leg.stake:.2f} on [{leg.label}] "
        f"at {leg.decimal_odd:.2f} ({american}) with {leg.bookmaker}"
    )


def format_record_json(record: SurebetRecord) -> dict:
    """
    Format a record as JSON-serializable dict.

    Used for API responses.
    """
    data = record.to_export()
    data["formatted_text"] = format_result(record.market, record.result)
    return data


def format_records_table(records: list[SurebetRecord]) -> str:
    """
    Format multiple records as ASCII table.

    For CLI output.
    """
    if not records:
        return "No surebets found."

    lines = []
    header = f"{'Profit':<8} {'Payout':>9} {'Event':<40} {'Bookmakers'}"
    lines.append(header)
    lines.append("-" * len(header))

    for record in records[:20]:  # Limit to 20
        result = record.result
        books = "/".join(leg.bookmaker[:10] for leg in result.allocation)
        event = _event_name(record.market)
        event = event[:38] + ".." if len(event) > 40 else event
        line = f"{result.profit_percentage:>6.2f}% {result.payout:>9.2f} {event:<40} {books}"
        lines.append(line)

    return "\n".join(lines)


def generate_disclaimer() -> str:
    """
    Generate advisory disclaimer text.

    MUST be displayed on all outputs.
    """
    return """
DISCLAIMER: This is advisory information only. No bets are placed automatically.
All betting decisions and executions must be made by you. Odds can change
rapidly and bookmakers may void or limit arbitrage bets. Always verify current
odds before placing any bets. Gamble responsibly.
""".strip()
