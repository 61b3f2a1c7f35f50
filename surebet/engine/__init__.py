from .evaluator import evaluate_market, evaluate_outcomes, validate_stake
from .pipeline import RunCounter, collect_surebets
from .scanner import SurebetScanner
from .instructions import (
    format_result,
    format_leg,
    format_record_json,
    format_records_table,
    generate_disclaimer,
)

__all__ = [
    "evaluate_market",
    "evaluate_outcomes",
    "validate_stake",
    "RunCounter",
    "collect_surebets",
    "SurebetScanner",
    "format_result",
    "format_leg",
    "format_record_json",
    "format_records_table",
    "generate_disclaimer",
]
