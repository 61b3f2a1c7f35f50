"""API routes for the sure-bet service.

All endpoints are stateless evaluations or read-only views, and advisory.
"""

from typing import Literal

from fastapi import APIRouter, HTTPException, Query, Request
from pydantic import BaseModel, Field

from ..config import DEFAULT_STAKE, build_policy
from ..core.errors import OddsError
from ..core.models import Market, SurebetPolicy, SurebetRecord
from ..core.normalization import normalize_odd
from ..engine import (
    collect_surebets,
    evaluate_market,
    format_record_json,
    format_records_table,
    generate_disclaimer,
)

router = APIRouter(prefix="/api", tags=["surebets"])


class NormalizeRequest(BaseModel):
    raw: int | float | str


class EvaluateRequest(BaseModel):
    market: Market
    stake: float = Field(DEFAULT_STAKE, gt=0, allow_inf_nan=False)


class BatchRequest(BaseModel):
    markets: list[Market]
    stake: float = Field(DEFAULT_STAKE, gt=0, allow_inf_nan=False)
    min_profit_percentage: float = Field(0.0, ge=0, description="Ignore surebets below this profit %")
    max_events: int = Field(0, ge=0, description="Stop after N surebets (0 = unlimited)")


def _policy(request: Request) -> SurebetPolicy:
    policy = getattr(request.app.state, "policy", None)
    return policy if policy is not None else build_policy()


def _report_payload(report, format: str) -> dict:
    if format == "text":
        return {
            "text": format_records_table(report.records),
            "disclaimer": generate_disclaimer(),
        }
    return {
        "evaluated": report.evaluated,
        "accepted": report.accepted,
        "below_min_profit": report.below_min_profit,
        "rejections": {kind.value: count for kind, count in report.rejections.items()},
        "limit_reached": report.limit_reached,
        "surebets": [format_record_json(r) for r in report.records],
        "disclaimer": generate_disclaimer(),
    }


@router.get("/")
async def root():
    """API root - service info."""
    return {
        "status": "ok",
        "service": "Surebet Engine",
        "version": "1.0.0",
        "advisory_only": True,
        "disclaimer": generate_disclaimer(),
    }


@router.get("/health")
async def health_check(request: Request):
    """Health check endpoint."""
    scanner = getattr(request.app.state, "scanner", None)
    return {
        "status": "healthy",
        "policy": _policy(request).model_dump(mode="json"),
        "scanner_running": bool(scanner and scanner.is_running),
        "last_scan": scanner.last_scan.isoformat() if scanner and scanner.last_scan else None,
    }


@router.post("/odds/normalize")
async def normalize(body: NormalizeRequest, request: Request):
    """Detect the notation of one raw price and convert it to decimal odds."""
    try:
        odd = normalize_odd(body.raw, _policy(request))
    except OddsError as e:
        raise HTTPException(status_code=400, detail={"kind": e.kind.value, "message": str(e)})

    return {
        "raw": odd.raw,
        "format": odd.format.value,
        "decimal": odd.decimal,
        "implied_probability": odd.implied_probability,
    }


@router.post("/evaluate")
async def evaluate(body: EvaluateRequest, request: Request):
    """
    Evaluate one market for a sure-bet.

    Rejections (bad odds, market size, no arbitrage) come back with
    is_surebet=false and a reason, never as an HTTP error.
    """
    result = evaluate_market(body.market, body.stake, _policy(request))
    record = SurebetRecord(market=body.market, result=result)

    return {
        **format_record_json(record),
        "disclaimer": generate_disclaimer(),
    }


@router.post("/evaluate/batch")
async def evaluate_batch(
    body: BatchRequest,
    request: Request,
    format: Literal["json", "text"] = "json",
):
    """
    Evaluate many markets and return the sure-bets worth acting on.

    Filters:
    - min_profit_percentage: Minimum profit percentage
    - max_events: Stop after this many sure-bets
    """
    report = collect_surebets(
        body.markets,
        body.stake,
        min_profit_percentage=body.min_profit_percentage,
        max_events=body.max_events,
        policy=_policy(request),
    )
    return _report_payload(report, format)


@router.post("/scan")
async def trigger_scan(request: Request):
    """Trigger a manual feed scan and return fresh sure-bets."""
    scanner = getattr(request.app.state, "scanner", None)
    if scanner is None:
        raise HTTPException(status_code=503, detail="Odds feed scanner is not configured")

    report = await scanner.scan_once()
    return {
        "scan_duration_ms": scanner.scan_duration_ms,
        "timestamp": scanner.last_scan.isoformat(),
        **_report_payload(report, "json"),
    }


@router.get("/surebets")
async def get_surebets(
    request: Request,
    limit: int = Query(50, ge=1, le=200),
    format: Literal["json", "text"] = "json",
):
    """Sure-bets from the most recent feed scan."""
    scanner = getattr(request.app.state, "scanner", None)
    if scanner is None or scanner.last_report is None:
        raise HTTPException(status_code=404, detail="No scan has completed yet")

    report = scanner.last_report.model_copy(update={"records": scanner.last_report.records[:limit]})
    return _report_payload(report, format)

