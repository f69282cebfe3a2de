import asyncio
import logging
import os

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from cashflow.simulation import simulate_scenario
from cashflow.schemas import from_payload_keys
from cashflow.tradeoffs import compare_housing_options
from cashflow.validate import ValidationError as InputValidationError
from cashflow.validate import merge_changes, normalize_or_raise

from advisor.ai.explainer import explain
from advisor.ai.llm_client import check_llm_online
from advisor.core.insight_facts import build_insight_facts
from advisor.core.models import (
    AnalysisResponse,
    ExplainRequest,
    InsightRequest,
    OptimizeResponse,
    SimulateRequest,
    SimulationResultOut,
    SummaryResponse,
    TradeoffRequest,
    TradeoffResponse,
    simulation_out,
    tradeoff_out,
)
from advisor.core.pipeline import analysis_out, run_full_analysis, run_optimize, run_summary

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(title="Household Stress Advisor API")
app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])


def _error(message: str, status_code: int = 400) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@app.exception_handler(InputValidationError)
async def input_validation_handler(request: Request, exc: InputValidationError):
    return _error(str(exc))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error("Internal server error", status_code=500)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    return _error(f"{location}: {first.get('msg', 'invalid request')}" if location else "Invalid request body")


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/health/llm")
def health_llm():
    return {"online": check_llm_online()}


@app.post("/summary/monthly", response_model=SummaryResponse)
def summary(payload: dict):
    return run_summary(payload)


@app.post("/simulate", response_model=SimulationResultOut)
def simulate(payload: SimulateRequest):
    if payload.base is None or payload.changes is None:
        return _error("Body must include { base, changes }")
    try:
        base = normalize_or_raise(payload.base)
    except InputValidationError as exc:
        return _error(f"base: {exc}")
    try:
        merged = merge_changes(base, payload.changes)
    except InputValidationError as exc:
        return _error(f"changes: {exc}")
    changes = {attr: getattr(merged, attr) for attr in from_payload_keys(payload.changes)}
    return simulation_out(simulate_scenario(base, changes))


@app.post("/optimize", response_model=OptimizeResponse)
async def optimize_route(payload: dict):
    return await run_optimize(payload)


@app.post("/analysis", response_model=AnalysisResponse)
async def analysis(payload: dict):
    return analysis_out(await run_full_analysis(payload))


@app.post("/explain")
def explain_route(payload: ExplainRequest):
    if not payload.type:
        return _error("Missing 'type'")
    if payload.facts is None:
        return _error("Missing 'facts' object")
    return explain(payload.type, payload.facts)


@app.post("/explain/insight")
async def explain_insight(payload: InsightRequest):
    result = await run_full_analysis(payload.inputs)
    recommendation = None
    if payload.type == "recommendation":
        if payload.index >= len(result.recommendations):
            return _error("No recommendation at that index", status_code=404)
        recommendation = result.recommendations[payload.index]
    facts = build_insight_facts(payload.type, result, recommendation)
    explanation = await asyncio.to_thread(explain, payload.type, facts)
    return {"facts": facts, "explanation": explanation}


@app.post("/tradeoff", response_model=TradeoffResponse)
def tradeoff(payload: TradeoffRequest):
    option_a, option_b = payload.to_options()
    return tradeoff_out(compare_housing_options(option_a, option_b))
