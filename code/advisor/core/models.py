from dataclasses import asdict
from typing import Any, Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from cashflow.schemas import (
    HousingOption,
    Recommendation,
    SignalResult,
    SimulationResult,
    StressResult,
    TradeoffResult,
    to_payload_keys,
)


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---- requests ----


class SimulateRequest(ApiModel):
    base: Optional[Dict[str, Any]] = None
    changes: Optional[Dict[str, Any]] = None


class ExplainRequest(ApiModel):
    type: Optional[str] = None
    facts: Optional[Dict[str, Any]] = None


class InsightRequest(ApiModel):
    type: Literal["dashboard", "recommendation"]
    inputs: Dict[str, Any]
    index: int = Field(ge=0, default=0)


class HousingOptionIn(ApiModel):
    rent_monthly: float = Field(ge=0, default=0.0)
    transport_monthly: float = Field(ge=0, default=0.0)
    commute_time_mins: float = Field(ge=0, default=0.0)


class TradeoffRequest(ApiModel):
    option_a: HousingOptionIn
    option_b: HousingOptionIn

    def to_options(self) -> Tuple[HousingOption, HousingOption]:
        return HousingOption(**self.option_a.model_dump()), HousingOption(**self.option_b.model_dump())


# ---- responses ----


class StressResultOut(ApiModel):
    stress_score: float
    risk_level: Literal["Low", "Moderate", "High"]
    expense_ratio: float
    buffer_months: float
    debt_ratio: float
    pressure_sources: List[str]


class RiskFlagsOut(ApiModel):
    low_buffer: bool
    high_debt: bool
    expenses_over_income: bool


class SignalNumbersOut(ApiModel):
    monthly_balance: float
    savings_potential: float


class SignalResultOut(ApiModel):
    overspending: Dict[str, bool]
    risk_flags: RiskFlagsOut
    numbers: SignalNumbersOut


class SimulationDeltaOut(ApiModel):
    stress_score: float
    monthly_balance: float
    survival_months: float


class SimulationResultOut(ApiModel):
    base: StressResultOut
    after: StressResultOut
    delta: SimulationDeltaOut


class RecommendationOut(ApiModel):
    type: str
    title: str
    changes: Dict[str, float]
    simulation_result: SimulationResultOut
    potential_savings: float
    reason: str


class SummaryResponse(ApiModel):
    stress: StressResultOut
    signals: SignalResultOut


class OptimizeResponse(ApiModel):
    base: StressResultOut
    recommendations: List[RecommendationOut]
    total_savings: float


class TradeoffResponse(ApiModel):
    cheaper_option: str
    monthly_cost_difference: float
    commute_time_difference: float
    insight: str


class DerivedOut(ApiModel):
    monthly_balance: float
    survival_months: float


class FinancialsOut(ApiModel):
    stress: StressResultOut
    signals: SignalResultOut
    derived: DerivedOut


class OptimizationOut(ApiModel):
    base: SummaryResponse
    recommendations: List[RecommendationOut]
    total_savings: float


class AnalysisResponse(ApiModel):
    financials: FinancialsOut
    optimization: OptimizationOut


# ---- converters from core value types ----


def stress_out(stress: StressResult) -> StressResultOut:
    return StressResultOut.model_validate(asdict(stress))


def signals_out(signals: SignalResult) -> SignalResultOut:
    return SignalResultOut.model_validate(asdict(signals))


def simulation_out(result: SimulationResult) -> SimulationResultOut:
    return SimulationResultOut.model_validate(asdict(result))


def recommendation_out(rec: Recommendation) -> RecommendationOut:
    data = asdict(rec)
    data["changes"] = to_payload_keys(rec.changes)
    return RecommendationOut.model_validate(data)


def tradeoff_out(result: TradeoffResult) -> TradeoffResponse:
    return TradeoffResponse.model_validate(asdict(result))
