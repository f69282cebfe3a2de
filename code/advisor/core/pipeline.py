import os
from dataclasses import dataclass, field
from typing import Any, List, Optional

from cashflow.optimizer import optimize, total_savings
from cashflow.schemas import MonthlyInputs, Recommendation, SignalResult, StressResult
from cashflow.signals import compute_signals
from cashflow.stress_score import calculate_stress
from cashflow.validate import normalize_or_raise

from advisor.ai.explainer import explain

from .models import (
    AnalysisResponse,
    DerivedOut,
    FinancialsOut,
    OptimizationOut,
    OptimizeResponse,
    SummaryResponse,
    recommendation_out,
    signals_out,
    stress_out,
)

ENRICH_TIMEOUT_SECONDS = float(os.getenv("ENRICH_TIMEOUT_SECONDS", "8"))


@dataclass(frozen=True)
class Analysis:
    inputs: MonthlyInputs
    stress: StressResult
    signals: SignalResult
    recommendations: List[Recommendation] = field(default_factory=list)

    @property
    def total_savings(self) -> float:
        return total_savings(self.recommendations)


def run_summary(raw: Any) -> SummaryResponse:
    inputs = normalize_or_raise(raw)
    stress = calculate_stress(inputs)
    return SummaryResponse(stress=stress_out(stress), signals=signals_out(compute_signals(inputs, stress)))


async def recommend(inputs: MonthlyInputs, stress: Optional[StressResult] = None) -> List[Recommendation]:
    stress = stress or calculate_stress(inputs)
    return await optimize(inputs, stress, explain=explain, timeout=ENRICH_TIMEOUT_SECONDS)


async def run_optimize(raw: Any) -> OptimizeResponse:
    inputs = normalize_or_raise(raw)
    stress = calculate_stress(inputs)
    recs = await recommend(inputs, stress)
    return OptimizeResponse(
        base=stress_out(stress),
        recommendations=[recommendation_out(r) for r in recs],
        total_savings=total_savings(recs),
    )


async def run_full_analysis(raw: Any) -> Analysis:
    inputs = normalize_or_raise(raw)
    stress = calculate_stress(inputs)
    signals = compute_signals(inputs, stress)
    recs = await recommend(inputs, stress)
    return Analysis(inputs=inputs, stress=stress, signals=signals, recommendations=recs)


def analysis_out(analysis: Analysis) -> AnalysisResponse:
    stress = stress_out(analysis.stress)
    signals = signals_out(analysis.signals)
    recs = [recommendation_out(r) for r in analysis.recommendations]
    return AnalysisResponse(
        financials=FinancialsOut(
            stress=stress,
            signals=signals,
            # survival here is the savings buffer in months of expenses
            derived=DerivedOut(
                monthly_balance=analysis.signals.numbers.monthly_balance,
                survival_months=analysis.stress.buffer_months,
            ),
        ),
        optimization=OptimizationOut(
            base=SummaryResponse(stress=stress, signals=signals),
            recommendations=recs,
            total_savings=analysis.total_savings,
        ),
    )
