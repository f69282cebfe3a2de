# dashboard.py
import asyncio
import os
import sys
from dataclasses import asdict
from typing import Dict

import streamlit as st

# Ensure the source root is on sys.path so `cashflow` and `advisor` resolve under `streamlit run`.
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from cashflow.sample_payloads import EXAMPLES, SAMPLE_TRADEOFF  # noqa: E402
from cashflow.optimizer import optimize  # noqa: E402
from cashflow.schemas import PAYLOAD_FIELDS, HousingOption, from_payload_keys, to_payload_keys  # noqa: E402
from cashflow.signals import compute_signals  # noqa: E402
from cashflow.simulation import simulate_scenario  # noqa: E402
from cashflow.stress_score import calculate_stress  # noqa: E402
from cashflow.tradeoffs import compare_housing_options  # noqa: E402
from cashflow.validate import validate_and_normalize  # noqa: E402

from advisor.ai.explainer import explain  # noqa: E402
from advisor.core.pipeline import recommend  # noqa: E402

FIELD_LABELS: Dict[str, str] = {
    "incomeMonthly": "Monthly income (RM)",
    "rentMonthly": "Rent (RM)",
    "utilitiesMonthly": "Utilities (RM)",
    "transportMonthly": "Transport (RM)",
    "foodMonthly": "Food (RM)",
    "debtMonthly": "Debt repayments (RM)",
    "subscriptionsMonthly": "Subscriptions (RM)",
    "savingsBalance": "Savings balance (RM)",
}
BAND_COLOURS = {"Low": "green", "Moderate": "orange", "High": "red"}

st.set_page_config(page_title="Household Stress Dashboard", layout="wide")
st.title("Household Stress Dashboard")

with st.sidebar:
    st.header("Monthly figures")
    preset = st.selectbox("Start from sample profile", sorted(EXAMPLES), index=sorted(EXAMPLES).index("tight"))
    raw = {}
    for key in PAYLOAD_FIELDS:
        raw[key] = st.number_input(
            FIELD_LABELS[key], min_value=0.0, value=float(EXAMPLES[preset][key]), step=50.0, key=f"{preset}-{key}"
        )
    personalize = st.checkbox("Personalize top recommendation with the LLM", value=False)

normalized = validate_and_normalize(raw)
if not normalized.ok:
    st.error(normalized.error)
    st.stop()

inputs = normalized.clean_inputs
stress = calculate_stress(inputs)
signals = compute_signals(inputs, stress)

# --- Overview ---------------------------------------------------------------
col1, col2, col3, col4 = st.columns(4)
col1.metric("Stress score", f"{stress.stress_score:.1f}")
col2.markdown(f"**Risk level**  \n:{BAND_COLOURS[stress.risk_level]}[{stress.risk_level}]")
col3.metric("Monthly balance", f"RM {signals.numbers.monthly_balance:,.2f}")
col4.metric("Buffer (months)", f"{stress.buffer_months:.2f}")

st.caption(
    f"Expense ratio {stress.expense_ratio:.3f} · Debt ratio {stress.debt_ratio:.3f} · "
    f"Pressure sources: {', '.join(stress.pressure_sources) or 'none'}"
)

flag_col, over_col = st.columns(2)
with flag_col:
    st.subheader("Risk flags")
    st.json(asdict(signals.risk_flags))
with over_col:
    st.subheader("Overspending")
    st.json(signals.overspending)

# --- What-if ----------------------------------------------------------------
st.header("What if...")
w1, w2, w3 = st.columns(3)
what_if = {
    "rentMonthly": w1.number_input("New rent (RM)", min_value=0.0, value=inputs.rent_monthly, step=50.0),
    "transportMonthly": w2.number_input("New transport (RM)", min_value=0.0, value=inputs.transport_monthly, step=25.0),
    "foodMonthly": w3.number_input("New food (RM)", min_value=0.0, value=inputs.food_monthly, step=25.0),
}
scenario = simulate_scenario(inputs, from_payload_keys(what_if))
d1, d2, d3 = st.columns(3)
d1.metric("Stress after", f"{scenario.after.stress_score:.1f}", delta=f"{scenario.delta.stress_score:+.2f}", delta_color="inverse")
d2.metric("Balance change", f"RM {scenario.delta.monthly_balance:,.2f}")
survival = scenario.delta.survival_months
d3.metric("Survival (months)", "indefinite" if survival == 999 else f"{survival:.2f}")

# --- Recommendations --------------------------------------------------------
st.header("Recommended changes")
if personalize:
    recommendations = asyncio.run(recommend(inputs, stress))
else:
    recommendations = asyncio.run(optimize(inputs, stress))

if not recommendations:
    st.info("No single change improves this profile. Keep tracking your spending.")
for rec in recommendations:
    with st.expander(f"{rec.title}  ·  saves RM {rec.potential_savings:,.2f}/mo", expanded=rec is recommendations[0]):
        st.write(rec.reason)
        st.write(
            f"Stress {rec.simulation_result.base.stress_score:.1f} → {rec.simulation_result.after.stress_score:.1f} "
            f"({rec.simulation_result.after.risk_level})"
        )
        st.json(to_payload_keys(rec.changes))

if recommendations and st.button("Explain top recommendation"):
    top = recommendations[0]
    st.json(
        explain(
            "recommendation",
            {
                "title": top.title,
                "type": top.type,
                "reason": top.reason,
                "savings": top.potential_savings,
                "delta": {"monthlyBalance": top.simulation_result.delta.monthly_balance},
                "profile": inputs.to_payload(),
            },
        )
    )

# --- Housing tradeoff -------------------------------------------------------
st.header("Compare two places")
a_col, b_col = st.columns(2)
options = {}
for label, col, key in (("Option A", a_col, "optionA"), ("Option B", b_col, "optionB")):
    sample = SAMPLE_TRADEOFF[key]
    with col:
        st.subheader(label)
        options[key] = HousingOption(
            rent_monthly=st.number_input(f"{label} rent (RM)", min_value=0.0, value=float(sample["rentMonthly"])),
            transport_monthly=st.number_input(f"{label} transport (RM)", min_value=0.0, value=float(sample["transportMonthly"])),
            commute_time_mins=st.number_input(f"{label} commute (mins)", min_value=0.0, value=float(sample["commuteTimeMins"])),
        )
comparison = compare_housing_options(options["optionA"], options["optionB"])
st.write(
    f"**{comparison.cheaper_option}** is cheaper by RM {comparison.monthly_cost_difference:,.2f}/mo. {comparison.insight}."
)
