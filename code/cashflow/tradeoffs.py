from .schemas import HousingOption, TradeoffResult


def _format_minutes(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def compare_housing_options(option_a: HousingOption, option_b: HousingOption) -> TradeoffResult:
    total_a = option_a.rent_monthly + option_a.transport_monthly
    total_b = option_b.rent_monthly + option_b.transport_monthly
    cost_difference = total_b - total_a
    commute_diff = option_b.commute_time_mins - option_a.commute_time_mins

    if commute_diff > 0:
        insight = f"Option B increases commute by {_format_minutes(commute_diff)} mins daily"
    else:
        insight = "Option B reduces commute time"

    return TradeoffResult(
        # A only when B is strictly dearer; equal totals report Option B
        cheaper_option="Option A" if cost_difference > 0 else "Option B",
        monthly_cost_difference=abs(cost_difference),
        commute_time_difference=commute_diff,
        insight=insight,
    )
