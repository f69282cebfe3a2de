from cashflow.schemas import HousingOption
from cashflow.tradeoffs import compare_housing_options


def test_cheaper_but_longer_commute():
    out = compare_housing_options(
        HousingOption(rent_monthly=1800, transport_monthly=120, commute_time_mins=20),
        HousingOption(rent_monthly=1300, transport_monthly=350, commute_time_mins=55),
    )
    assert out.cheaper_option == "Option B"
    assert out.monthly_cost_difference == 270
    assert out.commute_time_difference == 35
    assert out.insight == "Option B increases commute by 35 mins daily"


def test_option_a_cheaper_and_b_closer():
    out = compare_housing_options(
        HousingOption(rent_monthly=900, transport_monthly=100, commute_time_mins=50),
        HousingOption(rent_monthly=1400, transport_monthly=60, commute_time_mins=15),
    )
    assert out.cheaper_option == "Option A"
    assert out.monthly_cost_difference == 460
    assert out.commute_time_difference == -35
    assert out.insight == "Option B reduces commute time"


def test_equal_cost_reports_option_b():
    out = compare_housing_options(
        HousingOption(rent_monthly=1000, transport_monthly=200),
        HousingOption(rent_monthly=1100, transport_monthly=100),
    )
    assert out.cheaper_option == "Option B"
    assert out.monthly_cost_difference == 0


def test_commute_insight_keeps_plain_numbers():
    long_way = compare_housing_options(
        HousingOption(commute_time_mins=0),
        HousingOption(commute_time_mins=1234567),
    )
    assert long_way.insight == "Option B increases commute by 1234567 mins daily"

    half_minute = compare_housing_options(
        HousingOption(commute_time_mins=10),
        HousingOption(commute_time_mins=22.5),
    )
    assert half_minute.insight == "Option B increases commute by 12.5 mins daily"
