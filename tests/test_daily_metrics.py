"""Property-based tests for cashflow aggregation and the daily metrics fold.

**Feature: trade-tracker**
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tradetracker.engine import build_metrics, classify_status, net_cashflow_for_date
from tradetracker.models import Cashflow, DayEntry, Settings, TrackerData

DATES = ["2024-01-01", "2024-01-02", "2024-01-03", "2024-01-04", ""]


def settings_strategy():
    """Generate valid Settings objects."""
    return st.builds(
        Settings,
        startingCapital=st.floats(min_value=0, max_value=1_000_000, allow_nan=False),
        dailyTargetPct=st.floats(min_value=-5, max_value=10, allow_nan=False),
        startDate=st.just("2024-01-01"),
        targetGoal=st.floats(min_value=0, max_value=2_000_000, allow_nan=False),
    )


def day_strategy():
    """Generate DayEntry objects in any of the three states."""
    return st.builds(
        DayEntry,
        id=st.uuids().map(lambda u: f"day_{u.hex}"),
        date=st.sampled_from(DATES),
        actualClose=st.one_of(
            st.none(),
            st.floats(min_value=0, max_value=2_000_000, allow_nan=False),
        ),
        noTrade=st.booleans(),
    )


def cashflow_strategy():
    """Generate Cashflow objects on the shared dates."""
    return st.builds(
        Cashflow,
        id=st.uuids().map(lambda u: f"cashflow_{u.hex}"),
        date=st.sampled_from(DATES),
        amount=st.floats(min_value=0, max_value=50_000, allow_nan=False),
        type=st.sampled_from(["deposit", "withdrawal"]),
        note=st.none(),
    )


def tracker_strategy():
    return st.builds(
        TrackerData,
        settings=settings_strategy(),
        days=st.lists(day_strategy(), max_size=25),
        cashflows=st.lists(cashflow_strategy(), max_size=10),
    )


def _data(days, cashflows=None, capital=10000.0, pct=1.0) -> TrackerData:
    return TrackerData(
        settings=Settings(starting_capital=capital, daily_target_pct=pct, start_date="2024-01-01"),
        days=days,
        cashflows=cashflows or [],
    )


class TestNetCashflow:
    """
    **Feature: trade-tracker, Property 1: Same-Date Cashflow Netting**

    *For any* set of cashflows, the net for a date is the sum of its deposits
    minus the sum of its withdrawals.
    """

    @given(flows=st.lists(cashflow_strategy(), max_size=20), day_date=st.sampled_from(DATES))
    @settings(max_examples=100)
    def test_net_matches_manual_sum(self, flows: list[Cashflow], day_date: str):
        expected = sum(f.amount for f in flows if f.date == day_date and f.type == "deposit") - sum(
            f.amount for f in flows if f.date == day_date and f.type == "withdrawal"
        )
        assert net_cashflow_for_date(flows, day_date) == pytest.approx(expected)

    @given(flows=st.lists(cashflow_strategy(), max_size=20), day_date=st.sampled_from(DATES))
    @settings(max_examples=50)
    def test_order_is_irrelevant(self, flows: list[Cashflow], day_date: str):
        assert net_cashflow_for_date(flows, day_date) == pytest.approx(
            net_cashflow_for_date(list(reversed(flows)), day_date)
        )

    def test_no_match_is_zero(self):
        flows = [Cashflow(id="c1", date="2024-01-01", amount=100, type="deposit")]
        assert net_cashflow_for_date(flows, "2024-01-02") == 0.0
        assert net_cashflow_for_date([], "2024-01-01") == 0.0

    def test_exact_string_match(self):
        flows = [Cashflow(id="c1", date="2024-1-1", amount=100, type="deposit")]
        assert net_cashflow_for_date(flows, "2024-01-01") == 0.0

    def test_deposits_and_withdrawals_net(self):
        flows = [
            Cashflow(id="c1", date="2024-01-01", amount=500, type="deposit"),
            Cashflow(id="c2", date="2024-01-01", amount=200, type="withdrawal"),
            Cashflow(id="c3", date="2024-01-01", amount=50, type="deposit"),
        ]
        assert net_cashflow_for_date(flows, "2024-01-01") == pytest.approx(350)


class TestDayIndexOrder:
    """
    **Feature: trade-tracker, Property 2: Insertion Order Sequence**

    *For any* day list, day_index runs 1..n in list order regardless of dates.
    """

    @given(data=tracker_strategy())
    @settings(max_examples=100)
    def test_day_index_follows_list_order(self, data: TrackerData):
        metrics = build_metrics(data)

        assert [m.day_index for m in metrics] == list(range(1, len(data.days) + 1))
        assert [m.entry.id for m in metrics] == [d.id for d in data.days]

    def test_unsorted_dates_keep_insertion_order(self):
        days = [
            DayEntry(id="a", date="2024-01-05", actual_close=10100),
            DayEntry(id="b", date="2024-01-01", actual_close=10200),
        ]
        metrics = build_metrics(_data(days))

        assert metrics[0].entry.id == "a"
        assert metrics[1].target_start == 10100

    def test_no_settings_yields_empty(self):
        data = TrackerData(days=[DayEntry(id="a", date="2024-01-01", actual_close=1)])
        assert build_metrics(data) == []


class TestRollingBase:
    """
    **Feature: trade-tracker, Property 3: Compounding Base Rolls From Settled Days**

    *For any* sequence, the next target_start is the realized value of the
    previous day: its close, start plus cashflow on a no-trade day, or the
    unchanged start while pending.
    """

    @given(data=tracker_strategy())
    @settings(max_examples=100)
    def test_next_start_is_previous_realized_value(self, data: TrackerData):
        metrics = build_metrics(data)

        for prev, nxt in zip(metrics, metrics[1:]):
            assert nxt.target_start == prev.equity_value

    @given(data=tracker_strategy())
    @settings(max_examples=100)
    def test_no_trade_day_is_neutral_and_adds_cashflow(self, data: TrackerData):
        metrics = build_metrics(data)

        for i, metric in enumerate(metrics):
            if not metric.entry.no_trade:
                continue
            assert metric.status == "neutral"
            assert metric.trading_change == 0
            assert metric.trading_pct == 0
            assert metric.equity_value == metric.target_start + metric.net_cashflow
            if i + 1 < len(metrics):
                assert metrics[i + 1].target_start == metric.target_start + metric.net_cashflow

    @given(data=tracker_strategy())
    @settings(max_examples=100)
    def test_pending_day_keeps_base(self, data: TrackerData):
        metrics = build_metrics(data)

        for i, metric in enumerate(metrics):
            if metric.status != "pending":
                continue
            assert metric.trading_change is None
            assert metric.trading_pct is None
            assert metric.equity_value == metric.target_start
            if i + 1 < len(metrics):
                assert metrics[i + 1].target_start == metric.target_start

    def test_first_day_starts_at_starting_capital(self):
        metrics = build_metrics(_data([DayEntry(id="a", date="2024-01-01")], capital=2500))
        assert metrics[0].target_start == 2500

    def test_edit_of_past_day_ripples_forward(self):
        days = [
            DayEntry(id="a", date="2024-01-01", actual_close=10050),
            DayEntry(id="b", date="2024-01-02", actual_close=10200),
            DayEntry(id="c", date="2024-01-03"),
        ]
        before = build_metrics(_data(days))
        edited = [days[0].model_copy(update={"actual_close": 9900.0})] + days[1:]
        after = build_metrics(_data(edited))

        assert before[1].target_start == 10050
        assert after[1].target_start == 9900
        assert after[1].trading_change == pytest.approx(300)
        assert after[2].target_start == before[2].target_start == 10200


class TestGoalClassification:
    """
    **Feature: trade-tracker, Property 4: Goal Status Iff Target Gain Reached**

    *For any* settled traded day, status is "goal" exactly when
    trading_change >= target_gain.
    """

    @given(data=tracker_strategy())
    @settings(max_examples=100)
    def test_goal_iff_change_reaches_target(self, data: TrackerData):
        for metric in build_metrics(data):
            if metric.trading_change is None or metric.entry.no_trade:
                continue
            assert (metric.status == "goal") == (metric.trading_change >= metric.target_gain)

    @given(data=tracker_strategy())
    @settings(max_examples=100)
    def test_trading_change_excludes_cashflow(self, data: TrackerData):
        for metric in build_metrics(data):
            if metric.entry.no_trade or metric.entry.actual_close is None:
                continue
            expected = metric.entry.actual_close - metric.target_start - metric.net_cashflow
            assert metric.trading_change == pytest.approx(expected)

    @pytest.mark.parametrize(
        "change,gain,expected",
        [
            (100.0, 100.0, "goal"),
            (150.0, 100.0, "goal"),
            (50.0, 100.0, "green"),
            (0.0, 100.0, "neutral"),
            (-1.0, 100.0, "red"),
            (0.0, 0.0, "goal"),
            (-5.0, -10.0, "goal"),
        ],
    )
    def test_classify_status(self, change: float, gain: float, expected: str):
        assert classify_status(change, gain) == expected

    def test_zero_start_gives_zero_pct(self):
        metrics = build_metrics(_data([DayEntry(id="a", date="2024-01-01", actual_close=100)], capital=0))
        assert metrics[0].trading_pct == 0
        assert metrics[0].status == "goal"


class TestScenarios:
    """Worked examples with starting capital 10,000 and a 1% daily target."""

    def test_single_goal_day(self):
        metrics = build_metrics(_data([DayEntry(id="a", date="2024-01-01", actual_close=10200)]))
        m = metrics[0]

        assert m.target_start == 10000
        assert m.target_end == pytest.approx(10100)
        assert m.target_gain == pytest.approx(100)
        assert m.trading_change == pytest.approx(200)
        assert m.trading_pct == pytest.approx(2)
        assert m.status == "goal"
        assert m.equity_value == 10200

    def test_green_day_rolls_actual_close(self):
        days = [
            DayEntry(id="a", date="2024-01-01", actual_close=10050),
            DayEntry(id="b", date="2024-01-02"),
        ]
        metrics = build_metrics(_data(days))

        assert metrics[0].trading_change == pytest.approx(50)
        assert metrics[0].status == "green"
        assert metrics[1].target_start == 10050

    def test_deposit_is_not_counted_as_profit(self):
        days = [DayEntry(id="a", date="2024-01-01", actual_close=11000)]
        flows = [Cashflow(id="c", date="2024-01-01", amount=1000, type="deposit")]
        m = build_metrics(_data(days, flows))[0]

        assert m.net_cashflow == 1000
        assert m.trading_change == pytest.approx(0)
        assert m.status == "neutral"

    def test_withdrawal_on_losing_day(self):
        days = [DayEntry(id="a", date="2024-01-01", actual_close=9500)]
        flows = [Cashflow(id="c", date="2024-01-01", amount=400, type="withdrawal")]
        m = build_metrics(_data(days, flows))[0]

        assert m.trading_change == pytest.approx(-100)
        assert m.status == "red"

    def test_no_trade_overrides_stored_close(self):
        days = [
            DayEntry(id="a", date="2024-01-01", actual_close=12000, no_trade=True),
            DayEntry(id="b", date="2024-01-02"),
        ]
        flows = [Cashflow(id="c", date="2024-01-01", amount=300, type="deposit")]
        metrics = build_metrics(_data(days, flows))

        assert metrics[0].status == "neutral"
        assert metrics[0].equity_value == 10300
        assert metrics[1].target_start == 10300
        assert metrics[0].entry.close_ignored
