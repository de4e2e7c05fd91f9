"""Property tests for supplement context resolution.

Random report histories and timelines are resolved and checked against the
invariants callers depend on: order independence, override precedence and
forward propagation of resets.
"""

from __future__ import annotations

from datetime import date, timedelta

from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from labstack_context.models import AnchorState, LabReport, SupplementPeriod
from labstack_context.ordering import order_reports
from labstack_context.queries import resolve_all
from labstack_context.timeline import active_periods, sort_supplement_periods

PROPERTY_SETTINGS = settings(
    max_examples=75,
    suppress_health_check=[HealthCheck.too_slow],
    deadline=None,
)

_BASE_DAY = date(2025, 1, 1)

day_offsets = st.integers(min_value=0, max_value=365)
iso_days = day_offsets.map(lambda offset: (_BASE_DAY + timedelta(days=offset)).isoformat())
supplement_names = st.sampled_from(["Vitamin D3", "Zinc", "NAC", "Magnesium", "Omega 3", "Boron"])


@st.composite
def supplement_periods(draw: st.DrawFn, period_id: str) -> SupplementPeriod:
    start = draw(day_offsets)
    length = draw(st.one_of(st.none(), st.integers(min_value=0, max_value=120)))
    end = None if length is None else (_BASE_DAY + timedelta(days=start + length)).isoformat()
    return SupplementPeriod(
        id=period_id,
        name=draw(supplement_names),
        dose=draw(st.sampled_from(["", "25 mg", "600 mg", "4000 IU"])),
        frequency=draw(st.sampled_from(["daily", "2x/week", "unknown"])),
        start_date=(_BASE_DAY + timedelta(days=start)).isoformat(),
        end_date=end,
    )


@st.composite
def timelines(draw: st.DrawFn) -> list[SupplementPeriod]:
    count = draw(st.integers(min_value=0, max_value=6))
    return [draw(supplement_periods(f"s{idx}")) for idx in range(count)]


@st.composite
def reports(draw: st.DrawFn) -> list[LabReport]:
    count = draw(st.integers(min_value=0, max_value=8))
    result: list[LabReport] = []
    for idx in range(count):
        test_date = draw(iso_days)
        state = draw(st.sampled_from([None, "inherit", "anchor", "none", "unknown"]))
        overrides = draw(
            st.one_of(
                st.none(),
                st.lists(supplement_periods(f"o{idx}"), max_size=3),
            )
        )
        result.append(
            LabReport(
                id=f"r{idx}",
                test_date=test_date,
                created_at=draw(st.sampled_from(["", f"{test_date}T08:00:00Z", f"{test_date}T09:00:00Z"])),
                annotations={"supplement_anchor_state": state, "supplement_overrides": overrides},
            )
        )
    return result


@PROPERTY_SETTINGS
@given(report_list=reports(), timeline=timelines(), data=st.data())
def test_resolution_is_independent_of_input_order(report_list, timeline, data) -> None:
    shuffled_reports = data.draw(st.permutations(report_list))
    shuffled_timeline = data.draw(st.permutations(timeline))

    first = resolve_all(report_list, timeline)
    second = resolve_all(shuffled_reports, shuffled_timeline)

    assert first == second
    assert list(first) == list(second)


@PROPERTY_SETTINGS
@given(report_list=reports(), timeline=timelines())
def test_every_report_is_resolved_and_effective_state_is_never_inherit(report_list, timeline) -> None:
    resolved = resolve_all(report_list, timeline)
    assert set(resolved) == {report.id for report in report_list}
    for context in resolved.values():
        assert context.effective_state is not AnchorState.INHERIT
        if context.effective_state is not AnchorState.ANCHOR:
            assert context.supplements == ()


@PROPERTY_SETTINGS
@given(report_list=reports(), timeline=timelines())
def test_contexts_follow_the_most_recent_signal(report_list, timeline) -> None:
    resolved = resolve_all(report_list, timeline)
    previous = None
    for report in order_reports(report_list):
        context = resolved[report.id]
        overrides = report.annotations.supplement_overrides
        if context.anchor_state is AnchorState.INHERIT:
            if previous is not None:
                assert context.supplements == previous.supplements
                assert context.effective_state is previous.effective_state
                assert context.anchor_report_id == previous.anchor_report_id
        else:
            assert context.anchor_report_id == report.id
            if context.anchor_state is AnchorState.ANCHOR and overrides:
                assert list(context.supplements) == sort_supplement_periods(overrides)
        previous = context


@PROPERTY_SETTINGS
@given(timeline=timelines(), day=iso_days)
def test_active_periods_bounds_are_inclusive(timeline, day) -> None:
    active = active_periods(timeline, day)
    assert active == sort_supplement_periods(active)
    for period in timeline:
        inside = period.start_date <= day and (period.end_date is None or day <= period.end_date)
        assert (period in active) is inside
