"""State-machine tests for AttendanceWidget: loading, error and stale-result suppression."""
import asyncio
import logging

import httpx

from conftest import FakeSource, GatedSource
from headcount.domain.exceptions import FetchError
from headcount.schemas.widget import WidgetInputs, WidgetState
from headcount.ui.widget import AttendanceWidget


def test_initial_state_is_loading_without_attendees():
    widget = AttendanceWidget(FakeSource())
    assert widget.state is WidgetState.LOADING
    assert widget.view().chart_rows == []


def test_supplied_attendees_render_immediately_without_fetch(scenario_records):
    source = FakeSource()
    widget = AttendanceWidget(source, WidgetInputs(attendees=scenario_records))
    assert widget.state is WidgetState.HAS_DATA

    assert asyncio.run(widget.refresh()) is WidgetState.HAS_DATA
    assert source.calls == 0

    view = widget.view()
    assert view.totals.present_count == 1
    assert [r.registered for r in view.chart_rows] == [2, 3, 2]
    assert view.summary == "Total Registered: 5 • Actual: 4"


def test_default_source_success_commits_rows(scenario_records):
    source = FakeSource(result=scenario_records)
    widget = AttendanceWidget(source)
    assert asyncio.run(widget.refresh()) is WidgetState.HAS_DATA
    assert widget.rows == scenario_records
    assert widget.loading is False
    assert widget.error is None
    assert source.calls == 1


def test_default_source_failure_sets_error_and_hides_chart():
    widget = AttendanceWidget(FakeSource(error=RuntimeError("service unavailable")))
    assert asyncio.run(widget.refresh()) is WidgetState.ERROR

    view = widget.view()
    assert view.error == "service unavailable"
    assert view.chart_rows == []
    assert view.totals is None
    assert widget.loading is False


def test_new_attempt_clears_previous_error(scenario_records):
    source = FakeSource(error=FetchError("Fetch failed: 500"))
    widget = AttendanceWidget(source)
    asyncio.run(widget.refresh())
    assert widget.error == "Fetch failed: 500"

    source.error = None
    source.result = scenario_records
    assert asyncio.run(widget.refresh()) is WidgetState.HAS_DATA
    assert widget.error is None


def test_loading_flag_set_while_resolution_in_flight():
    async def scenario():
        source = GatedSource(result=[{"present": True}])
        widget = AttendanceWidget(source)
        task = asyncio.create_task(widget.refresh())
        await source.started.wait()
        assert widget.loading is True
        assert widget.state is WidgetState.LOADING
        source.release.set()
        await task
        return widget

    widget = asyncio.run(scenario())
    assert widget.state is WidgetState.HAS_DATA
    assert widget.view().totals.present_count == 1


def test_stale_success_is_discarded_when_inputs_change():
    async def scenario():
        slow = GatedSource(result=[{"present": True}] * 5)
        widget = AttendanceWidget(slow)
        first = asyncio.create_task(widget.refresh())
        await slow.started.wait()

        await widget.refresh(WidgetInputs(attendees=[{"present": False}]))
        slow.release.set()
        await first
        return widget

    widget = asyncio.run(scenario())
    assert widget.rows == [{"present": False}]
    assert widget.state is WidgetState.HAS_DATA
    assert widget.view().totals.absent_count == 1


def test_stale_failure_is_discarded_when_inputs_change():
    async def scenario():
        slow = GatedSource(error=RuntimeError("late failure"))
        widget = AttendanceWidget(slow)
        first = asyncio.create_task(widget.refresh())
        await slow.started.wait()

        await widget.refresh(WidgetInputs(attendees=[{"present": True}]))
        slow.release.set()
        await first
        return widget

    widget = asyncio.run(scenario())
    assert widget.error is None
    assert widget.state is WidgetState.HAS_DATA


def test_only_latest_of_two_fetches_commits(mock_http):
    async def scenario():
        slow = GatedSource(result=[{"present": True}] * 3)
        client = mock_http(lambda req: httpx.Response(200, json=[{"present": False}]))
        widget = AttendanceWidget(slow, http_client=client)
        first = asyncio.create_task(widget.refresh())
        await slow.started.wait()

        second = asyncio.create_task(widget.refresh(WidgetInputs(fetch_url="http://legacy/list")))
        await second
        assert widget.state is WidgetState.HAS_DATA

        slow.release.set()
        await first
        return widget

    widget = asyncio.run(scenario())
    assert widget.rows == [{"present": False}]


def test_teardown_suppresses_in_flight_result():
    async def scenario():
        slow = GatedSource(result=[{"present": True}])
        widget = AttendanceWidget(slow)
        task = asyncio.create_task(widget.refresh())
        await slow.started.wait()
        widget.teardown()
        slow.release.set()
        await task
        return widget

    widget = asyncio.run(scenario())
    assert widget.rows == []
    assert widget.error is None


def test_height_defaults_to_300_and_is_passed_to_view():
    widget = AttendanceWidget(FakeSource(), WidgetInputs(attendees=[{}], height=420))
    assert widget.view().height == 420
    assert WidgetInputs().height == 300


def test_error_cleared_and_loading_set_before_new_attempt_settles():
    async def scenario():
        source = GatedSource(error=RuntimeError("first failure"))
        source.release.set()
        widget = AttendanceWidget(source)
        await widget.refresh()
        assert widget.state is WidgetState.ERROR

        source.release.clear()
        source.started.clear()
        source.error = None
        source.result = [{"present": True}]
        task = asyncio.create_task(widget.refresh())
        await source.started.wait()
        assert widget.error is None
        assert widget.loading is True
        assert widget.state is WidgetState.LOADING

        source.release.set()
        await task
        return widget

    widget = asyncio.run(scenario())
    assert widget.state is WidgetState.HAS_DATA


def test_source_failure_reported_once(caplog):
    widget = AttendanceWidget(FakeSource(error=RuntimeError("service unavailable")))
    with caplog.at_level(logging.DEBUG, logger="headcount"):
        asyncio.run(widget.refresh())
    reported = [r for r in caplog.records if r.levelno >= logging.WARNING]
    assert len(reported) == 1
    assert reported[0].exc_info is None


def test_supplied_records_are_passed_through_untouched():
    record = {"no_of_reg_adults": 2, "present": True}
    inputs = WidgetInputs(attendees=[record])
    assert inputs.attendees[0] is record

    widget = AttendanceWidget(FakeSource(), inputs)
    asyncio.run(widget.refresh())
    assert widget.rows[0] is record
