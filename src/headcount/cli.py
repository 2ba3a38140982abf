import asyncio
import subprocess
import sys
from pathlib import Path
from typing import Optional

import httpx
import typer

from headcount.config import settings
from headcount.domain.exceptions import FetchError
from headcount.infra.attendees import HttpAttendeeSource
from headcount.logging import logger, get_session_id
from headcount.schemas.widget import WidgetInputs, WidgetState
from headcount.ui.widget import AttendanceWidget

app = typer.Typer(no_args_is_help=True)

@app.callback()
def main():
    """
    Attendee headcount dashboard CLI.
    """
    pass

@app.command(name="doctor")
def doctor():
    """
    Check configuration and that the attendee service is reachable.
    """
    logger.info("Running doctor check...")

    failures: list[str] = []
    passed = 0

    print("\n🩺 Headcount Doctor\n")

    # ── Check 1: Environment / Interpreter ──────────────────────────────────
    print("[Environment]")
    print(f"  Python: {sys.version.split()[0]}")
    print(f"  Prefix: {sys.prefix}")
    print(f"  Session: {get_session_id()}")
    passed += 1

    # ── Check 2: Configuration ───────────────────────────────────────────────
    print("\n[Configuration]")
    print(f"  ATTENDEES_API_URL:   {settings.ATTENDEES_API_URL}")
    print(f"  ATTENDEES_PATH:      {settings.ATTENDEES_PATH}")
    print(f"  REQUEST_TIMEOUT:     {settings.REQUEST_TIMEOUT}")
    if settings.CHART_HEIGHT > 0:
        print(f"  CHART_HEIGHT:        ✅ {settings.CHART_HEIGHT}")
        passed += 1
    else:
        print(f"  CHART_HEIGHT:        ❌ {settings.CHART_HEIGHT}")
        failures.append("CHART_HEIGHT must be a positive number of pixels")

    # ── Check 3: Attendee service ────────────────────────────────────────────
    print("\n[Attendee Service]")
    source = HttpAttendeeSource()
    endpoint = source.endpoint
    try:
        records = asyncio.run(source.get_all())
        print(f"  {endpoint}  ✅ {len(records)} record(s)")
        passed += 1
    except FetchError as e:
        print(f"  {endpoint}  ❌ {e.message}")
        failures.append(f"Attendee service unreachable at {endpoint} — check ATTENDEES_API_URL")

    # ── Summary ──────────────────────────────────────────────────────────────
    total = passed + len(failures)
    print(f"\n{'─' * 50}")
    if failures:
        print(f"Result: {passed}/{total} checks passed\n")
        for msg in failures:
            print(f"  ❌ {msg}")
        print()
        raise typer.Exit(code=1)
    else:
        print(f"Result: {passed}/{total} checks passed — all good ✅")
        print()


@app.command(name="summary")
def summary(
    url: Optional[str] = typer.Option(None, "--url", help="Legacy endpoint returning the attendee list"),
):
    """Fetch attendees and print registered vs actual totals."""
    async def _run() -> AttendanceWidget:
        async with httpx.AsyncClient(timeout=settings.REQUEST_TIMEOUT) as client:
            widget = AttendanceWidget(
                HttpAttendeeSource(client=client), WidgetInputs(fetch_url=url), http_client=client,
            )
            await widget.refresh()
            return widget

    widget = asyncio.run(_run())
    if widget.state is WidgetState.ERROR:
        logger.error(f"Summary failed: {widget.error}")
        print(f"❌ Failed: {widget.error}")
        raise typer.Exit(code=1)

    view = widget.view()
    totals = view.totals
    print(f"Records: {totals.record_count} (present {totals.present_count}, absent {totals.absent_count})")
    print(f"{'Group':<14}{'Registered':>12}{'Actual':>10}")
    for row in view.chart_rows:
        print(f"{row.group.value:<14}{row.registered:>12}{row.actual:>10}")
    print(view.summary)


@app.command(name="ui")
def ui(port: int = typer.Option(8501, help="Port for the Streamlit server")):
    """Launch the Streamlit dashboard."""
    page = Path(__file__).parent / "ui" / "app.py"
    logger.info(f"Starting Streamlit on port {port}")
    raise typer.Exit(code=subprocess.call(
        [sys.executable, "-m", "streamlit", "run", str(page), "--server.port", str(port)],
    ))

if __name__ == "__main__":
    app()
