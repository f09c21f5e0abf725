from __future__ import annotations

import matplotlib

matplotlib.use("Agg", force=True)
from shiftroster.config import Config
from shiftroster.input_data import InputData, ShiftDefinition, WorkingDayCalendar
from shiftroster.model import RosterModel
from shiftroster.reporting.plots import show_daily_coverage, show_staff_load
from shiftroster.reporting.text_report import ReportDocument, set_active_report
from shiftroster.staff import Role, StaffMember


def make_result(calendar=None):
    shifts = [ShiftDefinition(id="S1", name="Day", required_a=1, required_b=1)]
    staff = [
        StaffMember(id="a1", name="Ann", role=Role.A),
        StaffMember(id="a2", name="Ben", role=Role.A),
        StaffMember(id="b1", name="Cy", role=Role.B),
    ]
    data = InputData("D1", "2025-02", shifts, staff, calendar or WorkingDayCalendar())
    return RosterModel(Config(), data).solve()


def test_plots_are_saved_and_attached_to_report(tmp_path):
    doc = ReportDocument(tmp_path / "report.pdf")
    set_active_report(doc)
    try:
        res = make_result()
        show_staff_load(res, tmp_path)
        show_daily_coverage(res, tmp_path)
    finally:
        set_active_report(None)
    assert (tmp_path / "staff_load.png").exists()
    assert (tmp_path / "daily_coverage.png").exists()
    assert len(doc.figures) == 2


def test_plots_respect_disable_flag_and_empty_months(tmp_path):
    res = make_result()
    show_staff_load(res, tmp_path, enable_plot=False)
    show_daily_coverage(res, tmp_path, enable_plot=False)
    assert not any(tmp_path.iterdir())

    closed = make_result(WorkingDayCalendar({}))
    assert closed.working_days == []
    show_daily_coverage(closed, tmp_path)
    assert not (tmp_path / "daily_coverage.png").exists()
