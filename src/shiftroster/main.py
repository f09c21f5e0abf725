from __future__ import annotations

import argparse
from dataclasses import replace
from datetime import date
from pathlib import Path
from typing import Callable, Iterable, Optional, Sequence

from shiftroster.config import Config, cfg
from shiftroster.generate.roster import RosterGenConfig, build_demo_input, staff_summary
from shiftroster.ingest import input_from_json
from shiftroster.input_data import (
    HolidayRange,
    InputData,
    LeaveRange,
    ShiftDefinition,
    WorkingDayCalendar,
)
from shiftroster.model import RosterModel
from shiftroster.month_calendar import MonthLike, month_label
from shiftroster.output import produce_outputs
from shiftroster.reporting import Reporter
from shiftroster.result_types import Assignment, SolveResult
from shiftroster.staff import StaffMember

InputBuilder = Callable[[Config], InputData]


def solve(
    department_id: str,
    month: MonthLike,
    shifts: Sequence[ShiftDefinition],
    staff: Sequence[StaffMember],
    calendar: Optional[WorkingDayCalendar] = None,
    holidays: Iterable[HolidayRange] = (),
    leaves: Iterable[LeaveRange] = (),
    cfg: Config | None = None,
) -> list[Assignment]:
    """
    Schedule one department for one month and return the assignments.

    No console report and no files are written. The caller's sequences are
    copied, never mutated. Raises InvalidInput/InvalidMonth on malformed input;
    slots nobody can take are simply absent from the result.
    A bad config (e.g. an unknown TIE_BREAK) raises ValueError up front.
    """
    run_cfg = cfg or Config()
    run_cfg.validate()
    data = InputData(
        department_id=department_id,
        month=month,
        shifts=list(shifts),
        staff=list(staff),
        calendar=calendar if calendar is not None else WorkingDayCalendar(),
        holidays=list(holidays),
        leaves=list(leaves),
    )
    return RosterModel(run_cfg, data).solve().assignments


def default_input_builder(config: Config) -> InputData:
    """Build synthetic input data for the current month using the project's helper."""
    seed = config.SEED if config.SEED is not None else 42
    return build_demo_input(date.today(), RosterGenConfig(seed=seed))


def run_solver(
    config: Config | None = None,
    data: InputData | None = None,
    input_builder: InputBuilder | None = None,
    reporter: Reporter | None = None,
    validate_config: bool = True,
    enable_reporting: bool = True,
) -> SolveResult:
    """
    Build, solve, and optionally report on a department month.

    Parameters
    ----------
    config:
        The configuration for the run. Defaults to `shiftroster.config.cfg` when omitted.
    data:
        Pre-built `InputData`. When omitted then `input_builder` (or the default synthetic
        builder) is used to construct data from the given config.
    input_builder:
        Optional callable that accepts a `Config` and returns `InputData`. Ignored when
        `data` is supplied.
    reporter:
        Custom reporter instance. When `enable_reporting` is True and no reporter is
        provided, the default `Reporter` is used.
    validate_config:
        Toggle to run `Config.validate()` before building inputs.
    enable_reporting:
        When False, skips reporter pre/post hooks and file outputs.

    Returns
    -------
    SolveResult
        Structured output from the solving phase.
    """
    cfg_obj = config or cfg

    if validate_config:
        cfg_obj.validate()

    input_data = data
    if input_data is None:
        builder = input_builder or default_input_builder
        input_data = builder(cfg_obj)

    model = RosterModel(cfg_obj, input_data)

    active_reporter = reporter if enable_reporting else None
    if active_reporter is None and enable_reporting:
        active_reporter = Reporter(
            cfg_obj,
            num_print_examples=cfg_obj.NUM_PRINT_EXAMPLES,
            enable_plots=cfg_obj.ENABLE_PLOTS,
        )

    if active_reporter is not None:
        active_reporter.pre_solve(model)

    result = model.solve()

    if active_reporter is not None:
        active_reporter.post_solve(result, input_data)
        produce_outputs(result, cfg_obj, input_data)

    return result


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Build a monthly shift roster for one department."
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--input",
        type=Path,
        help="Department snapshot JSON (shifts, staff, working_days, holidays, leaves).",
    )
    source.add_argument(
        "--demo",
        action="store_true",
        help="Use a synthetic department (default when --input is omitted).",
    )
    parser.add_argument(
        "--month",
        help="Month to schedule as YYYY-MM (overrides the snapshot; demo defaults to this month).",
    )
    parser.add_argument(
        "--output-dir", type=Path, help="Directory for CSVs, charts and report.pdf."
    )
    parser.add_argument("--no-plots", action="store_true", help="Skip charts.")
    parser.add_argument(
        "--no-report", action="store_true", help="Skip console report and file outputs."
    )
    parser.add_argument(
        "--debug", action="store_true", help="Print [optimizer] trace lines."
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> SolveResult:
    args = parse_args(argv)

    run_cfg = replace(cfg)
    if args.output_dir is not None:
        run_cfg.OUTPUT_DIR = args.output_dir
    if args.no_plots:
        run_cfg.ENABLE_PLOTS = False
    if args.debug:
        run_cfg.DEBUG = True

    if args.input is not None:
        data, max_diff = input_from_json(args.input, month=args.month)
        run_cfg.MAX_DIFF_ALLOWED = max_diff
    else:
        seed = run_cfg.SEED if run_cfg.SEED is not None else 42
        data = build_demo_input(
            args.month or date.today(), RosterGenConfig(seed=seed)
        )
        summary = staff_summary(data.staff)
        print(
            f"Synthetic roster: {summary['N']} staff "
            f"({summary['role_a']} role A, {summary['role_b']} role B, "
            f"{summary['role_a_pct']:.0%} role A)"
        )

    print(
        f"Scheduling department {data.department_id or '-'} "
        f"for {month_label(data.month)}"
    )
    return run_solver(
        config=run_cfg,
        data=data,
        enable_reporting=not args.no_report,
    )


def cli() -> None:
    """Console-script entry point."""
    main()


if __name__ == "__main__":
    cli()
