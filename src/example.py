"""
Module with example code for running the roster solver.

There are three ways to run the code:

1. Run the code with default options. This will generate
    a synthetic department for the current month and schedule it.
2. Run the code with a department defined via code.
3. Run the code with a department snapshot pre-defined in a JSON file.

Usage via cli:
    python3 src/example.py --option 1
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path

from shiftroster import (
    Config,
    HolidayRange,
    InputData,
    LeaveRange,
    ShiftDefinition,
    StaffMember,
    WorkingDayCalendar,
    run_solver,
)
from shiftroster.ingest import input_from_json
from shiftroster.main import Reporter, default_input_builder

cfg = Config(
    TIE_BREAK="roster",
    MAX_DIFF_ALLOWED=1,
    OUTPUT_DIR=Path("outputs"),
    ENABLE_PLOTS=True,
    NUM_PRINT_EXAMPLES=6,
    SEED=7,
)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run roster examples.")
    parser.add_argument(
        "--option",
        type=int,
        default=3,
        choices=(1, 2, 3),
        help="Example scenario to run (default: 3).",
    )
    return parser.parse_args()


def run_option(option: int) -> None:
    print(f"Running example code with option {option}")

    # Run the code with default options. This will generate
    # a synthetic department and schedule the current month.
    if option == 1:

        # The parameters below are defaults, with the exception of config,
        # they can be omitted i.e. the below is equivalent to:
        # run_solver(cfg)
        run_solver(
            config=cfg,
            validate_config=True,
            input_builder=default_input_builder,
            reporter=Reporter(cfg),
            enable_reporting=True,
        )

    # Run the code with a department defined via code.
    elif option == 2:

        shifts = [
            ShiftDefinition(
                id="M", name="Morning", start_time="07:00", end_time="15:00",
                required_a=1, required_b=1,
            ),
            ShiftDefinition(
                id="E", name="Evening", start_time="15:00", end_time="23:00",
                required_a=1, required_b=0,
            ),
        ]
        staff = [
            StaffMember(id="n1", name="Ann", role="A", position="nurse"),
            StaffMember(id="n2", name="Ben", role="A", position="nurse"),
            StaffMember(id="n3", name="Cho", role="A", position="nurse"),
            StaffMember(id="n4", name="Dev", role="A", position="nurse"),
            StaffMember(id="a1", name="Eli", role="B", position="assistant"),
            StaffMember(id="a2", name="Fay", role="B", position="assistant"),
        ]

        run_solver(
            cfg,
            data=InputData(
                department_id="ward-7",
                month="2025-02",
                shifts=shifts,
                staff=staff,
                # Monday to Friday; Saturday (6) and Sunday (0) are closed
                calendar=WorkingDayCalendar({1: True, 2: True, 3: True, 4: True, 5: True}),
                holidays=[HolidayRange(start="2025-02-14", end="2025-02-14")],
                leaves=[LeaveRange(staff_id="n3", start="2025-02-03", end="2025-02-09")],
            ),
        )

    # Run the code with a department snapshot defined via JSON. Typical production use.
    elif option == 3:

        data, max_diff = input_from_json(Path("src/example_department.json"))
        run_solver(replace(cfg, MAX_DIFF_ALLOWED=max_diff), data=data)
    else:
        raise SystemExit(f"Unknown option {option}")


def main() -> None:
    args = parse_args()
    run_option(args.option)


if __name__ == "__main__":
    main()
