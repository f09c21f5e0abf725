from __future__ import annotations

import sys

from shiftroster.config import Config
from shiftroster.input_data import InputData
from shiftroster.result_types import SolveResult
from shiftroster.reporting.plots import show_daily_coverage, show_staff_load
from shiftroster.reporting.text_report import (
    ReportDocument,
    render_text_report,
    set_active_report,
)


class Reporter:
    """High-level orchestrator: runs pre-check confirmations and renders reports."""

    def __init__(
        self,
        cfg: Config,
        num_print_examples: int = 6,
        enable_plots: bool = True,
    ) -> None:
        self.cfg = cfg
        self.num_print_examples = num_print_examples
        self.enable_plots = enable_plots

    def pre_solve(self, model: object) -> None:
        """Run the capacity pre-check and ask before solving a month that cannot be covered."""
        precheck = getattr(model, "precheck", None)
        if not callable(precheck):
            print("Pre-check: (model has no `precheck()`; skipping)")
            return

        cap, dem, ok_cap, *_ = precheck()
        if not ok_cap:
            proceed = self._prompt_yes_no_default_yes(
                "Pre-check shows some slots cannot be filled. Continue anyway?"
            )
            if not proceed:
                raise SystemExit("Stopped by user after failed pre-check.")

    def render_text_report(self, res: SolveResult, data: InputData) -> None:
        """Public entry point for callers that want text reporting only."""
        render_text_report(
            self.cfg, res, data, num_print_examples=self.num_print_examples
        )

    def post_solve(self, res: SolveResult, data: InputData) -> None:
        """Render textual report (and optional plots) into the console and report.pdf."""
        report_doc = ReportDocument(self.cfg.OUTPUT_DIR / "report.pdf")
        set_active_report(report_doc)
        try:
            self.render_text_report(res, data)
            if not self.enable_plots:
                return
            show_staff_load(res, self.cfg.OUTPUT_DIR, enable_plot=self.enable_plots)
            show_daily_coverage(
                res, self.cfg.OUTPUT_DIR, enable_plot=self.enable_plots
            )
        finally:
            set_active_report(None)
            report_doc.write()

    # ---------- helpers ----------

    def _prompt_yes_no_default_yes(self, msg: str) -> bool:
        """Prompt '[Y/n]' and return True for yes (default)."""
        try:
            if not sys.stdin or not sys.stdin.isatty():
                print(f"{msg} [Y/n] (non-interactive -> default: Y)")
                return True

            while True:
                resp = input(f"{msg} [Y/n]: ").strip().lower()
                if resp in ("", "y", "yes"):
                    return True
                if resp in ("n", "no"):
                    return False
                print("Please type 'y' or 'n'.")
        except (EOFError, KeyboardInterrupt):
            print("\nAborted by user.")
            return False
