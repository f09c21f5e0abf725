import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Optional

TieBreak = Literal["roster", "staff_id"]


def _debug_from_env() -> bool:
    return os.environ.get("SCHEDULE_DEBUG", "") == "1"


@dataclass
class Config:

    ### SOLVER SETUP ###

    # Print [optimizer] trace lines (blocked candidates, unfilled slots)
    DEBUG: bool = field(default_factory=_debug_from_env)

    # How equal-cost candidates are ordered: input roster order or staff id
    TIE_BREAK: TieBreak = "roster"

    ### FAIRNESS TUNING ###

    # Allowed spread (max - min shift count) per role before the report flags it.
    # Only consumed by reporting; the cost formula is fixed.
    MAX_DIFF_ALLOWED: int = 1

    ### OUTPUTS ###

    OUTPUT_DIR: Path = Path("outputs")
    ENABLE_PLOTS: bool = True
    NUM_PRINT_EXAMPLES: int = 6

    # RANDOM SEED (synthetic demo rosters only; the solve itself is deterministic)
    SEED: Optional[int] = None

    def __post_init__(self) -> None:
        self.OUTPUT_DIR = Path(self.OUTPUT_DIR)

    def validate(self):
        """
        Validate the Config object has sensible values before solving.
        """
        if self.TIE_BREAK not in ("roster", "staff_id"):
            raise ValueError("TIE_BREAK must be 'roster' or 'staff_id'.")
        if not (0 <= self.MAX_DIFF_ALLOWED <= 5):
            raise ValueError("MAX_DIFF_ALLOWED must be within [0, 5].")
        if self.NUM_PRINT_EXAMPLES < 0:
            raise ValueError("NUM_PRINT_EXAMPLES must be non-negative.")
        if self.SEED is not None and not isinstance(self.SEED, int):
            raise ValueError("SEED must be an int or None.")


cfg = Config(
    TIE_BREAK="roster",
    MAX_DIFF_ALLOWED=1,
    OUTPUT_DIR=Path("outputs"),
    ENABLE_PLOTS=True,
    SEED=7,
)
