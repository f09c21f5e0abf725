from .config import Config, cfg
from .errors import InvalidInput, InvalidMonth
from .input_data import (
    HolidayRange,
    InputData,
    LeaveRange,
    ShiftDefinition,
    WorkingDayCalendar,
)
from .main import run_solver, solve
from .result_types import Assignment, SolveResult
from .staff import Role, StaffMember

__all__ = [
    "Config",
    "cfg",
    "InputData",
    "ShiftDefinition",
    "StaffMember",
    "Role",
    "WorkingDayCalendar",
    "HolidayRange",
    "LeaveRange",
    "Assignment",
    "SolveResult",
    "InvalidInput",
    "InvalidMonth",
    "solve",
    "run_solver",
]
