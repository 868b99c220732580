"""
swerve-sysid - SysId Characterization for Swerve Drivetrains
============================================================

Selects among the translation, steer and rotation SysId routines of a
phoenix6 swerve drivetrain and builds the quasistatic/dynamic test
commands for the active one.

Example:
    >>> from swerve_sysid import SwerveCharacterization, RoutineKind, Direction
    >>>
    >>> characterization = SwerveCharacterization(drivetrain.set_control, drivetrain)
    >>> characterization.set_active_routine(RoutineKind.ROTATION)
    >>> command = characterization.dynamic(Direction.kForward)
"""

from .characterization import SwerveCharacterization
from .routines import (
    RoutineKind,
    RoutineSpec,
    ROUTINE_SPECS,
    Direction,
    DEFAULT_RAMP_RATE,
    DEFAULT_TIMEOUT,
    ROTATIONAL_RATE_KEY,
)

__version__ = "1.0.0"
__all__ = [
    "SwerveCharacterization",
    "RoutineKind",
    "RoutineSpec",
    "ROUTINE_SPECS",
    "Direction",
    "DEFAULT_RAMP_RATE",
    "DEFAULT_TIMEOUT",
    "ROTATIONAL_RATE_KEY",
]
