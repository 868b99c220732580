"""
SysId Routine Definitions for a Swerve Drivetrain
=================================================

This module holds the fixed set of characterization routines and the
parameters each one runs with. Everything that differs between routines
lives in ``ROUTINE_SPECS``; the characterization manager builds its routines
from this table and nothing else.

Routines
--------
TRANSLATION
    Drive motors, to find PID gains for the drive velocity loop.
STEER
    Steer motors, to find PID gains for the azimuth position loop.
ROTATION
    Whole-robot rotation, to find PID gains for the
    FieldCentricFacingAngle heading controller.

Units
-----
SysId only understands volts. The rotation routine reuses the volt fields
for angular quantities: ``ramp_rate`` is rad/s² and ``step_voltage`` is rad/s.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from commands2.sysid import SysIdRoutine


# Defaults applied by SysIdRoutine when a value is left unset
_ROUTINE_DEFAULTS = SysIdRoutine.Config()
DEFAULT_RAMP_RATE = _ROUTINE_DEFAULTS.rampRate   # V/s
DEFAULT_TIMEOUT = _ROUTINE_DEFAULTS.timeout      # s

# SignalLogger key for the requested rotational rate (rotation routine only)
ROTATIONAL_RATE_KEY = "Rotational_Rate"

Direction = SysIdRoutine.Direction


class RoutineKind(Enum):
    """Which physical quantity a routine excites."""
    TRANSLATION = "translation"
    STEER = "steer"
    ROTATION = "rotation"


@dataclass(frozen=True)
class RoutineSpec:
    """
    Parameters for one characterization routine.

    Attributes
    ----------
    kind : RoutineKind
        Routine this entry configures
    state_key : str
        SignalLogger key the routine state labels are written under
    step_voltage : float
        Dynamic test step amplitude (V, or rad/s for rotation)
    ramp_rate : float or None
        Quasistatic ramp rate (V/s, or rad/s² for rotation).
        None uses DEFAULT_RAMP_RATE.
    timeout : float or None
        Safety timeout for both tests (s). None uses DEFAULT_TIMEOUT.
    description : str
        What the routine is used to tune
    """
    kind: RoutineKind
    state_key: str
    step_voltage: float
    ramp_rate: Optional[float] = None
    timeout: Optional[float] = None
    description: str = ""

    def __post_init__(self):
        if self.step_voltage <= 0:
            raise ValueError(f"{self.kind.value}: step_voltage must be positive, got {self.step_voltage}")
        if self.ramp_rate is not None and self.ramp_rate <= 0:
            raise ValueError(f"{self.kind.value}: ramp_rate must be positive, got {self.ramp_rate}")
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError(f"{self.kind.value}: timeout must be positive, got {self.timeout}")

    @property
    def effective_ramp_rate(self) -> float:
        """Ramp rate the quasistatic test actually runs with."""
        return DEFAULT_RAMP_RATE if self.ramp_rate is None else self.ramp_rate

    @property
    def effective_timeout(self) -> float:
        """Timeout both tests actually run with."""
        return DEFAULT_TIMEOUT if self.timeout is None else self.timeout

    def config_kwargs(self) -> Dict[str, Any]:
        """
        Keyword arguments for ``SysIdRoutine.Config``.

        Unset values are left out so the routine falls back to its own
        defaults.
        """
        kwargs: Dict[str, Any] = {"stepVoltage": self.step_voltage}
        if self.ramp_rate is not None:
            kwargs["rampRate"] = self.ramp_rate
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        return kwargs


ROUTINE_SPECS: Dict[RoutineKind, RoutineSpec] = {
    RoutineKind.TRANSLATION: RoutineSpec(
        kind=RoutineKind.TRANSLATION,
        state_key="SysIdTranslation_State",
        # Reduced from the 7 V default to prevent brownout
        step_voltage=4.0,
        description="PID gains for the drive motors",
    ),
    RoutineKind.STEER: RoutineSpec(
        kind=RoutineKind.STEER,
        state_key="SysIdSteer_State",
        step_voltage=7.0,
        description="PID gains for the steer motors",
    ),
    RoutineKind.ROTATION: RoutineSpec(
        kind=RoutineKind.ROTATION,
        state_key="SysIdRotation_State",
        # rad/s², logged as "volts per second"
        ramp_rate=math.pi / 6,
        # rad/s, logged as "volts"
        step_voltage=math.pi,
        description="PID gains for the FieldCentricFacingAngle heading controller",
    ),
}
