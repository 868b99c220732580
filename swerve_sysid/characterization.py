"""
Swerve Drivetrain Characterization
==================================

Manages the SysId characterization routines of a swerve drivetrain and hands
out the quasistatic/dynamic test commands for whichever routine is active.

Three routines are available (see ``swerve_sysid.routines``):

- Translation: PID gains for the drive motors
- Steer: PID gains for the steer motors
- Rotation: PID gains for the FieldCentricFacingAngle heading controller

The commands are ordinary ``commands2`` commands requiring the drivetrain
subsystem, so the scheduler takes care of exclusivity and interruption.

Usage Example
-------------
>>> from swerve_sysid import SwerveCharacterization, RoutineKind, Direction
>>>
>>> characterization = SwerveCharacterization(drivetrain.set_control, drivetrain)
>>> characterization.set_active_routine(RoutineKind.STEER)
>>>
>>> controller.a().whileTrue(characterization.quasistatic(Direction.kForward))
>>> controller.b().whileTrue(characterization.dynamic(Direction.kReverse))

State labels are written to SignalLogger under the routine's key
(e.g. ``SysIdSteer_State``). Load the resulting hoot log in SysId.
"""

import functools
import logging
from typing import Callable, Dict, Union

from commands2 import Command, Subsystem
from commands2.sysid import SysIdRoutine
from phoenix6 import SignalLogger, swerve
from wpilib.sysid import State, SysIdRoutineLog

from .routines import ROTATIONAL_RATE_KEY, ROUTINE_SPECS, RoutineKind
from .tools import log_exceptions


logger = logging.getLogger(__name__)


class SwerveCharacterization:
    """
    Encapsulates SysId characterization routines for a swerve drivetrain.

    Parameters
    ----------
    set_control : callable
        Applies a SwerveRequest to the drivetrain (usually ``drivetrain.set_control``)
    subsystem : commands2.Subsystem
        Subsystem the test commands require (typically the drivetrain)
    signal_logger : object, optional
        Sink with ``write_string(key, value)`` and ``write_double(key, value)``.
        Defaults to phoenix6 SignalLogger.

    Raises
    ------
    ValueError
        If any collaborator is None.
    """

    def __init__(
        self,
        set_control: Callable[["swerve.requests.SwerveRequest"], None],
        subsystem: Subsystem,
        signal_logger=SignalLogger,
    ):
        if set_control is None:
            raise ValueError("set_control must not be None")
        if subsystem is None:
            raise ValueError("subsystem must not be None")
        if signal_logger is None:
            raise ValueError("signal_logger must not be None")

        self._set_control = set_control
        self._subsystem = subsystem
        self._signal_logger = signal_logger

        # Reused every tick; with_* mutates and returns the same request
        self._translation_characterization = swerve.requests.SysIdSwerveTranslation()
        self._steer_characterization = swerve.requests.SysIdSwerveSteerGains()
        self._rotation_characterization = swerve.requests.SysIdSwerveRotation()

        self._routines: Dict[RoutineKind, SysIdRoutine] = {
            kind: self._build_routine(kind) for kind in ROUTINE_SPECS
        }
        self._active_kind = RoutineKind.TRANSLATION

    def _build_routine(self, kind: RoutineKind) -> SysIdRoutine:
        spec = ROUTINE_SPECS[kind]
        return SysIdRoutine(
            SysIdRoutine.Config(
                **spec.config_kwargs(),
                recordState=functools.partial(self._record_state, kind),
            ),
            SysIdRoutine.Mechanism(
                functools.partial(self._drive, kind),
                lambda log: None,
                self._subsystem,
                kind.value,
            ),
        )

    @log_exceptions
    def _drive(self, kind: RoutineKind, output: float) -> None:
        """Apply one output sample from the sequencing logic."""
        if kind is RoutineKind.TRANSLATION:
            self._set_control(self._translation_characterization.with_volts(output))
        elif kind is RoutineKind.STEER:
            self._set_control(self._steer_characterization.with_volts(output))
        else:
            # output is actually radians per second, but SysId only supports "volts"
            self._set_control(self._rotation_characterization.with_rotational_rate(output))
            # also log the requested output for SysId
            self._signal_logger.write_double(ROTATIONAL_RATE_KEY, output)

    def _record_state(self, kind: RoutineKind, state: State) -> None:
        self._signal_logger.write_string(
            ROUTINE_SPECS[kind].state_key,
            SysIdRoutineLog.stateEnumToString(state),
        )

    # =========================================================================
    # Routine Selection
    # =========================================================================

    def set_active_routine(self, kind: Union[RoutineKind, str]) -> None:
        """
        Set which routine subsequent quasistatic/dynamic calls use.

        Args:
            kind: Routine to activate (a RoutineKind or its value, e.g. "steer")

        Raises:
            ValueError: If kind is not a known routine
        """
        kind = RoutineKind(kind)
        if kind is not self._active_kind:
            logger.debug("Active SysId routine: %s -> %s", self._active_kind.value, kind.value)
        self._active_kind = kind

    def get_active_routine_kind(self) -> RoutineKind:
        """Currently active routine kind (TRANSLATION until changed)."""
        return self._active_kind

    @property
    def active_routine(self) -> SysIdRoutine:
        """SysIdRoutine for the active kind."""
        return self._routines[self._active_kind]

    # =========================================================================
    # Test Commands
    # =========================================================================

    def quasistatic(self, direction: SysIdRoutine.Direction) -> Command:
        """
        Runs the SysId Quasistatic test in the given direction for the active routine.

        Args:
            direction: Direction of the SysId Quasistatic test

        Returns:
            New command requiring the subsystem. It keeps targeting the
            routine that was active when it was created.
        """
        return self.active_routine.quasistatic(direction)

    def dynamic(self, direction: SysIdRoutine.Direction) -> Command:
        """
        Runs the SysId Dynamic test in the given direction for the active routine.

        Args:
            direction: Direction of the SysId Dynamic test

        Returns:
            New command requiring the subsystem. It keeps targeting the
            routine that was active when it was created.
        """
        return self.active_routine.dynamic(direction)

    # =========================================================================
    # Direct Routine Access
    # =========================================================================

    def get_routine(self, kind: Union[RoutineKind, str]) -> SysIdRoutine:
        """
        Get a routine by kind, regardless of which one is active.

        Raises:
            ValueError: If kind is not a known routine
        """
        return self._routines[RoutineKind(kind)]

    @property
    def translation_routine(self) -> SysIdRoutine:
        return self._routines[RoutineKind.TRANSLATION]

    @property
    def steer_routine(self) -> SysIdRoutine:
        return self._routines[RoutineKind.STEER]

    @property
    def rotation_routine(self) -> SysIdRoutine:
        return self._routines[RoutineKind.ROTATION]
