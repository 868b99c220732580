"""
SysId Dry Run (HAL Simulation)
==============================

Runs a characterization test against a stand-in drivetrain in the WPILib
HAL simulation, without any hardware. Every request the routine applies is
recorded so you can check ramp rates, step amplitudes and the safe stop
before putting the robot on the carpet.

Usage Example
-------------
>>> from swerve_sysid import SwerveCharacterization, RoutineKind, Direction
>>> from swerve_sysid.dryrun import DryRunDrivetrain, LoggingSignalSink, run_dry_run
>>>
>>> drivetrain = DryRunDrivetrain()
>>> characterization = SwerveCharacterization(
...     drivetrain.set_control, drivetrain, signal_logger=LoggingSignalSink()
... )
>>> characterization.set_active_routine(RoutineKind.ROTATION)
>>> ticks = run_dry_run(characterization.dynamic(Direction.kForward), duration=1.0)
>>> drivetrain.peak_output, drivetrain.last_output
(3.141592653589793, 0.0)

CLI Usage
---------
    swerve-sysid-dryrun --routine steer --test dynamic --direction reverse
"""

import argparse
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import hal
from commands2 import Command, CommandScheduler, Subsystem
from phoenix6 import SignalLogger, swerve
from wpilib import Timer
from wpilib.simulation import (
    DriverStationSim, isTimingPaused, pauseTiming, resumeTiming, stepTiming,
)

from .characterization import SwerveCharacterization
from .routines import ROUTINE_SPECS, Direction, RoutineKind
from .tools import configure_logging


logger = logging.getLogger(__name__)

# Robot loop period (s)
DEFAULT_PERIOD = 0.02

LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


@dataclass
class ControlSample:
    """
    One request applied to the drivetrain.

    Attributes
    ----------
    time_s : float
        Seconds since the drivetrain was created
    request_type : str
        Request class name, e.g. "SysIdSwerveTranslation"
    value : float
        Volts for translation/steer, rad/s for rotation
    """
    time_s: float
    request_type: str
    value: float


def describe_request(request) -> Tuple[str, float]:
    """
    Extract the characterization output carried by a request.

    Args:
        request: A SysId swerve request

    Returns:
        (request class name, output value)
    """
    if isinstance(request, swerve.requests.SysIdSwerveRotation):
        return type(request).__name__, request.rotational_rate
    return type(request).__name__, request.volts_to_apply


class DryRunDrivetrain(Subsystem):
    """
    Stand-in drivetrain that records every applied request.
    """

    def __init__(self):
        super().__init__()
        self.samples: List[ControlSample] = []
        self._t0 = Timer.getFPGATimestamp()

    def set_control(self, request) -> None:
        request_type, value = describe_request(request)
        sample = ControlSample(
            time_s=Timer.getFPGATimestamp() - self._t0,
            request_type=request_type,
            value=value,
        )
        self.samples.append(sample)
        logger.debug("t=%.3f %s %.4f", sample.time_s, request_type, value)

    @property
    def peak_output(self) -> float:
        """Largest output magnitude applied so far."""
        return max((abs(s.value) for s in self.samples), default=0.0)

    @property
    def last_output(self) -> Optional[float]:
        return self.samples[-1].value if self.samples else None


class LoggingSignalSink:
    """
    SignalLogger replacement that writes signals to a stdlib logger.

    State labels are logged at INFO when they change; numeric signals
    are logged at DEBUG.
    """

    def __init__(self, logger_name: str = "swerve_sysid.signals"):
        self._logger = logging.getLogger(logger_name)
        self._last_strings = {}
        self.states: List[Tuple[str, str]] = []

    def write_string(self, name: str, value: str, *args, **kwargs) -> None:
        if self._last_strings.get(name) != value:
            self._last_strings[name] = value
            self.states.append((name, value))
            self._logger.info("%s = %s", name, value)

    def write_double(self, name: str, value: float, *args, **kwargs) -> None:
        self._logger.debug("%s = %.4f", name, value)


def run_dry_run(
    command: Command,
    duration: float,
    period: float = DEFAULT_PERIOD,
) -> int:
    """
    Run a command in the HAL simulation until it ends or duration elapses.

    Simulated time is paused and stepped one period per scheduler run,
    so the result does not depend on the host's speed. If the command is
    still running at the end it is cancelled, which drives zero output.
    The simulated DriverStation is enabled for the run; its enabled flag
    and the paused/running state of simulated time are restored afterwards.

    Args:
        command: Test command from SwerveCharacterization
        duration: Maximum simulated run time in seconds
        period: Scheduler period in seconds

    Returns:
        Number of scheduler iterations executed
    """
    if period <= 0:
        raise ValueError(f"period must be positive, got {period}")

    hal.initialize(500, 0)
    was_enabled = DriverStationSim.getEnabled()
    was_paused = isTimingPaused()

    DriverStationSim.setDsAttached(True)
    DriverStationSim.setEnabled(True)
    DriverStationSim.notifyNewData()

    scheduler = CommandScheduler.getInstance()
    pauseTiming()
    ticks = 0
    try:
        scheduler.schedule(command)
        while scheduler.isScheduled(command) and ticks * period < duration:
            scheduler.run()
            stepTiming(period)
            ticks += 1
    finally:
        scheduler.cancel(command)
        if not was_paused:
            resumeTiming()
        if not was_enabled:
            DriverStationSim.setEnabled(False)
            DriverStationSim.notifyNewData()

    logger.info("Dry run of %s finished after %d ticks", command.getName(), ticks)
    return ticks


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Swerve SysId dry run (HAL simulation, no hardware)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example:
    swerve-sysid-dryrun --routine rotation --test dynamic

Prints the control requests a routine would apply, so ramp rate,
step amplitude and the zero-output stop can be checked up front.
        """
    )
    parser.add_argument('--routine', '-r', default=RoutineKind.TRANSLATION.value,
                        choices=[kind.value for kind in RoutineKind],
                        help='Routine to run (default: translation)')
    parser.add_argument('--test', '-t', default='quasistatic',
                        choices=['quasistatic', 'dynamic'],
                        help='Test to run (default: quasistatic)')
    parser.add_argument('--direction', '-d', default='forward',
                        choices=['forward', 'reverse'],
                        help='Test direction (default: forward)')
    parser.add_argument('--duration', type=float, default=None,
                        help='Simulated seconds to run (default: routine timeout)')
    parser.add_argument('--period', type=float, default=DEFAULT_PERIOD,
                        help=f'Scheduler period in seconds (default: {DEFAULT_PERIOD})')
    parser.add_argument('--hoot', action='store_true',
                        help='Log signals with phoenix6 SignalLogger instead of the console')
    parser.add_argument('--log-level', default='WARNING', type=str.upper,
                        choices=LOG_LEVELS,
                        help='Logging level (default: WARNING)')
    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse and check dry-run arguments; exits with usage on bad values."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.period <= 0:
        parser.error(f"--period must be positive, got {args.period}")
    if args.duration is not None and args.duration <= 0:
        parser.error(f"--duration must be positive, got {args.duration}")
    return args


def run_dryrun_cli(argv: Optional[Sequence[str]] = None) -> int:
    """
    Command-line interface for the dry run.

    Entry point for `swerve-sysid-dryrun` command.
    """
    args = parse_args(argv)
    configure_logging(args.log_level)

    kind = RoutineKind(args.routine)
    direction = Direction.kForward if args.direction == 'forward' else Direction.kReverse
    duration = args.duration if args.duration is not None else ROUTINE_SPECS[kind].effective_timeout

    # Timer needs the HAL before the drivetrain is created
    hal.initialize(500, 0)
    sink = SignalLogger if args.hoot else LoggingSignalSink()
    drivetrain = DryRunDrivetrain()
    characterization = SwerveCharacterization(drivetrain.set_control, drivetrain, signal_logger=sink)
    characterization.set_active_routine(kind)

    if args.test == 'quasistatic':
        command = characterization.quasistatic(direction)
    else:
        command = characterization.dynamic(direction)

    print(f"\n{'='*50}")
    print(f"SYSID DRY RUN: {kind.value} {args.test} {args.direction}")
    print(f"  Tunes:        {ROUTINE_SPECS[kind].description}")
    print(f"{'='*50}")

    if args.hoot:
        SignalLogger.start()
    try:
        ticks = run_dry_run(command, duration=duration, period=args.period)
    finally:
        if args.hoot:
            SignalLogger.stop()

    print(f"  Ticks:        {ticks}")
    print(f"  Samples:      {len(drivetrain.samples)}")
    print(f"  Peak output:  {drivetrain.peak_output:.3f}")
    if drivetrain.last_output is not None:
        print(f"  Final output: {drivetrain.last_output:.3f}")
    if isinstance(sink, LoggingSignalSink):
        print("  States:       " + " -> ".join(value for _, value in sink.states))

    return 0


if __name__ == '__main__':
    raise SystemExit(run_dryrun_cli())
