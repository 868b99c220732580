"""
Shared fixtures: HAL simulation, simulated timing and a clean scheduler.
"""

import hal
import pytest
import commands2
from wpilib.simulation import DriverStationSim, pauseTiming, resumeTiming, stepTiming


@pytest.fixture(scope="session", autouse=True)
def hal_sim():
    """Initialize the HAL simulation once for the whole session."""
    assert hal.initialize(500, 0)
    yield


@pytest.fixture
def scheduler():
    """Enabled robot and an empty CommandScheduler."""
    DriverStationSim.setDsAttached(True)
    DriverStationSim.setEnabled(True)
    DriverStationSim.notifyNewData()

    sched = commands2.CommandScheduler.getInstance()
    sched.cancelAll()
    sched.enable()

    yield sched

    sched.cancelAll()
    sched.unregisterAllSubsystems()
    DriverStationSim.setEnabled(False)
    DriverStationSim.notifyNewData()


@pytest.fixture
def sim_time():
    """Pause simulated time; tests advance it with the returned step function."""
    pauseTiming()
    yield stepTiming
    resumeTiming()
