from statespace.engine.simulation.driver import SimulationDriver
from statespace.engine.simulation.forces import ForceSimulator

__all__ = ["ForceSimulator", "SimulationDriver"]
