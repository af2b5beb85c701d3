"""entry-driver — command-line driver for typed program entry points.

Builds an option schema from an entry point's typed parameter list,
parses process arguments into domain values, runs the entry point and
prints its canonical result.
"""

from entry_driver.cli.driver import Driver, cli, main
from entry_driver.core.models import DriverConfig, EntryPoint, ParameterSpec, ShadowPolicy
from entry_driver.core.types import DomainType, Pauli, RangeValue, Result
from entry_driver.version import __version__

__all__: list[str] = [
    "DomainType",
    "Driver",
    "DriverConfig",
    "EntryPoint",
    "ParameterSpec",
    "Pauli",
    "RangeValue",
    "Result",
    "ShadowPolicy",
    "__version__",
    "cli",
    "main",
]
