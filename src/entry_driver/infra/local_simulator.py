"""In-process implementation of :class:`~entry_driver.core.protocols.Simulator`.

Runs the entry point's callable directly in the current interpreter.
Every exception the callable raises is caught here and re-raised as
:class:`~entry_driver.exceptions.InvocationError` — nothing raw escapes
the infrastructure boundary.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from entry_driver.core.models import EntryPoint
from entry_driver.exceptions import EntryDriverError, InvocationError


class LocalSimulator:
    """Concrete :class:`Simulator` calling the entry point with keywords.

    Usage::

        simulator = LocalSimulator()
        value = simulator.run(entry_point, {"n": 42})
    """

    name: str = "local"

    def run(self, entry_point: EntryPoint, arguments: Mapping[str, Any]) -> Any:
        """Call ``entry_point.callable(**arguments)``.

        Raises
        ------
        InvocationError
            When the callable raises.  The original exception is chained.
        """
        try:
            return entry_point.callable(**arguments)
        except InvocationError:
            raise
        except EntryDriverError as exc:
            raise InvocationError(str(exc), hint=exc.hint) from exc
        except Exception as exc:
            raise InvocationError(
                f"{entry_point.name} failed: {type(exc).__name__}: {exc}",
            ) from exc
