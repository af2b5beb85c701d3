"""Execution backend protocol.

The driver looks simulators up by name and calls :meth:`Simulator.run`;
it never imports a concrete backend other than the bundled default.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from entry_driver.core.models import EntryPoint


class Simulator(Protocol):
    """Contract for execution backends selected by ``--simulator``.

    Any object that implements :meth:`run` with the correct signature
    satisfies this protocol structurally (no explicit inheritance
    required).
    """

    def run(self, entry_point: EntryPoint, arguments: Mapping[str, Any]) -> Any:
        """Run *entry_point* with the parsed *arguments* and return its value.

        *arguments* maps every declared parameter name to its typed
        value.  Implementations must map all exceptions raised by the
        entry point to :class:`~entry_driver.exceptions.InvocationError`.

        Raises
        ------
        InvocationError
            When the entry point fails for any reason.
        """
        ...  # pragma: no cover
