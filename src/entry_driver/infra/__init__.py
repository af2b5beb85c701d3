"""Infrastructure layer — execution backends.

This layer runs entry points.  Every exception raised by an entry point
must be caught here and re-raised as an
:class:`~entry_driver.exceptions.InvocationError`.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from entry_driver.infra.local_simulator import LocalSimulator

__all__: list[str] = [
    "LocalSimulator",
]
