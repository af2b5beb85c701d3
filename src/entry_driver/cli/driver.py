"""Command-line driver for a single entry point.

A :class:`Driver` is built once per entry point.  Construction derives
the option schema and the :mod:`argparse` parser; both are read-only
afterwards, so one driver can serve any number of runs.

Each run moves through a fixed sequence of states::

    IDLE → PARSING → INVOKING → FORMATTING → DONE     (success)
    IDLE → PARSING → INVOKING → DONE                  (entry point failed)
    IDLE → PARSING → REPORTING_ERROR → DONE           (command line rejected)
    IDLE → PARSING → DONE                             (--help / --version)

The entry point is never called unless every option parsed cleanly.

Architecture notes
------------------
* :meth:`Driver.run` performs no stream I/O; it returns an
  :class:`~entry_driver.core.models.ExitResult`.
* :meth:`Driver.main` writes the result to stdout and diagnostics to
  stderr, and returns the exit code.
* :func:`cli` is the process error boundary — the only place that calls
  :func:`sys.exit`.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Mapping, Sequence
from typing import Any, NoReturn, TextIO

from entry_driver.cli import exit_codes
from entry_driver.cli.console import console
from entry_driver.cli.help import (
    HelpFormatter,
    builtin_help,
    description_text,
    option_help,
    render_help,
    usage_text,
    value_syntax,
)
from entry_driver.core.formatting import format_value
from entry_driver.core.models import (
    Arity,
    DriverConfig,
    DriverState,
    EntryPoint,
    ExitResult,
    OptionSchema,
    OptionSpec,
    ParsedArguments,
)
from entry_driver.core.naming import DEFAULT_BUILTINS, build_schema
from entry_driver.core.parsing import parse_tokens
from entry_driver.core.protocols import Simulator
from entry_driver.exceptions import (
    EntryDriverError,
    InvocationError,
    MissingRequiredValue,
    ParseError,
    RepeatedOptionError,
    SchemaError,
    TypeConversionError,
    UnknownOption,
    ValueFormatError,
)
from entry_driver.infra.local_simulator import LocalSimulator
from entry_driver.version import __version__

_SIMULATOR_DEST = "_builtin_simulator"

_NARGS: dict[Arity, str | None] = {
    Arity.SINGLE: None,
    Arity.FLAG: "?",
    Arity.GREEDY: "+",
}


class BuiltinRequest(Exception):
    """Raised while parsing when ``--help`` or ``--version`` is given.

    Not an error: the driver prints :attr:`text` and exits successfully.
    """

    def __init__(self, key: str, text: str) -> None:
        super().__init__(key)
        self.key: str = key
        self.text: str = text


# ---------------------------------------------------------------------------
# argparse plumbing
# ---------------------------------------------------------------------------

class _DriverArgumentParser(argparse.ArgumentParser):
    """Argument parser that raises instead of printing and exiting.

    With a driver schema argparse only reaches :meth:`error` when an
    option is given without the value it needs.
    """

    help_flag: str | None = None
    """Flag that prints help, shown in hints; ``None`` when omitted."""

    def _parse_optional(self, arg_string: str) -> Any:
        # Only registered flags are options; ``-1e5``, ``-Infinity`` and
        # ``-5..3`` are values.
        if arg_string.startswith(tuple(self.prefix_chars)):
            option_string = arg_string.split("=", 1)[0]
            if option_string not in self._option_string_actions:
                return None
        return super()._parse_optional(arg_string)

    def error(self, message: str) -> NoReturn:
        raise MissingRequiredValue(
            f"{message[:1].upper()}{message[1:]}.",
            hint=_help_hint(self),
        )


def _help_hint(parser: _DriverArgumentParser) -> str | None:
    flag = parser.help_flag
    return f"Run with {flag} to list the available options." if flag else None


def _as_tokens(values: str | Sequence[str] | None) -> list[str]:
    if values is None:
        return []
    if isinstance(values, str):
        return [values]
    return list(values)


class _ParameterAction(argparse.Action):
    """Parse an option's tokens as its parameter's domain type."""

    def __init__(
        self,
        option_strings: Sequence[str],
        dest: str,
        *,
        option: OptionSpec,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            option_strings,
            dest,
            nargs=_NARGS[option.arity],
            default=argparse.SUPPRESS,
            help=option_help(option),
            **kwargs,
        )
        self.option: OptionSpec = option
        self.value_syntax: str = value_syntax(option)

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Any,
        option_string: str | None = None,
    ) -> None:
        if hasattr(namespace, self.dest):
            raise RepeatedOptionError(
                f"Option {option_string} was given more than once.",
            )
        value = parse_tokens(self.option.parameter.type, _as_tokens(values))
        setattr(namespace, self.dest, value)


class _BuiltinAction(argparse.Action):
    """``--help`` / ``--version``: stop parsing and report the request."""

    def __init__(
        self,
        option_strings: Sequence[str],
        dest: str,
        *,
        key: str,
        text: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(option_strings, dest, nargs=0, default=argparse.SUPPRESS, **kwargs)
        self.key: str = key
        self.text: str | None = text

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Any,
        option_string: str | None = None,
    ) -> None:
        text = self.text if self.text is not None else render_help(parser)
        raise BuiltinRequest(self.key, text)


class _SimulatorAction(argparse.Action):
    """Select a registered simulator by name."""

    value_syntax: str = "<name>"

    def __init__(
        self,
        option_strings: Sequence[str],
        dest: str,
        *,
        names: Sequence[str],
        **kwargs: Any,
    ) -> None:
        super().__init__(option_strings, dest, default=argparse.SUPPRESS, **kwargs)
        self.names: tuple[str, ...] = tuple(names)

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Any,
        option_string: str | None = None,
    ) -> None:
        if hasattr(namespace, self.dest):
            raise RepeatedOptionError(
                f"Option {option_string} was given more than once.",
            )
        if values not in self.names:
            raise TypeConversionError(
                "Simulator",
                values,
                hint=f"Available simulators: {', '.join(self.names)}.",
            )
        setattr(namespace, self.dest, values)


# ---------------------------------------------------------------------------
# Driver
# ---------------------------------------------------------------------------

class Driver:
    """Parse arguments for, run, and print the result of an entry point.

    Parameters
    ----------
    entry_point:
        The callable and its typed signature.
    config:
        Driver settings.  Defaults to :class:`DriverConfig()`.
    simulators:
        Execution backends by name.  Defaults to a single
        :class:`~entry_driver.infra.local_simulator.LocalSimulator`
        registered as ``local``.

    Raises
    ------
    SchemaError
        If the entry point's parameters cannot be mapped to options, or
        the configured default simulator is not registered.
    """

    def __init__(
        self,
        entry_point: EntryPoint,
        *,
        config: DriverConfig | None = None,
        simulators: Mapping[str, Simulator] | None = None,
    ) -> None:
        self._entry_point: EntryPoint = entry_point
        self._config: DriverConfig = config or DriverConfig()
        self._simulators: dict[str, Simulator] = (
            dict(simulators) if simulators is not None else {LocalSimulator.name: LocalSimulator()}
        )
        if self._config.default_simulator not in self._simulators:
            raise SchemaError(
                f"Default simulator {self._config.default_simulator!r} is not registered.",
                hint=f"Registered simulators: {', '.join(self._simulators) or 'none'}.",
            )
        self._schema: OptionSchema = build_schema(
            entry_point.parameters,
            DEFAULT_BUILTINS,
            policy=self._config.shadow_policy,
            rename_prefix=self._config.rename_prefix,
        )
        self._parser: _DriverArgumentParser = self._build_parser()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def entry_point(self) -> EntryPoint:
        return self._entry_point

    @property
    def schema(self) -> OptionSchema:
        return self._schema

    @property
    def prog(self) -> str:
        return self._config.prog or self._entry_point.name

    def format_help(self) -> str:
        """Full help text, as printed by the help option."""
        return render_help(self._parser)

    # ------------------------------------------------------------------
    # Parser construction
    # ------------------------------------------------------------------

    def _build_parser(self) -> _DriverArgumentParser:
        parser = _DriverArgumentParser(
            prog=self.prog,
            usage=usage_text(self._schema),
            description=description_text(self._entry_point.summary),
            formatter_class=HelpFormatter,
            add_help=False,
            allow_abbrev=False,
        )
        if self._schema.options:
            group = parser.add_argument_group("Options")
            for option in self._schema.options:
                group.add_argument(
                    *option.flags,
                    action=_ParameterAction,
                    dest=option.parameter.name,
                    option=option,
                )

        builtins = parser.add_argument_group("Driver options")
        for binding in self._schema.builtins:
            if binding.omitted:
                continue
            key = binding.option.key
            if key == "simulator":
                builtins.add_argument(
                    *binding.flags,
                    action=_SimulatorAction,
                    dest=_SIMULATOR_DEST,
                    names=tuple(self._simulators),
                    help=builtin_help(
                        binding,
                        self._simulators,
                        self._config.default_simulator,
                    ),
                )
                continue
            text = None
            if key == "version":
                text = f"{self.prog} {self._config.version or __version__}\n"
            elif key == "help":
                parser.help_flag = binding.flags[0]
            builtins.add_argument(
                *binding.flags,
                action=_BuiltinAction,
                dest=f"_builtin_{key}",
                key=key,
                text=text,
                help=builtin_help(binding),
            )
        return parser

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    def parse(self, argv: Sequence[str]) -> ParsedArguments:
        """Parse *argv* into one typed value per parameter.

        Raises
        ------
        BuiltinRequest
            When a help or version option is given.
        UnknownOption
            For an unrecognized flag or a stray value token.
        MissingRequiredValue
            When an option, or an option's value, is missing.
        RepeatedOptionError
            When an option is given twice.
        TypeConversionError, RangeGrammarError
            When a value does not convert to its parameter's type.
        """
        namespace, extras = self._parser.parse_known_args(list(argv))
        if extras:
            raise UnknownOption(
                f"Unrecognized argument(s): {' '.join(extras)}",
                hint=_help_hint(self._parser),
            )

        missing = [
            option.flags[0]
            for option in self._schema.options
            if not hasattr(namespace, option.parameter.name)
        ]
        if missing:
            raise MissingRequiredValue(
                f"Missing required option(s): {', '.join(missing)}",
                hint=_help_hint(self._parser),
            )

        return ParsedArguments(
            values={
                option.parameter.name: getattr(namespace, option.parameter.name)
                for option in self._schema.options
            },
            simulator=getattr(namespace, _SIMULATOR_DEST, self._config.default_simulator),
        )

    def invoke(self, arguments: ParsedArguments) -> Any:
        """Run the entry point on the selected simulator.

        Raises
        ------
        InvocationError
            When the entry point, or the simulator running it, fails.
        """
        simulator = self._simulators[arguments.simulator]
        try:
            return simulator.run(self._entry_point, arguments.values)
        except InvocationError:
            raise
        except Exception as exc:
            raise InvocationError(
                f"Simulator {arguments.simulator!r} failed: {exc}",
            ) from exc

    def format_result(self, value: Any) -> str:
        """Canonical text for the entry point's return value.

        Raises
        ------
        InvocationError
            When *value* does not match the declared return type.
        """
        try:
            return format_value(self._entry_point.return_type, value)
        except ValueFormatError as exc:
            raise InvocationError(
                f"{self._entry_point.name} returned a value that does not "
                f"match its return type: {exc}",
            ) from exc

    # ------------------------------------------------------------------
    # Runs
    # ------------------------------------------------------------------

    def run(self, argv: Sequence[str] | None = None) -> ExitResult:
        """Execute one run without touching the process streams.

        Parameters
        ----------
        argv:
            Explicit argument list.  When ``None`` (default),
            ``sys.argv[1:]`` is used.
        """
        args = sys.argv[1:] if argv is None else list(argv)
        states = [DriverState.IDLE, DriverState.PARSING]

        try:
            parsed = self.parse(args)
        except BuiltinRequest as request:
            states.append(DriverState.DONE)
            return ExitResult(exit_codes.SUCCESS, request.text, None, tuple(states))
        except ParseError as exc:
            states += [DriverState.REPORTING_ERROR, DriverState.DONE]
            return ExitResult(exit_codes.PARSE_ERROR, "", exc, tuple(states))

        states.append(DriverState.INVOKING)
        try:
            value = self.invoke(parsed)
            states.append(DriverState.FORMATTING)
            output = self.format_result(value)
        except InvocationError as exc:
            states.append(DriverState.DONE)
            return ExitResult(exit_codes.INVOCATION_ERROR, "", exc, tuple(states))

        states.append(DriverState.DONE)
        return ExitResult(exit_codes.SUCCESS, output, None, tuple(states))

    def main(
        self,
        argv: Sequence[str] | None = None,
        *,
        stdout: TextIO | None = None,
    ) -> int:
        """Run once, write output and diagnostics, return the exit code."""
        result = self.run(argv)
        if result.error is not None:
            console.error(result.error)
        if result.output:
            stream = stdout if stdout is not None else sys.stdout
            stream.write(result.output)
            stream.flush()
        return result.code


# ---------------------------------------------------------------------------
# Module-level entry points
# ---------------------------------------------------------------------------

def main(
    entry_point: EntryPoint,
    argv: Sequence[str] | None = None,
    *,
    config: DriverConfig | None = None,
    simulators: Mapping[str, Simulator] | None = None,
) -> int:
    """Build a driver for *entry_point* and run it once.

    Returns
    -------
    int
        OS process exit code.
    """
    driver = Driver(entry_point, config=config, simulators=simulators)
    return driver.main(argv)


def cli(
    entry_point: EntryPoint,
    *,
    config: DriverConfig | None = None,
    simulators: Mapping[str, Simulator] | None = None,
) -> None:
    """Top-level error boundary for a generated program's ``__main__``.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main(entry_point, config=config, simulators=simulators)
        sys.exit(code)
    except EntryDriverError as exc:
        console.error(exc)
        sys.exit(exit_codes.UNEXPECTED_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]", "\nAborted by user.")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.",
            "Unexpected error. Please report this issue.",
        )
        console.error(exc)
        sys.exit(exit_codes.UNEXPECTED_ERROR)
