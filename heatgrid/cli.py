"""Command line entry point of the heat simulation."""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass
from typing import Optional, Sequence

from .heatsim import SimulationError, run

PROG = "heatsim"

_DEFAULT_ITERATIONS = 110
_OUTPUT_NAME_LIMIT = 127
_LONG_MAX = 2**63 - 1
_LONG_MIN = -(2**63)
_LEADING_INTEGER = re.compile(r"\s*([+-]?[0-9]+)")

_HELP = f"""Usage: {PROG} [OPTION]...

Options:
  --iterations N number of iterations to perform
  --dim-x N      x dimension of the computation
  --dim-y N      y dimension of the computation
  --input FILE   input image
  --output FILE  output file
  --help         show this help"""

_NUMERIC_OPTIONS = {"--iterations": "iterations", "--dim-x": "dim_x", "--dim-y": "dim_y"}
_PATH_OPTIONS = {"--input": "input_path", "--output": "output_path"}


class _UsageError(ValueError):
    """A command line that cannot be understood."""


@dataclass(frozen=True)
class _Options:
    input_path: Optional[str] = None
    output_path: Optional[str] = None
    iterations: int = _DEFAULT_ITERATIONS
    dim_x: int = 1
    dim_y: int = 1
    show_help: bool = False


def _positive(option: str, arg: str) -> int:
    match = _LEADING_INTEGER.match(arg)
    number = int(match.group(1)) if match else 0
    number = max(_LONG_MIN, min(_LONG_MAX, number))
    if number in (_LONG_MIN, _LONG_MAX):
        raise _UsageError(f"could not convert number '{arg}' for option '{option}'")
    if number <= 0:
        raise _UsageError(f"option '{option}' requires positive number, got '{arg}'")
    return number


def parse_args(argv: Optional[Sequence[str]] = None) -> _Options:
    """Parse the command line options; raise ValueError on a bad command line."""
    args = sys.argv[1:] if argv is None else list(argv)
    values: dict = {
        "input_path": None,
        "output_path": None,
        "iterations": _DEFAULT_ITERATIONS,
        "dim_x": 1,
        "dim_y": 1,
    }
    items = iter(args)
    for arg in items:
        if arg == "--help":
            return _Options(**values, show_help=True)
        if arg not in _NUMERIC_OPTIONS and arg not in _PATH_OPTIONS:
            raise _UsageError(f"unrecognized option '{arg}'")
        value = next(items, None)
        if value is None:
            raise _UsageError(f"option '{arg}' requires an argument")
        if arg in _NUMERIC_OPTIONS:
            values[_NUMERIC_OPTIONS[arg]] = _positive(arg, value)
        else:
            values[_PATH_OPTIONS[arg]] = value

    if values["input_path"] is None:
        raise _UsageError("missing option '--input'")
    if values["output_path"] is None:
        output = f"{values['input_path']}.output.png"
        if len(output) >= _OUTPUT_NAME_LIMIT:
            raise ValueError("failed to format output filename")
        values["output_path"] = output
    return _Options(**values)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the simulation described by the command line; return the exit status."""
    try:
        options = parse_args(argv)
    except _UsageError as exc:
        print(f"{PROG}: {exc}", file=sys.stderr)
        print(f"Try '{PROG} --help' for more information.", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1

    if options.show_help:
        print(_HELP)
        return 0

    print("configurations:")
    print(f" - {options.iterations} iterations")
    print(f" - {options.dim_x} node{'' if options.dim_x == 1 else 's'} in X")
    print(f" - {options.dim_y} node{'' if options.dim_y == 1 else 's'} in Y")
    print(f" - input file is '{options.input_path}'")
    print(f" - output file is '{options.output_path}'")

    try:
        run(options.input_path, options.output_path, options.dim_x, options.dim_y,
            options.iterations)
    except SimulationError as exc:
        print(f"failed to run simulation: {exc}", file=sys.stderr)
        return 1
    return 0