"""Typed errors for varbin.

Single source of truth for error kinds and exit codes lives here.

Policy:
- Errors are small and boring: every failure is a caller-input error.
- The CLI maps errors to stable exit codes (see EXIT_* constants).
- docs/exit_codes.md is generated from this module (scripts/gen_exit_codes_md.py).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# -------------------------
# Exit codes (single source)
# -------------------------

EXIT_OK = 0
EXIT_USAGE = 2
EXIT_GENERIC = 10
EXIT_MALFORMED_INPUT = 11
EXIT_INVALID_LENGTH = 12
EXIT_OUT_OF_RANGE = 13


class ErrorKind(str, Enum):
    GENERIC = "GENERIC"
    USAGE = "USAGE"
    MALFORMED_INPUT = "MALFORMED_INPUT"
    INVALID_LENGTH = "INVALID_LENGTH"
    OUT_OF_RANGE = "OUT_OF_RANGE"


@dataclass(frozen=True, slots=True)
class ExitCodeInfo:
    code: int
    name: str
    description: str


EXIT_CODES: tuple[ExitCodeInfo, ...] = (
    ExitCodeInfo(EXIT_OK, "OK", "Success"),
    ExitCodeInfo(EXIT_USAGE, "USAGE", "Usage/config error (unknown function, no overload, invalid call spec)"),
    ExitCodeInfo(EXIT_GENERIC, "GENERIC", "Generic failure (unexpected error)"),
    ExitCodeInfo(
        EXIT_MALFORMED_INPUT,
        "MALFORMED_INPUT",
        "Decode input violates the text encoding (base64 alphabet/padding, hex length/digit)",
    ),
    ExitCodeInfo(EXIT_INVALID_LENGTH, "INVALID_LENGTH", "Fixed-width decode got the wrong number of bytes"),
    ExitCodeInfo(EXIT_OUT_OF_RANGE, "OUT_OF_RANGE", "Integer outside the signed 64-bit range"),
)

_EXIT_CODE_BY_CODE: dict[int, ExitCodeInfo] = {e.code: e for e in EXIT_CODES}


def exit_code_info(code: int) -> ExitCodeInfo | None:
    return _EXIT_CODE_BY_CODE.get(int(code))


def render_exit_codes_markdown() -> str:
    """Render docs/exit_codes.md content."""
    lines: list[str] = []
    lines.append("# Exit codes\n")
    lines.append("> GENERATED FILE — do not edit manually.\n")
    lines.append("> Source of truth: `src/varbin/errors.py` (EXIT_CODES).\n")
    lines.append("> Regenerate: `python scripts/gen_exit_codes_md.py`.\n\n")
    lines.append("These are the CLI exit codes you can rely on.\n\n")
    lines.append("| Code | Name | Meaning |\n")
    lines.append("|---:|---|---|\n")
    for e in sorted(EXIT_CODES, key=lambda x: x.code):
        lines.append(f"| {e.code} | `{e.name}` | {e.description} |\n")
    lines.append("\n## Notes\n")
    lines.append("- Every library error extends `VarbinError` and carries `kind` and `exit_code`.\n")
    lines.append("- `--debug` re-raises errors to show full stack traces.\n")
    lines.append(
        "- `batch` keeps evaluating after a failed call and returns the exit code of the first failure.\n"
    )
    return "".join(lines)


# ---------------
# Typed exceptions
# ---------------


class VarbinError(Exception):
    """Base error for varbin."""

    kind: ErrorKind = ErrorKind.GENERIC
    exit_code: int = EXIT_GENERIC


class UsageError(VarbinError):
    kind = ErrorKind.USAGE
    exit_code = EXIT_USAGE


class MalformedInput(VarbinError):
    kind = ErrorKind.MALFORMED_INPUT
    exit_code = EXIT_MALFORMED_INPUT


class InvalidLength(VarbinError):
    """Fixed-width input of the wrong size."""

    kind = ErrorKind.INVALID_LENGTH
    exit_code = EXIT_INVALID_LENGTH

    def __init__(self, actual: int, expected: int):
        super().__init__(f"expected {expected}-byte input, but got instead: {actual}")
        self.actual = actual
        self.expected = expected


class OutOfRange(VarbinError):
    kind = ErrorKind.OUT_OF_RANGE
    exit_code = EXIT_OUT_OF_RANGE
