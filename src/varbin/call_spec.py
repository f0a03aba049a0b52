"""Call spec (v1) for varbin.

Goal: make a batch of scalar function calls reproducible (CLI, CI fixtures).

This module intentionally stays *small* and strict:
  - JSON only ('@file.json' or inline)
  - explicit schema id
  - unknown keys are rejected
"""

from __future__ import annotations

import base64
import binascii
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from varbin.errors import UsageError

SPEC_ID_V1 = "varbin.calls.v1"

INPUT_FORMATS = ("text", "bytes", "hex", "base64", "int")
OUTPUT_FORMATS = ("auto", "hex", "base64", "text")


class CallSpecError(UsageError):
    pass


def _load_json_arg(spec_arg: str) -> dict[str, Any]:
    s = spec_arg.strip()
    if not s:
        raise CallSpecError("calls: empty argument")

    if s.startswith("@"):
        p = Path(s[1:]).expanduser()
        if not p.exists() or not p.is_file():
            raise CallSpecError(f"calls: file not found: {p}")
        raw = p.read_text(encoding="utf-8")
        try:
            obj = json.loads(raw)
        except ValueError as e:
            raise CallSpecError(f"calls: invalid JSON in {p}: {e}") from e
        if not isinstance(obj, dict):
            raise CallSpecError(f"calls: the JSON in {p} must be an object")
        return obj

    try:
        obj = json.loads(s)
    except ValueError as e:
        raise CallSpecError(f"calls: invalid inline JSON: {e}") from e
    if not isinstance(obj, dict):
        raise CallSpecError("calls: inline JSON must be an object")
    return obj


def parse_input(raw: Any, input_format: str) -> bytes | str | int:
    """Turn a JSON/CLI literal into a typed argument (VARCHAR, VARBINARY or BIGINT)."""
    fmt = input_format.strip().lower()
    if fmt == "int":
        if isinstance(raw, bool):
            raise CallSpecError("input: bool is not an int")
        if isinstance(raw, int):
            return raw
        if isinstance(raw, str):
            try:
                return int(raw.strip(), 10)
            except ValueError as e:
                raise CallSpecError(f"input: not a decimal integer: {raw!r}") from e
        raise CallSpecError("input: expected an integer")

    if not isinstance(raw, str):
        raise CallSpecError(f"input: expected a string for input_format={fmt!r}")
    if fmt == "text":
        return raw
    if fmt == "bytes":
        return raw.encode("utf-8")
    if fmt == "hex":
        try:
            return bytes.fromhex(raw)
        except ValueError as e:
            raise CallSpecError(f"input: invalid hex literal: {e}") from e
    if fmt == "base64":
        try:
            return base64.b64decode(raw, validate=True)
        except binascii.Error as e:
            raise CallSpecError(f"input: invalid base64 literal: {e}") from e
    raise CallSpecError(f"input_format not supported: {input_format!r} (one of {', '.join(INPUT_FORMATS)})")


def _optional_choice(obj: dict[str, Any], key: str, choices: tuple[str, ...], default: str) -> str:
    v = obj.get(key, default)
    if not isinstance(v, str) or v.strip().lower() not in choices:
        raise CallSpecError(f"calls: field '{key}' must be one of {', '.join(choices)}")
    return v.strip().lower()


@dataclass(frozen=True)
class CallV1:
    """A single scalar function call."""

    function: str
    value: bytes | str | int
    output_format: str = "auto"


@dataclass(frozen=True)
class CallSpecV1:
    name: str
    calls: tuple[CallV1, ...]


def _parse_call(i: int, obj: Any) -> CallV1:
    if not isinstance(obj, dict):
        raise CallSpecError(f"calls[{i}]: must be an object")

    allowed = {"function", "input", "input_format", "output_format"}
    extra = sorted(set(obj.keys()) - allowed)
    if extra:
        raise CallSpecError(f"calls[{i}]: unsupported keys: {', '.join(extra)}")

    function = obj.get("function")
    if not isinstance(function, str) or not function.strip():
        raise CallSpecError(f"calls[{i}]: field 'function' required (string)")
    if "input" not in obj:
        raise CallSpecError(f"calls[{i}]: field 'input' required")

    input_format = _optional_choice(obj, "input_format", INPUT_FORMATS, "text")
    output_format = _optional_choice(obj, "output_format", OUTPUT_FORMATS, "auto")
    try:
        value = parse_input(obj["input"], input_format)
    except CallSpecError as e:
        raise CallSpecError(f"calls[{i}]: {e}") from e

    return CallV1(function=function.strip().lower(), value=value, output_format=output_format)


def load_call_spec(spec_arg: str) -> CallSpecV1:
    """Load and validate a call spec.

    spec_arg:
      - '@file.json'
      - inline JSON object
    """
    obj = _load_json_arg(spec_arg)

    allowed = {"spec", "name", "calls"}
    extra = sorted(set(obj.keys()) - allowed)
    if extra:
        raise CallSpecError(f"calls: unsupported keys: {', '.join(extra)}")

    spec_id = obj.get("spec")
    if spec_id != SPEC_ID_V1:
        raise CallSpecError(f"calls: unsupported spec: {spec_id!r} (expected {SPEC_ID_V1!r})")

    name = obj.get("name")
    if name is None:
        name = "calls"
    if not isinstance(name, str) or not name.strip():
        raise CallSpecError("calls: field 'name' must be a string")

    calls = obj.get("calls")
    if not isinstance(calls, list) or not calls:
        raise CallSpecError("calls: field 'calls' must be a non-empty list")

    return CallSpecV1(name=name.strip(), calls=tuple(_parse_call(i, c) for i, c in enumerate(calls)))
