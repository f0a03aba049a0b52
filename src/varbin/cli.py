"""varbin CLI.

This is the stable CLI entrypoint (console-script: ``varbin``).

UX policy:
  - ``list`` prints the registered scalar functions (name, arg type, return type).
  - ``call`` invokes one function on one literal.
  - ``batch`` evaluates a call spec (varbin.calls.v1), one output line per call.
  - Binary results print as uppercase hex unless --output-format says otherwise.
  - --json emits one JSON object per result (stdout on success, stderr on error for ``call``).
"""

from __future__ import annotations

import argparse
import base64
import json
import sys
from typing import Any

from varbin.call_spec import INPUT_FORMATS, OUTPUT_FORMATS, load_call_spec, parse_input
from varbin.errors import EXIT_OK, VarbinError
from varbin.registry import DEFAULT_REGISTRY
from varbin.result import Err, Ok, Result

RESULT_SCHEMA = "varbin.result.v1"


def _pkg_version() -> str:
    try:
        from importlib.metadata import PackageNotFoundError, version

        try:
            return version("varbin")
        except PackageNotFoundError:
            # running from a source checkout without metadata
            return "0+unknown"
    except Exception:
        return "0+unknown"


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--debug", action="store_true", help="Show stack traces on errors")


def format_value(value: Any, output_format: str = "auto") -> str:
    if isinstance(value, (bytes, bytearray)):
        b = bytes(value)
        if output_format in ("auto", "hex"):
            return b.hex().upper()
        if output_format == "base64":
            return base64.b64encode(b).decode("ascii")
        if output_format == "text":
            return b.decode("utf-8", errors="backslashreplace")
        raise ValueError(f"output format not supported: {output_format!r}")
    return str(value)


def _result_obj(function: str, res: Result, output_format: str) -> dict[str, Any]:
    if isinstance(res, Err):
        return {
            "schema": RESULT_SCHEMA,
            "ok": False,
            "function": function,
            "error": {"kind": res.kind.value, "message": res.message},
        }
    return {
        "schema": RESULT_SCHEMA,
        "ok": True,
        "function": function,
        "value": format_value(res.value, output_format),
    }


def _cmd_list(*, as_json: bool) -> int:
    sigs = DEFAULT_REGISTRY.signatures()
    if as_json:
        print(json.dumps([f.to_dict() for f in sigs], ensure_ascii=False, separators=(",", ":")))
        return EXIT_OK
    for f in sigs:
        print(f"{f.signature():<48} {f.description}")
    return EXIT_OK


def _cmd_call(name: str, literal: str, *, input_format: str, output_format: str, as_json: bool) -> int:
    value = parse_input(literal, input_format)
    if not as_json:
        print(format_value(DEFAULT_REGISTRY.invoke(name, value), output_format))
        return EXIT_OK

    function = name.strip().lower()
    try:
        out = DEFAULT_REGISTRY.invoke(name, value)
    except VarbinError as e:
        obj = _result_obj(function, Err.from_error(e), output_format)
        obj["error"]["exit_code"] = e.exit_code
        print(json.dumps(obj, ensure_ascii=False, sort_keys=True), file=sys.stderr)
        return e.exit_code
    obj = _result_obj(function, Ok(out), output_format)
    print(json.dumps(obj, ensure_ascii=False, separators=(",", ":")))
    return EXIT_OK


def _cmd_batch(spec_arg: str, *, as_json: bool) -> int:
    spec = load_call_spec(spec_arg)
    rc = EXIT_OK
    for call in spec.calls:
        try:
            value = DEFAULT_REGISTRY.invoke(call.function, call.value)
        except VarbinError as e:
            if rc == EXIT_OK:
                rc = e.exit_code
            if as_json:
                obj = _result_obj(call.function, Err.from_error(e), call.output_format)
                obj["error"]["exit_code"] = e.exit_code
                print(json.dumps(obj, ensure_ascii=False, separators=(",", ":")))
            else:
                print(f"{call.function}: ERROR {e.kind.value}: {e}")
            continue

        if as_json:
            obj = _result_obj(call.function, Ok(value), call.output_format)
            print(json.dumps(obj, ensure_ascii=False, separators=(",", ":")))
        else:
            print(f"{call.function}: {format_value(value, call.output_format)}")
    return rc


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="varbin", description="Binary codec & digest scalar functions")
    p.add_argument("--version", action="version", version=f"%(prog)s {_pkg_version()}")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_list = sub.add_parser("list", help="List registered scalar functions")
    p_list.add_argument("--json", action="store_true", help="Machine-readable output")
    _add_common_args(p_list)

    p_call = sub.add_parser("call", help="Invoke one scalar function")
    p_call.add_argument("function", help="Function name (e.g. to_hex, from_base64, sha256)")
    p_call.add_argument("value", help="Argument literal (see --input-format)")
    p_call.add_argument(
        "--input-format",
        choices=INPUT_FORMATS,
        default="text",
        help=(
            "How to read VALUE: text (varchar), bytes (utf-8 as varbinary), "
            "hex / base64 (varbinary), int (bigint). Default: text"
        ),
    )
    p_call.add_argument(
        "--output-format",
        choices=OUTPUT_FORMATS,
        default="auto",
        help="How to print binary results (auto = uppercase hex)",
    )
    p_call.add_argument("--json", action="store_true", help="Emit a varbin.result.v1 JSON object")
    _add_common_args(p_call)

    p_batch = sub.add_parser("batch", help="Evaluate a call spec (varbin.calls.v1)")
    p_batch.add_argument("spec", help="Call spec JSON (@file.json or inline JSON)")
    p_batch.add_argument("--json", action="store_true", help="One JSON object per call")
    _add_common_args(p_batch)

    return p


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    p = build_parser()
    ns = p.parse_args(argv)

    try:
        if ns.cmd == "list":
            return _cmd_list(as_json=bool(ns.json))
        if ns.cmd == "call":
            return _cmd_call(
                ns.function,
                ns.value,
                input_format=ns.input_format,
                output_format=ns.output_format,
                as_json=bool(ns.json),
            )
        if ns.cmd == "batch":
            return _cmd_batch(str(ns.spec), as_json=bool(ns.json))
        raise AssertionError("unreachable")

    except SystemExit:
        raise
    except VarbinError as e:
        if getattr(ns, "debug", False):
            raise
        print(f"[varbin] {e}", file=sys.stderr)
        return int(getattr(e, "exit_code", 10) or 10)
    except Exception as e:
        if getattr(ns, "debug", False):
            raise
        print(f"[varbin] error: {e}", file=sys.stderr)
        return 10


if __name__ == "__main__":
    raise SystemExit(main())
