"""Scalar function registry.

The table below is what a host expression evaluator registers: declared
name, declared argument type, declared return type and a one-line
description. One name may appear with several argument types (overloads).

Resolution is by (name, argument type). ``invoke`` raises typed errors;
``try_invoke`` returns an ``Ok`` / ``Err`` result instead, so callers have to
branch on failure explicitly.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from varbin import functions as fn
from varbin.errors import UsageError, VarbinError
from varbin.result import Err, Ok, Result
from varbin.sql_types import SqlType, sql_type_of

VARBINARY = SqlType.VARBINARY
VARCHAR = SqlType.VARCHAR
BIGINT = SqlType.BIGINT


@dataclass(frozen=True)
class ScalarFunction:
    name: str
    arg_type: SqlType
    return_type: SqlType
    description: str
    impl: Callable[[Any], Any]

    def signature(self) -> str:
        return f"{self.name}({self.arg_type.value}) -> {self.return_type.value}"

    def to_dict(self) -> dict[str, str]:
        return {
            "name": self.name,
            "arg_type": self.arg_type.value,
            "return_type": self.return_type.value,
            "description": self.description,
        }


SCALAR_FUNCTIONS: tuple[ScalarFunction, ...] = (
    ScalarFunction("length", VARBINARY, BIGINT, "length of the given binary", fn.length),
    ScalarFunction("to_base64", VARBINARY, VARCHAR, "encode binary data as base64", fn.to_base64),
    ScalarFunction(
        "from_base64", VARCHAR, VARBINARY, "decode base64 encoded binary data", fn.from_base64_varchar
    ),
    ScalarFunction(
        "from_base64", VARBINARY, VARBINARY, "decode base64 encoded binary data", fn.from_base64_varbinary
    ),
    ScalarFunction(
        "to_base64url",
        VARBINARY,
        VARCHAR,
        "encode binary data as base64 using the URL safe alphabet",
        fn.to_base64url,
    ),
    ScalarFunction(
        "from_base64url",
        VARCHAR,
        VARBINARY,
        "decode URL safe base64 encoded binary data",
        fn.from_base64url_varchar,
    ),
    ScalarFunction(
        "from_base64url",
        VARBINARY,
        VARBINARY,
        "decode URL safe base64 encoded binary data",
        fn.from_base64url_varbinary,
    ),
    ScalarFunction("to_hex", VARBINARY, VARCHAR, "encode binary data as hex", fn.to_hex),
    ScalarFunction("from_hex", VARCHAR, VARBINARY, "decode hex encoded binary data", fn.from_hex_varchar),
    ScalarFunction(
        "from_hex", VARBINARY, VARBINARY, "decode hex encoded binary data", fn.from_hex_varbinary
    ),
    ScalarFunction(
        "to_big_endian_64",
        BIGINT,
        VARBINARY,
        "encode value as a 64-bit 2's complement big endian varbinary",
        fn.to_big_endian_64,
    ),
    ScalarFunction(
        "from_big_endian_64",
        VARBINARY,
        BIGINT,
        "decode bigint value from a 64-bit 2's complement big endian varbinary",
        fn.from_big_endian_64,
    ),
    ScalarFunction("md5", VARBINARY, VARBINARY, "compute md5 hash", fn.md5),
    ScalarFunction("sha1", VARBINARY, VARBINARY, "compute sha1 hash", fn.sha1),
    ScalarFunction("sha256", VARBINARY, VARBINARY, "compute sha256 hash", fn.sha256),
    ScalarFunction("sha512", VARBINARY, VARBINARY, "compute sha512 hash", fn.sha512),
    ScalarFunction("xxhash64", VARBINARY, VARBINARY, "compute xxhash64 hash", fn.xxhash64),
)


class FunctionRegistry:
    """Immutable (name, arg type) -> ScalarFunction table."""

    def __init__(self, functions: Iterable[ScalarFunction]):
        table: dict[tuple[str, SqlType], ScalarFunction] = {}
        for f in functions:
            key = (f.name.lower(), f.arg_type)
            if key in table:
                raise ValueError(f"duplicate registration: {f.signature()}")
            table[key] = f
        self._table = table

    def names(self) -> list[str]:
        return sorted({name for name, _ in self._table})

    def signatures(self) -> list[ScalarFunction]:
        return [self._table[k] for k in sorted(self._table, key=lambda k: (k[0], k[1].value))]

    def overloads(self, name: str) -> list[ScalarFunction]:
        key = name.strip().lower()
        return [f for f in self.signatures() if f.name == key]

    def resolve(self, name: str, arg_type: SqlType) -> ScalarFunction:
        key = name.strip().lower()
        f = self._table.get((key, arg_type))
        if f is not None:
            return f
        if not self.overloads(key):
            raise UsageError(f"unknown function: {name!r}")
        accepted = ", ".join(o.arg_type.value for o in self.overloads(key))
        raise UsageError(f"no overload {key}({arg_type.value}); accepted: {accepted}")

    def invoke(self, name: str, value: Any) -> Any:
        f = self.resolve(name, sql_type_of(value))
        return f.impl(value)

    def try_invoke(self, name: str, value: Any) -> Result:
        try:
            return Ok(self.invoke(name, value))
        except VarbinError as err:
            return Err.from_error(err)


DEFAULT_REGISTRY = FunctionRegistry(SCALAR_FUNCTIONS)
