from __future__ import annotations

from enum import Enum
from typing import Any

from varbin.errors import UsageError


class SqlType(str, Enum):
    """Declared argument/return types of the registered scalar functions."""

    VARBINARY = "varbinary"
    VARCHAR = "varchar"
    BIGINT = "bigint"


def sql_type_of(value: Any) -> SqlType:
    # bool is an int subclass, but never a BIGINT argument
    if isinstance(value, bool):
        raise UsageError("unsupported value type: bool")
    if isinstance(value, (bytes, bytearray, memoryview)):
        return SqlType.VARBINARY
    if isinstance(value, str):
        return SqlType.VARCHAR
    if isinstance(value, int):
        return SqlType.BIGINT
    raise UsageError(f"unsupported value type: {type(value).__name__}")