"""Ok/Err result union returned by FunctionRegistry.try_invoke()."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from varbin.errors import ErrorKind, VarbinError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    kind: ErrorKind
    message: str

    @property
    def ok(self) -> bool:
        return False

    @classmethod
    def from_error(cls, err: VarbinError) -> Err:
        return cls(kind=err.kind, message=str(err))


Result = Union[Ok[Any], Err]
