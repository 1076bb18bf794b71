"""Multisend spec error codes and exceptions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional


class ErrorCategory(IntEnum):
    SUCCESS = 0x00
    VALIDATION = 0x01
    RESOURCE = 0x03
    INTERNAL = 0xFF


class ErrorCode(IntEnum):
    # Success
    SUCCESS = 0x0000

    # Validation
    INPUT_OUTPUT_MISMATCH = 0x0100
    INVALID_AMOUNT = 0x0105
    INVALID_RATE = 0x0108
    DUPLICATE_DENOM = 0x0109
    UNKNOWN_DENOM = 0x010A

    # Resource
    INSUFFICIENT_BALANCE = 0x0300

    # Internal
    ARITHMETIC_FAILURE = 0xFF02

    @property
    def category(self) -> ErrorCategory:
        return ErrorCategory(self.value >> 8)


@dataclass(frozen=True)
class SpecError(Exception):
    code: ErrorCode
    message: str
    address: Optional[str] = None
    denom: Optional[str] = None

    def __str__(self) -> str:
        context = ", ".join(
            f"{k}={v}" for k, v in (("address", self.address), ("denom", self.denom)) if v is not None
        )
        suffix = f" [{context}]" if context else ""
        return f"{self.code.name}({self.code:#06x}): {self.message}{suffix}"


# Allow Python's Exception machinery to set __traceback__/__context__/__cause__
# while keeping dataclass fields frozen (Python 3.13 contextlib compat).
_EXCEPTION_ATTRS = frozenset(("__traceback__", "__context__", "__cause__"))
_frozen_setattr = SpecError.__setattr__


def _spec_error_setattr(self: SpecError, name: str, value: object) -> None:
    if name in _EXCEPTION_ATTRS:
        object.__setattr__(self, name, value)
    else:
        _frozen_setattr(self, name, value)


SpecError.__setattr__ = _spec_error_setattr  # type: ignore[method-assign]


def err(
    code: ErrorCode,
    message: str,
    *,
    address: Optional[str] = None,
    denom: Optional[str] = None,
) -> SpecError:
    return SpecError(code=code, message=message, address=address, denom=denom)
