"""Conversion options and the option descriptors advertised to hosts."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Any, Mapping

from .exceptions import ShellWgetValidationError


@dataclass(frozen=True)
class OptionDescriptor:
    name: str
    id: str
    type: str
    default: object
    description: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


OPTION_DESCRIPTORS: tuple[OptionDescriptor, ...] = (
    OptionDescriptor(
        name="Indent Count",
        id="indentCount",
        type="integer",
        default=4,
        description="Integer denoting count of indentation required",
    ),
    OptionDescriptor(
        name="Indent type",
        id="indentType",
        type="string",
        default="space",
        description="String denoting type of indentation for code snippet. eg: 'space', 'tab'",
    ),
    OptionDescriptor(
        name="Request Timeout",
        id="requestTimeout",
        type="integer",
        default=0,
        description="Integer denoting time after which the request will bail out in milliseconds",
    ),
    OptionDescriptor(
        name="Follow redirect",
        id="followRedirect",
        type="boolean",
        default=True,
        description="Boolean denoting whether or not to automatically follow redirects",
    ),
    OptionDescriptor(
        name="Body trim",
        id="requestBodyTrim",
        type="boolean",
        default=False,
        description="Boolean denoting whether to trim request body fields",
    ),
)

# option id -> dataclass field
_OPTION_FIELDS = {
    "indentType": "indent_type",
    "indentCount": "indent_count",
    "requestTimeout": "request_timeout",
    "followRedirect": "follow_redirect",
    "requestBodyTrim": "request_body_trim",
}


@dataclass(frozen=True)
class ConversionOptions:
    indent_type: str = "space"
    indent_count: int | None = None
    request_timeout: int | float = 0
    follow_redirect: bool | None = True
    request_body_trim: bool = False

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "ConversionOptions":
        """Build options from host-style camelCase ids.

        Snake-case field names are accepted too. Unknown keys are ignored.
        A ``None`` value means the option was not given.
        """
        kwargs: dict[str, Any] = {}
        for key, value in values.items():
            field = _OPTION_FIELDS.get(key, key)
            if field not in _OPTION_FIELDS.values() or value is None:
                continue
            kwargs[field] = value

        if "indent_count" in kwargs:
            kwargs["indent_count"] = _coerce_int(kwargs["indent_count"], "indentCount")
        if "request_timeout" in kwargs:
            kwargs["request_timeout"] = _coerce_number(kwargs["request_timeout"], "requestTimeout")
        return cls(**kwargs)


def _coerce_int(value: Any, name: str) -> int:
    if isinstance(value, bool):
        raise ShellWgetValidationError(f"{name} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError) as exc:
        raise ShellWgetValidationError(f"{name} must be an integer", cause=exc) from exc


def _coerce_number(value: Any, name: str) -> int | float:
    if isinstance(value, bool):
        raise ShellWgetValidationError(f"{name} must be a number")
    if isinstance(value, int):
        return value
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ShellWgetValidationError(f"{name} must be a number", cause=exc) from exc
    if not math.isfinite(number):
        raise ShellWgetValidationError(f"{name} must be a finite number")
    return number


def resolve_options(options: ConversionOptions | Mapping[str, Any] | None) -> ConversionOptions:
    if options is None:
        return ConversionOptions()
    if isinstance(options, ConversionOptions):
        return options
    if isinstance(options, Mapping):
        return ConversionOptions.from_mapping(options)
    raise ShellWgetValidationError(f"Unsupported options type: {type(options).__name__}")
