"""Typed request description models consumed by the generator."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Mapping
from urllib.parse import parse_qsl

import httpx
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import ShellWgetValidationError


# wget computes these itself from the URL and the body it sends.
_WGET_MANAGED_HEADERS = frozenset({"host", "content-length"})


class ShellWgetModel(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)


class Header(ShellWgetModel):
    key: str
    value: str | None = ""
    disabled: bool = False


class FormParam(ShellWgetModel):
    key: str | None = ""
    value: str | None = ""
    disabled: bool = False
    type: str = "text"
    src: str | list[str] | None = None


class FileSource(ShellWgetModel):
    src: str | None = None


class GraphQLBody(ShellWgetModel):
    query: str | None = ""
    variables: dict[str, Any] | str | None = None


class RequestBody(ShellWgetModel):
    mode: str | None = None
    raw: str | None = None
    urlencoded: list[FormParam] = Field(default_factory=list)
    formdata: list[FormParam] = Field(default_factory=list)
    file: FileSource | None = None
    graphql: GraphQLBody | None = None
    disabled: bool = False


class Request(ShellWgetModel):
    method: str = "GET"
    url: str
    headers: list[Header] = Field(
        default_factory=list,
        validation_alias=AliasChoices("headers", "header"),
    )
    body: RequestBody | None = None

    @field_validator("url", mode="before")
    @classmethod
    def _coerce_url(cls, value: Any) -> Any:
        if isinstance(value, httpx.URL):
            return str(value)
        if isinstance(value, Mapping):
            raw = value.get("raw")
            if not isinstance(raw, str):
                raise ValueError("url object must include a 'raw' string")
            return raw
        return value

    @field_validator("headers", mode="before")
    @classmethod
    def _coerce_headers(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, Mapping):
            return [{"key": key, "value": item} for key, item in value.items()]
        return value

    def enabled_headers(self) -> list[Header]:
        return [header for header in self.headers if not header.disabled]

    @classmethod
    def from_httpx(cls, request: httpx.Request) -> "Request":
        """Describe an ``httpx.Request`` so it can be rendered as a wget call.

        Header names keep their original casing. ``Host`` and ``Content-Length``
        are dropped because wget sets them on its own.
        """
        encoding = request.headers.encoding
        headers = [
            Header(key=raw_key.decode(encoding), value=raw_value.decode(encoding))
            for raw_key, raw_value in request.headers.raw
            if raw_key.decode(encoding).lower() not in _WGET_MANAGED_HEADERS
        ]
        return cls(
            method=request.method,
            url=str(request.url),
            headers=headers,
            body=_body_from_httpx(request),
        )


def _read_httpx_content(request: httpx.Request) -> bytes:
    if isinstance(request.stream, Iterable):
        return request.read()
    # async streams can only be read by the caller, inside its event loop
    try:
        return request.content
    except httpx.RequestNotRead as exc:
        raise ShellWgetValidationError(
            "Async request bodies must be read with 'await request.aread()' before conversion",
            cause=exc,
        ) from exc


def _body_from_httpx(request: httpx.Request) -> RequestBody | None:
    content = _read_httpx_content(request)
    if not content:
        return None
    text = content.decode("utf-8", errors="replace")
    content_type = request.headers.get("content-type", "")
    if "application/x-www-form-urlencoded" in content_type.lower():
        params = [FormParam(key=key, value=value) for key, value in parse_qsl(text, keep_blank_values=True)]
        return RequestBody(mode="urlencoded", urlencoded=params)
    return RequestBody(mode="raw", raw=text)


def coerce_request(value: Request | httpx.Request | Mapping[str, Any]) -> Request:
    if isinstance(value, Request):
        return value
    if isinstance(value, httpx.Request):
        return Request.from_httpx(value)
    if isinstance(value, Mapping):
        try:
            return Request.model_validate(value)
        except ValidationError as exc:
            raise ShellWgetValidationError(
                f"Invalid request description ({exc.error_count()} error(s)): {exc}",
                cause=exc,
            ) from exc
    raise ShellWgetValidationError(f"Unsupported request type: {type(value).__name__}")
