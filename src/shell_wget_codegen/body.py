"""Render request bodies as wget ``--body-data`` / ``--body-file`` lines."""

from __future__ import annotations

import json
from typing import Any

from .models import FormParam, RequestBody
from .sanitize import sanitize


def _line(indentation: str, argument: str) -> str:
    return f"{indentation}{argument} \\\n"


def _encode_params(params: list[FormParam], trim: bool) -> str:
    pairs = [
        f"{sanitize(param.key, 'urlencoded', trim)}={sanitize(param.value, 'urlencoded', trim)}"
        for param in params
        if not param.disabled
    ]
    return "&".join(pairs)


def _render_raw(body: RequestBody, trim: bool, indentation: str) -> str:
    raw = sanitize(body.raw, "raw", trim)
    if not raw:
        return ""
    return _line(indentation, f"--body-data '{raw}'")


def _render_urlencoded(body: RequestBody, trim: bool, indentation: str) -> str:
    data = _encode_params(body.urlencoded, trim)
    if not data:
        return ""
    return _line(indentation, f"--body-data '{data}'")


def _render_formdata(body: RequestBody, trim: bool, indentation: str) -> str:
    # wget has no multipart support: text fields go out form-encoded and
    # file fields as --body-file.
    text_params = [param for param in body.formdata if param.type != "file"]
    snippet = ""
    data = _encode_params(text_params, trim)
    if data:
        snippet += _line(indentation, f"--body-data '{data}'")
    for param in body.formdata:
        if param.disabled or param.type != "file":
            continue
        sources = param.src if isinstance(param.src, list) else [param.src]
        for src in sources:
            path = sanitize(src, "file", trim)
            if path:
                snippet += _line(indentation, f"--body-file='{path}'")
    return snippet


def _render_file(body: RequestBody, trim: bool, indentation: str) -> str:
    if body.file is None:
        return ""
    path = sanitize(body.file.src, "file", trim)
    if not path:
        return ""
    return _line(indentation, f"--body-file='{path}'")


def _graphql_variables(variables: Any) -> Any:
    if variables is None or variables == "":
        return {}
    if isinstance(variables, str):
        try:
            return json.loads(variables)
        except ValueError:
            return {}
    return variables


def _render_graphql(body: RequestBody, trim: bool, indentation: str) -> str:
    if body.graphql is None:
        return ""
    query = body.graphql.query or ""
    if trim:
        query = query.strip()
    payload = json.dumps(
        {"query": query, "variables": _graphql_variables(body.graphql.variables)},
        separators=(",", ":"),
        ensure_ascii=False,
    )
    return _line(indentation, f"--body-data '{sanitize(payload, 'graphql')}'")


_RENDERERS = {
    "raw": _render_raw,
    "urlencoded": _render_urlencoded,
    "formdata": _render_formdata,
    "file": _render_file,
    "graphql": _render_graphql,
}


def render_body(body: RequestBody | None, trim: bool, indentation: str) -> str:
    """Return the body lines of the snippet, each ending in a continuation.

    Missing, disabled and empty bodies render as an empty string.
    """
    if body is None or body.disabled:
        return ""
    renderer = _RENDERERS.get(body.mode or "")
    if renderer is None:
        return ""
    return renderer(body, bool(trim), indentation)
