"""Convert request descriptions into ``wget`` command-line snippets."""

from __future__ import annotations

import logging
import math
from typing import Any, Callable, Mapping, TypeVar

import httpx

from .body import render_body
from .exceptions import ShellWgetUsageError, ShellWgetValidationError
from .models import Header, Request, coerce_request
from .options import OPTION_DESCRIPTORS, ConversionOptions, OptionDescriptor, resolve_options
from .sanitize import sanitize

logger = logging.getLogger(__name__)

T = TypeVar("T")

Callback = Callable[[Exception | None, str | None], T]
RequestLike = Request | httpx.Request | Mapping[str, Any]
OptionsLike = ConversionOptions | Mapping[str, Any] | None

OUTPUT_DOCUMENT = "shellWget.txt"


def get_options() -> list[OptionDescriptor]:
    """Return the configuration options this generator understands."""
    return list(OPTION_DESCRIPTORS)


def _indentation(options: ConversionOptions) -> str:
    is_tab = options.indent_type == "tab"
    count = options.indent_count or (1 if is_tab else 4)
    try:
        repeat = max(0, int(count))
    except (TypeError, ValueError, OverflowError) as exc:
        raise ShellWgetValidationError("indentCount must be an integer", cause=exc) from exc
    return ("\t" if is_tab else " ") * repeat


def _headers_snippet(headers: list[Header], indentation: str) -> str:
    if not headers:
        return f"{indentation}--header '' \\"
    return "\n".join(
        f"{indentation}--header '{sanitize(header.key, 'header')}: {sanitize(header.value, 'header')}' \\"
        for header in headers
    )


def _has_timeout(value: object) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
        and value > 0
    )


def generate_snippet(request: RequestLike, options: OptionsLike = None) -> str:
    """Build the wget invocation for ``request``.

    Lines are joined with shell continuations. Timeout is emitted in whole
    seconds and redirects are only disabled when ``follow_redirect`` is
    explicitly ``False``.
    """
    request = coerce_request(request)
    resolved = resolve_options(options)
    indentation = _indentation(resolved)
    headers = request.enabled_headers()
    logger.debug(
        "Generating wget snippet for %s %s (%d enabled headers)",
        request.method,
        request.url,
        len(headers),
    )

    snippet = "wget --no-check-certificate --quiet \\\n"
    snippet += f"{indentation}--method {request.method} \\\n"
    if _has_timeout(resolved.request_timeout):
        snippet += f"{indentation}--timeout={int(resolved.request_timeout // 1000)} \\\n"
    # wget follows up to 20 redirects unless told otherwise
    if resolved.follow_redirect is False:
        snippet += f"{indentation}--max-redirect=0 \\\n"
    snippet += f"{_headers_snippet(headers, indentation)}\n"
    snippet += render_body(request.body, resolved.request_body_trim, indentation)
    snippet += f"{indentation}--output-document={OUTPUT_DOCUMENT} \\\n"
    snippet += f"{indentation}- '{request.url}'"
    return snippet


def convert(request: RequestLike, options: OptionsLike, callback: Callback[T]) -> T:
    """Generate the snippet and hand it to ``callback(None, snippet)``.

    The callback runs synchronously and its return value is returned.
    Errors raised while generating propagate to the caller.
    """
    if not callable(callback):
        raise ShellWgetUsageError("Shell-wget~convert: Callback is not a function")
    return callback(None, generate_snippet(request, options))


def convert_with_defaults(request: RequestLike, callback: Callback[T]) -> T:
    return convert(request, None, callback)
