from __future__ import annotations

import logging

import httpx
import pytest

import shell_wget_codegen.codegen as codegen
from shell_wget_codegen import (
    ConversionOptions,
    Header,
    Request,
    ShellWgetUsageError,
    ShellWgetValidationError,
    convert,
    convert_with_defaults,
    generate_snippet,
    get_options,
)


def _request(**overrides: object) -> Request:
    payload: dict[str, object] = {"method": "GET", "url": "http://example.com"}
    payload.update(overrides)
    return Request.model_validate(payload)


def test_get_without_headers_matches_expected_snippet() -> None:
    expected = (
        "wget --no-check-certificate --quiet \\\n"
        "    --method GET \\\n"
        "    --header '' \\\n"
        "    --output-document=shellWget.txt \\\n"
        "    - 'http://example.com'"
    )
    assert generate_snippet(_request(), {}) == expected


def test_snippet_starts_with_preamble_and_ends_with_url() -> None:
    request = _request(method="DELETE", url="https://api.example.com/items/1?force=true")
    snippet = generate_snippet(request)

    assert snippet.startswith("wget --no-check-certificate --quiet \\\n")
    assert snippet.endswith("- 'https://api.example.com/items/1?force=true'")
    assert not snippet.endswith("\\")


def test_generate_snippet_is_deterministic() -> None:
    request = _request(headers=[{"key": "Accept", "value": "*/*"}], body={"mode": "raw", "raw": "hi"})
    options = {"indentType": "tab", "requestTimeout": 2000}
    assert generate_snippet(request, options) == generate_snippet(request, options)


@pytest.mark.parametrize(
    ("options", "prefix"),
    [
        ({"indentType": "tab", "indentCount": 2}, "\t\t"),
        ({"indentType": "space", "indentCount": 3}, "   "),
        ({"indentType": "tab"}, "\t"),
        ({}, "    "),
    ],
)
def test_continuation_lines_use_requested_indentation(options: dict[str, object], prefix: str) -> None:
    snippet = generate_snippet(_request(headers={"Accept": "text/html"}), options)
    for line in snippet.split("\n")[1:]:
        assert line.startswith(prefix)
        assert not line[len(prefix)].isspace()


def test_negative_indent_count_is_clamped_to_no_indentation() -> None:
    snippet = generate_snippet(_request(), ConversionOptions(indent_count=-2))
    assert "\n--method GET \\\n" in snippet


def test_timeout_is_floored_to_whole_seconds() -> None:
    snippet = generate_snippet(_request(), {"requestTimeout": 1500})
    assert "    --timeout=1 \\\n" in snippet


@pytest.mark.parametrize("options", [{}, {"requestTimeout": 0}, {"requestTimeout": None}])
def test_timeout_is_omitted_when_not_positive(options: dict[str, object]) -> None:
    assert "--timeout=" not in generate_snippet(_request(), options)


def test_disabling_redirects_emits_max_redirect() -> None:
    snippet = generate_snippet(_request(), {"followRedirect": False, "requestTimeout": 3000})
    lines = snippet.split("\n")
    assert lines[2] == "    --timeout=3 \\"
    assert lines[3] == "    --max-redirect=0 \\"


@pytest.mark.parametrize("options", [{}, {"followRedirect": True}, {"followRedirect": "no"}])
def test_redirects_follow_wget_default(options: dict[str, object]) -> None:
    assert "--max-redirect=0" not in generate_snippet(_request(), options)


def test_only_enabled_headers_are_rendered() -> None:
    request = _request(
        headers=[
            {"key": "Accept", "value": "application/json"},
            {"key": "X-Debug", "value": "1", "disabled": True},
        ]
    )
    snippet = generate_snippet(request)

    assert snippet.count("--header 'Accept: application/json' \\") == 1
    assert "X-Debug" not in snippet
    assert "--header ''" not in snippet


def test_all_headers_disabled_renders_single_empty_header() -> None:
    request = _request(headers=[{"key": "X-Debug", "value": "1", "disabled": True}])
    assert generate_snippet(request).count("--header '' \\") == 1


def test_header_values_are_shell_escaped() -> None:
    request = Request(url="http://example.com", headers=[Header(key="X-Note", value="it's here")])
    assert "--header 'X-Note: it'\\''s here' \\" in generate_snippet(request)


def test_body_lines_sit_between_headers_and_output_document() -> None:
    request = _request(
        method="POST",
        headers=[{"key": "Content-Type", "value": "text/plain"}],
        body={"mode": "raw", "raw": "  hello  "},
    )
    snippet = generate_snippet(request, {"requestBodyTrim": True, "indentCount": 2})
    assert snippet.split("\n") == [
        "wget --no-check-certificate --quiet \\",
        "  --method POST \\",
        "  --header 'Content-Type: text/plain' \\",
        "  --body-data 'hello' \\",
        "  --output-document=shellWget.txt \\",
        "  - 'http://example.com'",
    ]


def test_postman_style_request_mapping_is_accepted() -> None:
    snippet = generate_snippet(
        {
            "method": "PUT",
            "url": {"raw": "https://example.com/a", "host": ["example", "com"]},
            "header": [{"key": "Accept", "value": "*/*"}],
        }
    )
    assert "--method PUT \\" in snippet
    assert "--header 'Accept: */*' \\" in snippet
    assert snippet.endswith("- 'https://example.com/a'")


def test_httpx_request_is_rendered() -> None:
    request = httpx.Request("GET", "https://example.com/items", headers={"Accept": "application/json"})
    assert generate_snippet(request) == (
        "wget --no-check-certificate --quiet \\\n"
        "    --method GET \\\n"
        "    --header 'Accept: application/json' \\\n"
        "    --output-document=shellWget.txt \\\n"
        "    - 'https://example.com/items'"
    )


def test_invalid_request_mapping_raises_validation_error() -> None:
    with pytest.raises(ShellWgetValidationError, match="Invalid request description"):
        generate_snippet({"method": "GET"})


def test_convert_passes_snippet_to_callback() -> None:
    calls: list[tuple[object, object]] = []

    def callback(error: Exception | None, snippet: str | None) -> str:
        calls.append((error, snippet))
        return "done"

    assert convert(_request(), {"indentType": "tab"}, callback) == "done"
    assert len(calls) == 1
    error, snippet = calls[0]
    assert error is None
    assert snippet == generate_snippet(_request(), {"indentType": "tab"})


def test_convert_with_defaults_uses_default_options() -> None:
    captured: dict[str, object] = {}

    def callback(error: Exception | None, snippet: str | None) -> None:
        captured["error"] = error
        captured["snippet"] = snippet

    convert_with_defaults(_request(), callback)
    assert captured["error"] is None
    assert captured["snippet"] == generate_snippet(_request(), {})


def test_convert_without_callback_is_a_usage_error() -> None:
    with pytest.raises(ShellWgetUsageError, match="Callback is not a function"):
        convert(_request(), {}, None)  # type: ignore[arg-type]

    with pytest.raises(TypeError):
        convert(_request(), {}, "not callable")  # type: ignore[arg-type]


def test_collaborator_failures_propagate_without_calling_back(monkeypatch) -> None:
    def broken_render_body(*args: object) -> str:
        raise RuntimeError("body renderer failed")

    monkeypatch.setattr(codegen, "render_body", broken_render_body)
    calls: list[object] = []

    with pytest.raises(RuntimeError, match="body renderer failed"):
        convert(_request(), {}, lambda error, snippet: calls.append(snippet))
    assert calls == []


def test_get_options_returns_fresh_list() -> None:
    first = get_options()
    first.clear()
    second = get_options()

    assert [option.id for option in second] == [
        "indentCount",
        "indentType",
        "requestTimeout",
        "followRedirect",
        "requestBodyTrim",
    ]


@pytest.mark.parametrize(
    "options",
    [
        {"requestTimeout": "1e999"},
        {"requestTimeout": float("inf")},
        {"requestTimeout": "nan"},
        {"indentCount": 1e999},
        ConversionOptions(indent_count=float("inf")),  # type: ignore[arg-type]
    ],
)
def test_non_finite_numbers_are_validation_errors(options: object) -> None:
    with pytest.raises(ShellWgetValidationError):
        generate_snippet(_request(), options)  # type: ignore[arg-type]


def test_non_finite_timeout_on_options_object_emits_no_timeout() -> None:
    snippet = generate_snippet(_request(), ConversionOptions(request_timeout=float("nan")))
    assert "--timeout=" not in snippet


def test_debug_log_reports_enabled_header_count(caplog) -> None:
    request = _request(
        headers=[
            {"key": "Accept", "value": "*/*"},
            {"key": "X-Off", "value": "1", "disabled": True},
        ]
    )
    with caplog.at_level(logging.DEBUG, logger="shell_wget_codegen.codegen"):
        snippet = generate_snippet(request)

    assert "GET http://example.com (1 enabled headers)" in caplog.text
    assert snippet.count("--header ") == 1
