from __future__ import annotations

import pytest
from pydantic import ValidationError

from graphlink import FALLBACK_CONFIG, HttpConfig, Operation, select_options_and_body
from graphlink.core.config import default_print_query


def test_headers_union_with_context_winning(operation: Operation) -> None:
    fallback = HttpConfig(headers={"a": "fallback", "b": "fallback", "c": "fallback"})
    link = HttpConfig(headers={"b": "link", "c": "link", "d": "link"})
    context = HttpConfig(headers={"c": "context", "e": "context"})

    descriptor = select_options_and_body(operation, fallback, link, context)

    assert descriptor.options["headers"] == {
        "a": "fallback",
        "b": "link",
        "c": "context",
        "d": "link",
        "e": "context",
    }


def test_fallback_defaults(operation: Operation) -> None:
    descriptor = select_options_and_body(operation, FALLBACK_CONFIG)

    assert descriptor.options["method"] == "POST"
    assert descriptor.options["headers"] == {"accept": "*/*", "content-type": "application/json"}
    assert "credentials" not in descriptor.options


def test_method_defaults_to_post_without_fallback_options(operation: Operation) -> None:
    descriptor = select_options_and_body(operation, HttpConfig())

    assert descriptor.options == {"headers": {}, "method": "POST"}


def test_credentials_highest_defined_layer_wins(operation: Operation) -> None:
    fallback = HttpConfig(credentials="omit")
    link = HttpConfig(credentials="include")
    context = HttpConfig()

    descriptor = select_options_and_body(operation, fallback, link, context)

    assert descriptor.options["credentials"] == "include"


def test_none_include_extensions_does_not_override(operation: Operation) -> None:
    link = HttpConfig(http={"include_extensions": True})
    context = HttpConfig(http={"include_extensions": None})

    descriptor = select_options_and_body(operation, FALLBACK_CONFIG, link, context)

    assert descriptor.body["extensions"] == operation.extensions


def test_extensions_omitted_when_not_requested(operation: Operation) -> None:
    descriptor = select_options_and_body(operation, HttpConfig(), HttpConfig(), None)

    assert "extensions" not in descriptor.body


def test_context_enables_extensions_with_camel_case_key(operation: Operation) -> None:
    context = HttpConfig.from_context({"http": {"includeExtensions": True}})

    descriptor = select_options_and_body(operation, FALLBACK_CONFIG, HttpConfig(), context)

    assert descriptor.body["extensions"] == {"persistedQuery": {"version": 1, "sha256Hash": "abc"}}


def test_include_query_false_drops_query(operation: Operation) -> None:
    context = HttpConfig(http={"include_query": False})

    descriptor = select_options_and_body(operation, FALLBACK_CONFIG, context)

    assert "query" not in descriptor.body
    assert descriptor.body["operationName"] == "Viewer"


def test_body_record(operation: Operation) -> None:
    descriptor = select_options_and_body(operation, FALLBACK_CONFIG)

    assert descriptor.body == {
        "operationName": "Viewer",
        "variables": {"id": "1"},
        "query": operation.query,
    }


def test_fetch_options_merge_additively(operation: Operation) -> None:
    link = HttpConfig(fetch_options={"timeout": 5.0, "follow_redirects": True})
    context = HttpConfig(fetch_options={"timeout": 1.0, "headers": {"x-trace": "t"}})

    descriptor = select_options_and_body(operation, FALLBACK_CONFIG, link, context)

    assert descriptor.options["timeout"] == 1.0
    assert descriptor.options["follow_redirects"] is True
    assert descriptor.options["method"] == "POST"
    assert descriptor.options["headers"]["x-trace"] == "t"
    assert descriptor.options["headers"]["content-type"] == "application/json"


def test_resolution_is_idempotent_and_pure(operation: Operation) -> None:
    link = HttpConfig(headers={"authorization": "Bearer a"}, fetch_options={"timeout": 2.0})
    context = HttpConfig(headers={"x-request": "1"}, credentials="include")

    first = select_options_and_body(operation, FALLBACK_CONFIG, link, context)
    first.options["headers"]["mutated"] = "yes"
    first.body["variables"]["id"] = "mutated"
    second = select_options_and_body(operation, FALLBACK_CONFIG, link, context)

    assert "mutated" not in second.options["headers"]
    assert second.body["variables"] == {"id": "1"}
    assert operation.variables == {"id": "1"}
    assert link.headers == {"authorization": "Bearer a"}
    assert FALLBACK_CONFIG.headers == {"accept": "*/*", "content-type": "application/json"}


def test_from_context_ignores_unrelated_keys() -> None:
    config = HttpConfig.from_context({
        "headers": {"x-a": "1"},
        "fetchOptions": {"timeout": 3.0},
        "response": object(),
        "uri": "http://other/graphql",
    })

    assert config.headers == {"x-a": "1"}
    assert config.fetch_options == {"timeout": 3.0}
    assert config.credentials is None


def test_from_context_prefers_snake_case_fetch_options() -> None:
    config = HttpConfig.from_context({
        "fetch_options": {"timeout": 1.0},
        "fetchOptions": {"timeout": 2.0},
    })

    assert config.fetch_options == {"timeout": 1.0}


def test_from_context_rejects_malformed_headers() -> None:
    with pytest.raises(ValidationError):
        HttpConfig.from_context({"headers": ["not", "a", "mapping"]})


def test_config_layers_are_frozen() -> None:
    with pytest.raises(ValidationError):
        FALLBACK_CONFIG.credentials = "include"


def test_custom_print_query(operation: Operation) -> None:
    descriptor = select_options_and_body(
        operation,
        FALLBACK_CONFIG,
        print_query=lambda query: " ".join(query.split()),
    )

    assert descriptor.body["query"] == "query Viewer($id: ID!) { viewer(id: $id) { id name } }"


def test_default_print_query_renders_documents() -> None:
    class Document:
        def __str__(self) -> str:
            return "{ viewer { id } }"

    assert default_print_query(Document()) == "{ viewer { id } }"
    assert default_print_query("{ a }") == "{ a }"
    assert default_print_query(None) is None
