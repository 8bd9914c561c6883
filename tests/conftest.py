from __future__ import annotations

from typing import Callable

import httpx
import pytest

from graphlink import LinkSettings, Operation

from tests.helpers import Recorder, make_response


@pytest.fixture
def settings() -> LinkSettings:
    return LinkSettings(URI="http://test/graphql", INCLUDE_EXTENSIONS=False)


@pytest.fixture
def operation() -> Operation:
    return Operation(
        query="query Viewer($id: ID!) { viewer(id: $id) { id name } }",
        variables={"id": "1"},
        operation_name="Viewer",
        extensions={"persistedQuery": {"version": 1, "sha256Hash": "abc"}},
    )


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def ok_response() -> Callable[[], httpx.Response]:
    return lambda: make_response(200, json={"data": {"viewer": {"id": "1", "name": "Ada"}}})
