"""Scripted stand-in for the low-level boto3 DynamoDB client.

Queue the calls a test expects with :meth:`FakeDynamoDBClient.expect`; each
call is checked against the expected request (a partial dict or a callable)
and answered with the queued response or error.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any


class _AnySentinel:
    def __repr__(self) -> str:  # pragma: no cover
        return "ANY"


ANY: Any = _AnySentinel()


def assert_request_matches(expected: Any, actual: Any, *, path: str = "request") -> None:
    if expected is ANY:
        return

    if isinstance(expected, Mapping):
        if not isinstance(actual, Mapping):
            raise AssertionError(f"{path}: expected a mapping, got {type(actual).__name__}")
        for key, value in expected.items():
            if key not in actual:
                raise AssertionError(f"{path}: missing key {key!r}")
            assert_request_matches(value, actual[key], path=f"{path}.{key}")
        return

    if isinstance(expected, list):
        if not isinstance(actual, list) or len(expected) != len(actual):
            raise AssertionError(f"{path}: expected {expected!r}, got {actual!r}")
        for i, (e, a) in enumerate(zip(expected, actual, strict=True)):
            assert_request_matches(e, a, path=f"{path}[{i}]")
        return

    if expected != actual:
        raise AssertionError(f"{path}: expected {expected!r}, got {actual!r}")


type RequestCheck = Mapping[str, Any] | Callable[[Mapping[str, Any]], None]


@dataclass(frozen=True)
class ExpectedCall:
    method: str
    request: RequestCheck | None = None
    response: Mapping[str, Any] | None = None
    error: Exception | None = None


class FakeDynamoDBClient:
    def __init__(self) -> None:
        self._pending: deque[ExpectedCall] = deque()
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def expect(
        self,
        method: str,
        request: RequestCheck | None = None,
        *,
        response: Mapping[str, Any] | None = None,
        error: Exception | None = None,
    ) -> FakeDynamoDBClient:
        self._pending.append(ExpectedCall(method=method, request=request, response=response, error=error))
        return self

    def assert_no_pending(self) -> None:
        if self._pending:
            raise AssertionError(f"expected calls never made: {[c.method for c in self._pending]}")

    def _call(self, method: str, req: dict[str, Any]) -> Mapping[str, Any]:
        self.calls.append((method, req))
        if not self._pending:
            raise AssertionError(f"unexpected call: {method}")

        call = self._pending.popleft()
        if call.method != method:
            raise AssertionError(f"expected {call.method}, got {method}")

        if callable(call.request):
            call.request(req)
        elif call.request is not None:
            assert_request_matches(call.request, req, path=method)

        if call.error is not None:
            raise call.error
        return dict(call.response or {})

    def get_item(self, **kwargs: Any) -> Mapping[str, Any]:
        return self._call("get_item", kwargs)

    def put_item(self, **kwargs: Any) -> Mapping[str, Any]:
        return self._call("put_item", kwargs)

    def update_item(self, **kwargs: Any) -> Mapping[str, Any]:
        return self._call("update_item", kwargs)

    def delete_item(self, **kwargs: Any) -> Mapping[str, Any]:
        return self._call("delete_item", kwargs)

    def query(self, **kwargs: Any) -> Mapping[str, Any]:
        return self._call("query", kwargs)

    def transact_write_items(self, **kwargs: Any) -> Mapping[str, Any]:
        return self._call("transact_write_items", kwargs)
