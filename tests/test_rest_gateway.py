"""Tests for the REST gateway against a recorded ``requests`` session."""

from __future__ import annotations

import json
from datetime import date
from decimal import Decimal
from types import SimpleNamespace

import pytest
import requests

from finboard.domain.repositories import TransactionQuery
from finboard.errors import AuthError, GatewayError, NotFoundError
from finboard.infra.gateway import build_rest_gateway_factory
from finboard.infra.rest import RestAuthGateway, RestClient, RestTransactionRepository
from finboard.models import Transaction

BASE_URL = "https://project.example.co"
API_KEY = "anon-key"


def _response(status: int = 200, payload=None, reason: str = "OK") -> requests.Response:
    response = requests.Response()
    response.status_code = status
    response.reason = reason
    response._content = b"" if payload is None else json.dumps(payload).encode("utf-8")
    return response


class RecordingSession:
    """Stands in for ``requests.Session``: records calls and replays queued responses."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def queue(self, *responses):
        self.responses.extend(responses)

    def request(self, method, url, **kwargs):
        self.calls.append(SimpleNamespace(method=method, url=url, **kwargs))
        outcome = self.responses.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def _row(**overrides):
    row = {
        "id": "t1",
        "user_id": "u1",
        "description": "Rent",
        "amount": 1500,
        "date": "2024-03-08",
        "type": "expense",
        "status": "completed",
        "category_id": "c1",
        "category": {"id": "c1", "user_id": "u1", "name": "Housing", "type": "expense", "color": "#EF4444"},
    }
    row.update(overrides)
    return row


@pytest.fixture
def http():
    return RecordingSession()


@pytest.fixture
def client(http):
    return RestClient(BASE_URL, API_KEY, session=http)


def test_requests_carry_api_key_and_bearer(client, http):
    http.queue(_response(payload=[]), _response(payload=[]))

    client.request("GET", "rest/v1/categories")
    client.bind("user-token").request("GET", "/rest/v1/categories")

    anonymous, signed_in = http.calls
    assert anonymous.url == f"{BASE_URL}/rest/v1/categories"
    assert anonymous.headers["apikey"] == API_KEY
    assert anonymous.headers["Authorization"] == f"Bearer {API_KEY}"
    assert signed_in.url == anonymous.url
    assert signed_in.headers["Authorization"] == "Bearer user-token"


@pytest.mark.parametrize(
    ("status", "error"),
    [(401, AuthError), (403, AuthError), (404, NotFoundError), (500, GatewayError)],
)
def test_error_statuses_map_to_gateway_errors(client, http, status, error):
    http.queue(_response(status, {"message": "boom"}, reason="Error"))

    with pytest.raises(error, match="boom") as excinfo:
        client.request("GET", "rest/v1/transactions")
    assert excinfo.value.status == status


def test_transport_failures_raise_gateway_error(client, http):
    http.queue(requests.ConnectionError("connection refused"))

    with pytest.raises(GatewayError, match="connection refused"):
        client.request("GET", "rest/v1/transactions")


def test_empty_body_decodes_to_none(client, http):
    http.queue(_response(204))

    assert client.request("DELETE", "rest/v1/transactions") is None


def test_list_builds_filters_and_maps_rows(client, http):
    http.queue(_response(payload=[_row()]))
    repo = RestTransactionRepository(client)

    rows = repo.list_all(
        TransactionQuery(start=date(2024, 3, 1), end=date(2024, 3, 31), kind="expense", ascending=True),
        user_id="u1",
    )

    params = http.calls[0].params
    assert ("user_id", "eq.u1") in params
    assert ("date", "gte.2024-03-01") in params
    assert ("date", "lte.2024-03-31") in params
    assert ("type", "eq.expense") in params
    assert params[-1] == ("order", "date.asc")

    (txn,) = rows
    assert txn.amount == Decimal("1500")
    assert txn.occurred_on == date(2024, 3, 8)
    assert txn.kind == "expense"
    assert txn.category_name == "Housing"


def test_list_defaults_to_newest_first(client, http):
    http.queue(_response(payload=[_row(category=None, category_id=None)]))

    (txn,) = RestTransactionRepository(client).list_all(user_id="u1")

    assert http.calls[0].params[-1] == ("order", "date.desc")
    assert txn.category is None
    assert txn.category_name == "Uncategorized"


def test_create_sends_remote_column_names(client, http):
    http.queue(_response(201, [_row(id="new")]))
    txn = Transaction(
        user_id="ignored",
        description="Rent",
        amount=Decimal("1500.00"),
        occurred_on=date(2024, 3, 8),
        kind="expense",
        status="completed",
        category_id="c1",
    )

    created = RestTransactionRepository(client).create(txn, user_id="u1")

    call = http.calls[0]
    assert call.method == "POST"
    assert call.headers["Prefer"] == "return=representation"
    assert call.json == {
        "description": "Rent",
        "amount": "1500.00",
        "date": "2024-03-08",
        "type": "expense",
        "status": "completed",
        "category_id": "c1",
        "user_id": "u1",
    }
    assert created.id == "new"


def test_update_with_no_matching_row_is_not_found(client, http):
    http.queue(_response(payload=[]))

    with pytest.raises(NotFoundError):
        RestTransactionRepository(client).update("t9", {"description": "x"}, user_id="u1")
    assert http.calls[0].json == {"description": "x"}


def test_delete_then_list_omits_the_row(client, http):
    http.queue(_response(204), _response(payload=[_row(id="t2")]))
    repo = RestTransactionRepository(client)

    repo.delete("t1", user_id="u1")
    remaining = repo.list_all(user_id="u1")

    assert http.calls[0].method == "DELETE"
    assert http.calls[0].params == [("id", "eq.t1"), ("user_id", "eq.u1")]
    assert [txn.id for txn in remaining] == ["t2"]


def test_sign_in_posts_password_grant(client, http):
    http.queue(
        _response(payload={"access_token": "jwt", "user": {"id": "u1", "email": "ana@example.com"}})
    )

    identity = RestAuthGateway(client).sign_in(" ana@example.com ", "secret")

    call = http.calls[0]
    assert call.url == f"{BASE_URL}/auth/v1/token"
    assert call.params == {"grant_type": "password"}
    assert call.json == {"email": "ana@example.com", "password": "secret"}
    assert (identity.user_id, identity.access_token) == ("u1", "jwt")


def test_sign_in_rejection_is_an_auth_error(client, http):
    http.queue(_response(400, {"error_description": "Invalid login credentials"}, reason="Bad Request"))

    with pytest.raises(AuthError, match="Invalid login credentials"):
        RestAuthGateway(client).sign_in("ana@example.com", "wrong")


def test_sign_up_awaiting_confirmation_returns_none(client, http):
    http.queue(_response(payload={"id": "u1", "email": "ana@example.com"}))

    assert RestAuthGateway(client).sign_up("ana@example.com", "secret") is None


def test_current_user_treats_rejected_tokens_as_absent(client, http):
    http.queue(
        _response(payload={"id": "u1", "email": "ana@example.com"}),
        _response(401, {"msg": "JWT expired"}, reason="Unauthorized"),
    )
    auth = RestAuthGateway(client)

    identity = auth.current_user("jwt")
    assert identity.user_id == "u1"
    assert http.calls[0].headers["Authorization"] == "Bearer jwt"
    assert auth.current_user("stale") is None
    assert auth.current_user("") is None


def test_factory_binds_repositories_to_the_token(http):
    config = SimpleNamespace(GATEWAY_URL=BASE_URL, GATEWAY_KEY=API_KEY, GATEWAY_TIMEOUT=5.0)
    http.queue(_response(payload=[]))

    gateway = build_rest_gateway_factory(config, http_session=http)("user-token")
    gateway.categories.list_all(user_id="u1")

    call = http.calls[0]
    assert call.headers["Authorization"] == "Bearer user-token"
    assert call.timeout == 5.0
    assert ("order", "name.asc") in call.params
