# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json

import pytest

from wooclient.client import WooClient
from wooclient.config import ClientOptions
from wooclient.errors import (
    ApiError,
    ConfigurationError,
    ErrorCategory,
    ErrorShape,
    InvalidResponseBody,
    ReservedParameterError,
    TransportError,
)
from wooclient.http.adapters import StubTransport
from wooclient.http.models import HttpMethod, TransportResult
from wooclient.signing import Signer

API = "https://shop.example/wc-api/v3"


def make_client(stub, url="https://shop.example", options=None, **kwargs):
    return WooClient(url, "ck", "cs", options or ClientOptions(), transport=stub, **kwargs)


def test_get_returns_decoded_payload_and_records_diagnostics():
    stub = StubTransport()
    stub.add_json("GET", f"{API}/products", '<!-- cached -->{"products": [{"id": 1}]}')
    client = make_client(stub)

    payload = client.get("products", {"page": 1})

    assert payload == {"products": [{"id": 1}]}
    assert client.last_request.method is HttpMethod.GET
    assert client.last_request.parameters == {"page": "1"}
    assert client.last_response.status_code == 200
    assert client.last_response.headers == {"Content-Type": "application/json"}
    assert stub.calls == [{"timeout": 15, "verify_ssl": True}]


def test_options_timeout_and_verification_reach_transport():
    stub = StubTransport()
    stub.add_json("GET", f"{API}/orders", "{}")
    client = make_client(stub, options=ClientOptions(timeout=4, verify_ssl=False))
    client.get("orders")
    assert stub.calls == [{"timeout": 4, "verify_ssl": False}]


def test_verb_helpers_send_expected_methods_and_bodies():
    stub = StubTransport()
    stub.add_json("POST", f"{API}/products", '{"product": {"id": 9}}', status_code=201)
    stub.add_json("PUT", f"{API}/products/9", '{"product": {"id": 9}}')
    stub.add_json("DELETE", f"{API}/products/9", '{"message": "Deleted product"}', status_code=202)
    client = make_client(stub)

    assert client.post("products", {"product": {"title": "Mug"}}) == {"product": {"id": 9}}
    assert json.loads(stub.requests[-1].body) == {"product": {"title": "Mug"}}
    assert client.put("products/9", {"product": {"title": "Cup"}})["product"]["id"] == 9
    assert stub.requests[-1].method is HttpMethod.PUT
    assert client.delete("products/9", {"force": "true"}) == {"message": "Deleted product"}
    assert stub.requests[-1].method is HttpMethod.DELETE
    assert stub.requests[-1].body == b""
    assert stub.requests[-1].url.endswith("products/9?force=true")


def test_transport_failure_raises_transport_error_with_context():
    stub = StubTransport()
    client = make_client(stub)

    with pytest.raises(TransportError) as excinfo:
        client.get("products")

    err = excinfo.value
    assert str(err) == "Transport error: No stubbed response configured"
    assert err.category is ErrorCategory.UNKNOWN_ERROR
    assert err.request is client.last_request
    assert err.response is client.last_response
    assert err.response.status_code == 0
    assert err.response.body == b""


def test_transport_failure_without_message_uses_category_reason():
    class TimeoutTransport:
        def send(self, request, *, timeout, verify_ssl):  # noqa: ARG002
            return TransportResult(ok=False, error_category=ErrorCategory.TIMEOUT)

    client = make_client(TimeoutTransport())
    with pytest.raises(TransportError) as excinfo:
        client.get("products")
    assert str(excinfo.value) == "Transport error: Request timed out"
    assert excinfo.value.category is ErrorCategory.TIMEOUT


def test_api_error_propagates_with_status_and_shape():
    stub = StubTransport()
    stub.add_json(
        "POST",
        f"{API}/products",
        '{"errors":[{"code":"woocommerce_api_missing_product_data","message":"No product data specified to create product"}]}',
        status_code=400,
    )
    client = make_client(stub)

    with pytest.raises(ApiError) as excinfo:
        client.post("products", {"product": {}})

    err = excinfo.value
    assert err.code == "woocommerce_api_missing_product_data"
    assert err.shape is ErrorShape.LIST
    assert err.status_code == 400
    assert err.response is client.last_response


def test_invalid_body_propagates():
    stub = StubTransport()
    stub.add_json("GET", f"{API}/products", "Fatal error: Allowed memory size exhausted")
    with pytest.raises(InvalidResponseBody):
        make_client(stub).get("products")


def test_reserved_parameters_fail_before_sending():
    stub = StubTransport()
    client = make_client(stub, options=ClientOptions(query_string_auth=True))
    with pytest.raises(ReservedParameterError):
        client.get("products", {"consumer_secret": "x"})
    assert stub.requests == []


def test_oauth_calls_over_http_are_signed_in_query_string():
    stub = StubTransport()
    stub.add_json("GET", "http://shop.example/wc-api/v3/orders", '{"orders": []}')
    signer = Signer(nonce_factory=lambda: "n0nce", clock=lambda: 1700000000)
    client = make_client(stub, url="http://shop.example", signer=signer)

    assert client.get("orders", {"status": "processing"}) == {"orders": []}
    sent = stub.requests[0]
    assert sent.parameters["oauth_nonce"] == "n0nce"
    assert "oauth_signature=" in sent.url
    assert "consumer_secret" not in sent.url
    assert "Authorization" not in sent.headers

    other = make_client(StubTransport(), url="http://shop.example", signer=signer)
    assert other.builder.build("orders", "GET", parameters={"status": "processing"}).url == sent.url


def test_last_response_resets_on_each_call():
    stub = StubTransport()
    stub.add_json("GET", f"{API}/products", "{}")
    client = make_client(stub)
    client.get("products")
    assert client.last_response.status_code == 200

    with pytest.raises(TransportError):
        client.get("missing")
    assert client.last_request.url == f"{API}/missing"
    assert client.last_response.status_code == 0


def test_constructor_configuration_errors():
    with pytest.raises(ConfigurationError):
        WooClient("shop.example", "ck", "cs", ClientOptions(), transport=StubTransport())
    with pytest.raises(ConfigurationError):
        WooClient("https://shop.example", "ck", "cs", {"timeout": 0}, transport=StubTransport())
    with pytest.raises(ConfigurationError):
        WooClient("https://shop.example", "ck", "cs", {"unknown": True}, transport=StubTransport())
    with pytest.raises(ConfigurationError):
        WooClient("https://shop.example", "ck", "cs", ClientOptions(timeout=-1), transport=StubTransport())


def test_constructor_accepts_option_mapping(monkeypatch):
    monkeypatch.delenv("WOOCLIENT_API_VERSION", raising=False)
    client = WooClient("https://shop.example/", "ck", "cs", {"version": "v2", "query_string_auth": True}, transport=StubTransport())
    assert client.options.api_version == "v2"
    assert client.options.query_string_auth is True
    assert client.api_url == "https://shop.example/wc-api/v2/"


def test_constructor_loads_env_options_by_default(monkeypatch):
    monkeypatch.setenv("WOOCLIENT_TIMEOUT", "22")
    client = WooClient("https://shop.example", "ck", "cs", transport=StubTransport())
    assert client.options.timeout == 22


def test_constructor_rejects_invalid_env_options(monkeypatch):
    monkeypatch.setenv("WOOCLIENT_API_VERSION", "wc/v3")
    with pytest.raises(ConfigurationError):
        WooClient("https://shop.example", "ck", "cs", transport=StubTransport())


def test_default_transport_is_created_when_omitted():
    from wooclient.http.httpx_transport import HttpxTransport

    client = WooClient("https://shop.example", "ck", "cs", ClientOptions())
    assert isinstance(client.transport, HttpxTransport)
