# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import base64
import hashlib
import hmac
from urllib.parse import unquote

import pytest

from wooclient.errors import ReservedParameterError
from wooclient.http.models import Credentials, HttpMethod
from wooclient.signing import (
    AuthMode,
    OAuthAuth,
    QueryStringAuth,
    Signer,
    generate_nonce,
    normalize_parameters,
    percent_encode,
    select_auth_mode,
    signature_base_string,
    signing_key,
)

URL = "http://shop.example/wc-api/v3/products"
CREDS = Credentials(consumer_key="ck", consumer_secret="cs")


def fixed_signer(nonce="abc", timestamp=1700000000):
    return Signer(nonce_factory=lambda: nonce, clock=lambda: timestamp)


def expected_signature(base_string: str, key: str) -> str:
    digest = hmac.new(key.encode(), base_string.encode(), hashlib.sha256).digest()
    return base64.b64encode(digest).decode()


@pytest.mark.parametrize(
    "url, query_string_auth, expected",
    [
        ("https://shop.example/wc-api/v3/", True, AuthMode.QUERY_STRING),
        ("https://shop.example/wc-api/v3/", False, AuthMode.BASIC),
        ("HTTPS://shop.example/wc-api/v3/", False, AuthMode.BASIC),
        ("http://shop.example/wc-api/v3/", True, AuthMode.OAUTH),
        ("http://shop.example/wc-api/v3/", False, AuthMode.OAUTH),
    ],
)
def test_select_auth_mode_depends_only_on_scheme_and_flag(url, query_string_auth, expected):
    assert select_auth_mode(url, query_string_auth) is expected


def test_percent_encode_reserved_characters_round_trip():
    value = "a&b=c d+e/f~g"
    encoded = percent_encode(value)
    assert encoded == "a%26b%3Dc%20d%2Be%2Ff~g"
    assert unquote(encoded) == value
    assert percent_encode("AZaz09-._~") == "AZaz09-._~"
    assert percent_encode("é") == "%C3%A9"


def test_normalize_parameters_sorts_by_encoded_key():
    assert normalize_parameters({"a-b": "1", "a b": "2", "A": "3"}) == [("A", "3"), ("a%20b", "2"), ("a-b", "1")]


def test_signature_base_string_layout():
    params = {
        "oauth_consumer_key": "ck",
        "oauth_nonce": "abc",
        "oauth_signature_method": "HMAC-SHA256",
        "oauth_timestamp": "1700000000",
        "oauth_version": "1.0",
    }
    assert signature_base_string("get", URL, params) == (
        "GET&http%3A%2F%2Fshop.example%2Fwc-api%2Fv3%2Fproducts&"
        "oauth_consumer_key%3Dck%26oauth_nonce%3Dabc%26oauth_signature_method%3DHMAC-SHA256"
        "%26oauth_timestamp%3D1700000000%26oauth_version%3D1.0"
    )


def test_reserved_characters_never_appear_unescaped_in_base_string():
    base = signature_base_string(HttpMethod.GET, URL, {"filter[q]": "a&b=c d+e"})
    method, url, query = base.split("&")
    assert method == "GET"
    assert " " not in base and "+" not in base and "=" not in base
    assert "filter%255Bq%255D%3Da%2526b%253Dc%2520d%252Be" in query


def test_signing_key_versions():
    assert signing_key("c s", "v3") == "c%20s&"
    assert signing_key("cs", "v2") == "cs"
    assert signing_key("cs", "v1") == "cs"


def test_oauth_signature_matches_independent_computation():
    auth = fixed_signer().sign(URL, "GET", {}, CREDS, "v3", AuthMode.OAUTH)
    assert isinstance(auth, OAuthAuth)
    base = signature_base_string("GET", URL, {k: v for k, v in auth.signed_parameters.items() if k != "oauth_signature"})
    assert auth.signature == expected_signature(base, "cs&")


def test_oauth_signature_is_deterministic_for_fixed_nonce_and_timestamp():
    params = {"filter[limit]": "10", "page": "2"}
    first = fixed_signer().sign(URL, "GET", params, CREDS, "v3", AuthMode.OAUTH)
    second = fixed_signer().sign(URL, "GET", params, CREDS, "v3", AuthMode.OAUTH)
    assert first.signed_parameters == second.signed_parameters

    other_nonce = fixed_signer(nonce="xyz").sign(URL, "GET", params, CREDS, "v3", AuthMode.OAUTH)
    assert other_nonce.signature != first.signature
    other_method = fixed_signer().sign(URL, "DELETE", params, CREDS, "v3", AuthMode.OAUTH)
    assert other_method.signature != first.signature
    legacy = fixed_signer().sign(URL, "GET", params, CREDS, "v2", AuthMode.OAUTH)
    assert legacy.signature != first.signature


def test_oauth_signed_parameters_keep_construction_order():
    auth = fixed_signer().sign(URL, "POST", {"z": "1", "a": "2"}, CREDS, "v3", AuthMode.OAUTH)
    assert list(auth.signed_parameters) == [
        "z",
        "a",
        "oauth_consumer_key",
        "oauth_nonce",
        "oauth_signature_method",
        "oauth_timestamp",
        "oauth_version",
        "oauth_signature",
    ]
    assert auth.signed_parameters["oauth_timestamp"] == "1700000000"
    assert auth.signed_parameters["oauth_signature_method"] == "HMAC-SHA256"
    assert auth.signed_parameters["oauth_version"] == "1.0"
    assert auth.apply({"ignored": "x"}) == dict(auth.signed_parameters)


def test_query_string_auth_appends_credentials_after_caller_parameters():
    auth = fixed_signer().sign("https://shop.example/wc-api/v3/products", "GET", {"page": "1"}, CREDS, "v3", AuthMode.QUERY_STRING)
    assert isinstance(auth, QueryStringAuth)
    merged = auth.apply({"page": "1"})
    assert list(merged.items()) == [("page", "1"), ("consumer_key", "ck"), ("consumer_secret", "cs")]
    assert "cs" not in repr(auth)


def test_reserved_parameter_names_are_rejected():
    with pytest.raises(ReservedParameterError):
        fixed_signer().sign(URL, "GET", {"consumer_secret": "x"}, CREDS, "v3", AuthMode.QUERY_STRING)
    with pytest.raises(ReservedParameterError):
        fixed_signer().sign(URL, "GET", {"oauth_nonce": "x"}, CREDS, "v3", AuthMode.OAUTH)
    # consumer_key is only reserved for query-string auth
    auth = fixed_signer().sign(URL, "GET", {"consumer_key": "x"}, CREDS, "v3", AuthMode.OAUTH)
    assert auth.signed_parameters["consumer_key"] == "x"


def test_signer_does_not_handle_basic_auth():
    with pytest.raises(ValueError):
        Signer().sign("https://shop.example/", "GET", {}, CREDS, "v3", AuthMode.BASIC)


def test_generate_nonce_is_unique_hex():
    nonces = {generate_nonce() for _ in range(50)}
    assert len(nonces) == 50
    assert all(len(n) == 32 and int(n, 16) >= 0 for n in nonces)
