# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_monocloud

from typing import Any

import pytest

from coreason_monocloud.models import ProtocolKind, ProviderDescriptor, ProviderStyle, SecurityCheck
from coreason_monocloud.provider import MonoCloud, callback_url, discovery_url, monocloud


def test_monocloud_descriptor(options: dict[str, Any]) -> None:
    """Test the descriptor built from client credentials and an issuer."""
    descriptor = monocloud(options)

    assert isinstance(descriptor, ProviderDescriptor)
    assert descriptor.identifier == "monocloud"
    assert descriptor.name == "MonoCloud"
    assert descriptor.protocol_kind == ProtocolKind.OIDC
    assert descriptor.style == ProviderStyle(background="#000", text="#fff")
    assert descriptor.checks == (SecurityCheck.PKCE, SecurityCheck.STATE)
    assert descriptor.options == {"client_id": "a", "client_secret": "b", "issuer": "https://issuer.example"}


def test_monocloud_model_dump(options: dict[str, Any]) -> None:
    """Test the serialized shape handed to the engine."""
    assert monocloud(options).model_dump(mode="json") == {
        "identifier": "monocloud",
        "name": "MonoCloud",
        "protocol_kind": "oidc",
        "style": {"background": "#000", "text": "#fff"},
        "checks": ["pkce", "state"],
        "options": {"client_id": "a", "client_secret": "b", "issuer": "https://issuer.example"},
    }


def test_monocloud_is_deterministic(options: dict[str, Any]) -> None:
    """Test that equal options give descriptors equal in every field."""
    first = monocloud(options)
    second = monocloud(dict(options))

    assert first == second
    assert first.model_dump() == second.model_dump()


def test_monocloud_keeps_options_by_reference(options: dict[str, Any]) -> None:
    """Test that the options bag is neither copied nor modified."""
    before = dict(options)
    descriptor = monocloud(options)

    assert descriptor.options is options
    assert options == before


@pytest.mark.parametrize(
    "bag",
    [
        {},
        {"client_id": "a"},
        {"issuer": "not a url", "unexpected": object()},
        {"profile": lambda claims: {"id": claims["sub"]}, "authorization": {"params": {"scope": "openid"}}},
    ],
)
def test_monocloud_constants_ignore_options(bag: dict[str, Any]) -> None:
    """Test that provider constants do not depend on options and no option is validated."""
    descriptor = monocloud(bag)

    assert descriptor.identifier == "monocloud"
    assert descriptor.name == "MonoCloud"
    assert descriptor.protocol_kind == ProtocolKind.OIDC
    assert descriptor.style == ProviderStyle(background="#000", text="#fff")
    assert descriptor.checks == (SecurityCheck.PKCE, SecurityCheck.STATE)
    assert descriptor.options is bag


def test_monocloud_alias(options: dict[str, Any]) -> None:
    assert MonoCloud(options) == monocloud(options)


def test_profile_callback_passes_through() -> None:
    """Test that a profile-mapping callback reaches the engine untouched."""

    def profile(claims: dict[str, Any]) -> dict[str, Any]:
        return {"id": claims["sub"], "email": claims.get("email")}

    descriptor = monocloud({"client_id": "a", "profile": profile})
    assert descriptor.options["profile"] is profile
    assert descriptor.options["profile"]({"sub": "u1"}) == {"id": "u1", "email": None}


@pytest.mark.parametrize(
    ("base_url", "base_path", "expected"),
    [
        ("https://example.com", "/api/auth", "https://example.com/api/auth/callback/monocloud"),
        ("https://example.com/", "/api/auth", "https://example.com/api/auth/callback/monocloud"),
        ("https://example.com/app", "/api/auth/", "https://example.com/app/api/auth/callback/monocloud"),
        ("https://example.com", "", "https://example.com/callback/monocloud"),
    ],
)
def test_callback_url(base_url: str, base_path: str, expected: str) -> None:
    assert callback_url(base_url, base_path=base_path) == expected


def test_callback_url_uses_descriptor_identifier(options: dict[str, Any]) -> None:
    descriptor = monocloud(options).model_copy(update={"identifier": "monocloud-eu"})
    assert callback_url("https://example.com", descriptor) == "https://example.com/api/auth/callback/monocloud-eu"


@pytest.mark.parametrize(
    ("issuer", "expected"),
    [
        ("https://acme.monocloud.com", "https://acme.monocloud.com/.well-known/openid-configuration"),
        ("https://acme.monocloud.com/", "https://acme.monocloud.com/.well-known/openid-configuration"),
        ("https://idp.example/tenant", "https://idp.example/tenant/.well-known/openid-configuration"),
    ],
)
def test_discovery_url(issuer: str, expected: str) -> None:
    assert discovery_url(issuer) == expected
