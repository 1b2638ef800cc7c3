# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_monocloud

"""
Data models for the coreason-monocloud package.
"""

from collections.abc import Mapping
from enum import StrEnum
from typing import Any, TypeAlias

from pydantic import BaseModel, ConfigDict, Field, SkipValidation

# Caller configuration handed to the authorization engine untouched: client_id,
# client_secret, issuer, an optional profile callback and endpoint overrides.
OptionsBag: TypeAlias = Mapping[str, Any]


class ProtocolKind(StrEnum):
    OAUTH = "oauth"
    OIDC = "oidc"


class SecurityCheck(StrEnum):
    PKCE = "pkce"
    STATE = "state"
    NONE = "none"


class ProviderStyle(BaseModel):
    """
    Colours used by sign-in pages when rendering the provider's button.

    Attributes:
        background (str): Button background colour.
        text (str): Button text colour.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    background: str
    text: str


class ProviderDescriptor(BaseModel):
    """
    Normalized description of one identity provider, consumed by the authorization engine.

    Everything except `options` is fixed per provider. `options` is stored by reference,
    without validation or copying; the engine interprets it. Equality includes `options`,
    the hash covers the constant fields only, so descriptors can be used in sets and as keys.

    This model is frozen (immutable) to ensure integrity as it passes to the engine.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        json_schema_extra={
            "example": {
                "identifier": "monocloud",
                "name": "MonoCloud",
                "protocol_kind": "oidc",
                "style": {"background": "#000", "text": "#fff"},
                "checks": ["pkce", "state"],
                "options": {"client_id": "a", "client_secret": "b", "issuer": "https://issuer.example"},
            }
        },
    )

    identifier: str = Field(..., description="Stable short name, used in callback URLs.", examples=["monocloud"])
    name: str = Field(..., description="Human-readable provider name.", examples=["MonoCloud"])
    protocol_kind: ProtocolKind = Field(..., description="Whether the engine runs plain OAuth 2.0 or OIDC.")
    style: ProviderStyle = Field(..., description="Display colours for sign-in pages.")
    checks: tuple[SecurityCheck, ...] = Field(
        ...,
        description="Security checks the engine must enforce, in order.",
        examples=[(SecurityCheck.PKCE, SecurityCheck.STATE)],
    )
    options: SkipValidation[OptionsBag] = Field(
        default_factory=dict, description="Opaque caller configuration passed through to the engine."
    )

    def __hash__(self) -> int:
        # Options may be unhashable; equal descriptors always share the constant fields
        return hash((self.identifier, self.name, self.protocol_kind, self.style, self.checks))

    def __repr__(self) -> str:
        # Options carry client secrets and MUST NOT be rendered
        return (
            f"ProviderDescriptor(identifier={self.identifier!r}, "
            f"name={self.name!r}, "
            f"protocol_kind={self.protocol_kind!r}, "
            f"checks={self.checks!r}, "
            f"options=<{len(self.options)} keys>)"
        )

    def __str__(self) -> str:
        return self.__repr__()
