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
Configuration for the coreason-monocloud package.
"""

from typing import Any

from pydantic import Field, SecretStr, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class MonoCloudSettings(BaseSettings):
    """
    MonoCloud client settings, read from AUTH_MONOCLOUD_* environment variables.

    Attributes:
        id (str): The OAuth client ID (AUTH_MONOCLOUD_ID).
        secret (SecretStr): The OAuth client secret (AUTH_MONOCLOUD_SECRET).
        issuer (str): The MonoCloud tenant URL (AUTH_MONOCLOUD_ISSUER).
        unsafe_local_dev (bool): Allows a plain-HTTP issuer for local testing.
    """

    model_config = SettingsConfigDict(
        env_prefix="AUTH_MONOCLOUD_",
        case_sensitive=False,
    )

    unsafe_local_dev: bool = False
    id: str = Field(..., min_length=1, description="The OAuth client ID.")
    secret: SecretStr = Field(..., description="The OAuth client secret.")
    issuer: str = Field(..., min_length=1, description="The MonoCloud tenant URL, e.g. https://acme.us.monocloud.com")

    @field_validator("issuer", mode="after")
    @classmethod
    def validate_issuer(cls, v: str, info: ValidationInfo) -> str:
        """
        Strips trailing slashes and ensures the issuer uses HTTPS,
        unless strictly opted out for local dev.

        Raises:
            ValueError: If the issuer is not an http(s) URL, or uses HTTP without opt-in.
        """
        v = v.strip().rstrip("/")
        if v.startswith("http://"):
            if not info.data.get("unsafe_local_dev", False):
                raise ValueError(
                    "HTTPS is required for production. Set 'unsafe_local_dev=True' only for local testing."
                )
        elif not v.startswith("https://"):
            raise ValueError(f"Issuer must be an absolute https:// URL, got '{v}'")
        return v

    def to_options(self, **extra: Any) -> dict[str, Any]:
        """
        Builds the options bag for `monocloud()`.

        Args:
            **extra: Additional engine options (e.g. `profile` callback, endpoint overrides).
                They take precedence over the settings-derived keys.

        Returns:
            dict[str, Any]: A new options mapping with the client secret unwrapped.
        """
        return {
            "client_id": self.id,
            "client_secret": self.secret.get_secret_value(),
            "issuer": self.issuer,
            **extra,
        }
