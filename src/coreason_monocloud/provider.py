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
MonoCloud provider descriptor factory.

MonoCloud is an OpenID Connect provider (https://www.monocloud.com/). Register the
descriptor returned by `monocloud()` with the authorization engine and configure
`https://<your-app>/api/auth/callback/monocloud` as the redirect URI in MonoCloud.
"""

from urllib.parse import urljoin

from coreason_monocloud.models import OptionsBag, ProtocolKind, ProviderDescriptor, ProviderStyle, SecurityCheck
from coreason_monocloud.utils.logger import logger

MONOCLOUD_ID = "monocloud"
MONOCLOUD_NAME = "MonoCloud"
MONOCLOUD_PROTOCOL = ProtocolKind.OIDC
MONOCLOUD_STYLE = ProviderStyle(background="#000", text="#fff")
MONOCLOUD_CHECKS = (SecurityCheck.PKCE, SecurityCheck.STATE)

DEFAULT_BASE_PATH = "/api/auth"


def monocloud(options: OptionsBag) -> ProviderDescriptor:
    """
    Builds the MonoCloud provider descriptor.

    The options are not interpreted or validated here; the authorization engine
    enforces its own requirements (client credentials, issuer, etc.).

    Args:
        options: Caller configuration, e.g. `{"client_id": ..., "client_secret": ..., "issuer": ...}`.
            Usually built with `MonoCloudSettings().to_options()`.

    Returns:
        ProviderDescriptor: The descriptor, holding `options` by reference.
    """
    descriptor = ProviderDescriptor(
        identifier=MONOCLOUD_ID,
        name=MONOCLOUD_NAME,
        protocol_kind=MONOCLOUD_PROTOCOL,
        style=MONOCLOUD_STYLE,
        checks=MONOCLOUD_CHECKS,
        options=options,
    )
    logger.debug(f"Created {MONOCLOUD_NAME} provider descriptor")
    return descriptor


MonoCloud = monocloud


def callback_url(
    base_url: str,
    descriptor: ProviderDescriptor | None = None,
    base_path: str = DEFAULT_BASE_PATH,
) -> str:
    """
    Returns the redirect URI to register with the provider.

    Args:
        base_url: The application's public URL (e.g. https://example.com).
        descriptor: The provider descriptor. Defaults to MonoCloud's identifier.
        base_path: The path the engine's routes are mounted under.

    Returns:
        str: e.g. https://example.com/api/auth/callback/monocloud
    """
    identifier = descriptor.identifier if descriptor is not None else MONOCLOUD_ID
    path = f"{base_path.strip('/')}/callback/{identifier}"
    return urljoin(base_url.rstrip("/") + "/", path.lstrip("/"))


def discovery_url(issuer: str) -> str:
    """
    Returns the OpenID discovery document URL for an issuer.

    Args:
        issuer: The issuer URL, with or without a trailing slash.

    Returns:
        str: `<issuer>/.well-known/openid-configuration`
    """
    return urljoin(issuer.rstrip("/") + "/", ".well-known/openid-configuration")
