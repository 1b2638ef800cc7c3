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
Provider registration: the boundary where the authorization engine accepts descriptors.
"""

from collections.abc import Iterator
from typing import Any

from coreason_monocloud.exceptions import DescriptorContractError, ProviderRegistrationError
from coreason_monocloud.models import ProtocolKind, ProviderDescriptor, SecurityCheck
from coreason_monocloud.utils.logger import logger


def ensure_descriptor_contract(descriptor: Any) -> None:
    """
    Checks the invariants the engine relies on.

    A descriptor must have a non-empty identifier, a protocol kind of `oauth` or `oidc`,
    and checks drawn only from `pkce`, `state` and `none`. Duck-typed so that descriptors
    built outside this package (e.g. via `model_construct`) are checked too.

    Args:
        descriptor: Any object exposing `identifier`, `protocol_kind` and `checks`.

    Raises:
        DescriptorContractError: If an invariant is broken.
    """
    identifier = getattr(descriptor, "identifier", None)
    if not isinstance(identifier, str) or not identifier.strip():
        raise DescriptorContractError("Provider descriptor must have a non-empty identifier.")

    protocol_kind = getattr(descriptor, "protocol_kind", None)
    if not isinstance(protocol_kind, str) or protocol_kind not in {kind.value for kind in ProtocolKind}:
        raise DescriptorContractError(f"Provider '{identifier}' has unsupported protocol kind: {protocol_kind!r}")

    allowed = {check.value for check in SecurityCheck}
    checks = getattr(descriptor, "checks", None)
    if checks is None or isinstance(checks, str):
        raise DescriptorContractError(f"Provider '{identifier}' must declare its checks as a sequence.")
    try:
        items = list(checks)
    except TypeError:
        raise DescriptorContractError(f"Provider '{identifier}' must declare its checks as a sequence.") from None
    unsupported = [check for check in items if not isinstance(check, str) or check not in allowed]
    if unsupported:
        raise DescriptorContractError(f"Provider '{identifier}' has unsupported checks: {unsupported!r}")


class ProviderRegistry:
    """
    Holds the providers an application has registered, keyed by identifier.

    Populated once at start-up; iteration follows registration order.
    """

    def __init__(self) -> None:
        self._providers: dict[str, ProviderDescriptor] = {}

    def register(self, descriptor: ProviderDescriptor) -> ProviderDescriptor:
        """
        Registers a provider descriptor.

        Args:
            descriptor: The descriptor, e.g. `monocloud(options)`.

        Returns:
            ProviderDescriptor: The registered descriptor.

        Raises:
            DescriptorContractError: If the descriptor breaks the engine contract.
            ProviderRegistrationError: If a provider with the same identifier is registered.
        """
        try:
            ensure_descriptor_contract(descriptor)
        except DescriptorContractError as e:
            logger.warning(f"Rejected provider descriptor: {e}")
            raise

        if descriptor.identifier in self._providers:
            logger.warning(f"Duplicate provider registration: {descriptor.identifier}")
            raise ProviderRegistrationError(f"Provider '{descriptor.identifier}' is already registered.")

        self._providers[descriptor.identifier] = descriptor
        logger.debug(f"Registered provider {descriptor.identifier} ({descriptor.protocol_kind})")
        return descriptor

    def get(self, identifier: str) -> ProviderDescriptor:
        """
        Looks up a registered provider.

        Raises:
            ProviderRegistrationError: If no provider has this identifier.
        """
        try:
            return self._providers[identifier]
        except KeyError:
            raise ProviderRegistrationError(f"Unknown provider: '{identifier}'") from None

    @property
    def identifiers(self) -> tuple[str, ...]:
        return tuple(self._providers)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._providers

    def __iter__(self) -> Iterator[ProviderDescriptor]:
        return iter(self._providers.values())

    def __len__(self) -> int:
        return len(self._providers)
