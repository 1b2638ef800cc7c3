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
MonoCloud identity provider integration: claim shapes and the provider descriptor factory.
"""

__version__ = "0.1.0"
__author__ = "Gowtham A Rao"
__email__ = "gowtham.rao@coreason.ai"

from .claims import ClaimField, ClaimSet, ClaimShape, ClaimType, override
from .config import MonoCloudSettings
from .exceptions import (
    ClaimShapeError,
    ClaimTypeError,
    CoreasonMonoCloudError,
    DescriptorContractError,
    ProviderRegistrationError,
)
from .models import OptionsBag, ProtocolKind, ProviderDescriptor, ProviderStyle, SecurityCheck
from .profile import ADDRESS_SHAPE, MONOCLOUD_PROFILE_SHAPE, address_shape, profile_shape
from .provider import MonoCloud, callback_url, discovery_url, monocloud
from .registry import ProviderRegistry, ensure_descriptor_contract

__all__ = [
    "ADDRESS_SHAPE",
    "MONOCLOUD_PROFILE_SHAPE",
    "ClaimField",
    "ClaimSet",
    "ClaimShape",
    "ClaimShapeError",
    "ClaimType",
    "ClaimTypeError",
    "CoreasonMonoCloudError",
    "DescriptorContractError",
    "MonoCloud",
    "MonoCloudSettings",
    "OptionsBag",
    "ProtocolKind",
    "ProviderDescriptor",
    "ProviderRegistrationError",
    "ProviderRegistry",
    "ProviderStyle",
    "SecurityCheck",
    "address_shape",
    "callback_url",
    "discovery_url",
    "ensure_descriptor_contract",
    "monocloud",
    "override",
    "profile_shape",
]
