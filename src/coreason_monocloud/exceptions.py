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
Custom exceptions for the coreason-monocloud package.
"""


class CoreasonMonoCloudError(Exception):
    """Base exception for all coreason-monocloud errors."""


class ClaimShapeError(CoreasonMonoCloudError):
    """
    Raised when a claim shape is internally inconsistent (duplicate field names,
    an object field without a nested shape, etc.).
    Not a ValueError, so Pydantic validators propagate it unwrapped.
    """


class ClaimTypeError(CoreasonMonoCloudError, TypeError):
    """Raised when an open claim is explicitly requested as a type it does not have."""


class DescriptorContractError(CoreasonMonoCloudError):
    """Raised when a provider descriptor breaks the contract the engine relies on."""


class ProviderRegistrationError(CoreasonMonoCloudError):
    """Raised on duplicate registration or lookup of an unknown provider."""
