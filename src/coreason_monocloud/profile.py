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
Claim shapes of MonoCloud ID tokens and userinfo responses.
"""

from coreason_monocloud.claims import ClaimField, ClaimShape, ClaimType, override


def _claim(name: str, claim_type: ClaimType = ClaimType.STRING, required: bool = False) -> ClaimField:
    return ClaimField(name=name, type=claim_type, required=required)


ADDRESS_SHAPE = ClaimShape(
    known_fields=(
        _claim("formatted"),
        _claim("street_address"),
        _claim("locality"),
        _claim("region"),
        _claim("postal_code"),
        _claim("country"),
    ),
    open_type=ClaimType.UNKNOWN,
)


MONOCLOUD_PROFILE_SHAPE = ClaimShape(
    known_fields=(
        _claim("sub", required=True),
        # Standard OIDC profile claims
        _claim("name"),
        _claim("given_name"),
        _claim("family_name"),
        _claim("middle_name"),
        _claim("nickname"),
        _claim("preferred_username"),
        _claim("profile"),
        _claim("picture"),
        _claim("website"),
        _claim("email"),
        _claim("email_verified", ClaimType.BOOLEAN),
        _claim("gender"),
        _claim("birthdate"),
        _claim("zoneinfo"),
        _claim("locale"),
        _claim("phone_number"),
        _claim("updated_at", ClaimType.NUMBER),
        ClaimField(name="address", type=ClaimType.OBJECT, shape=ADDRESS_SHAPE),
        # ID token claims
        _claim("acr"),
        _claim("amr", ClaimType.STRING_LIST),
        _claim("at_hash"),
        _claim("aud", ClaimType.STRING_OR_LIST, required=True),
        _claim("auth_time", ClaimType.NUMBER),
        _claim("azp"),
        _claim("c_hash"),
        _claim("exp", ClaimType.NUMBER, required=True),
        _claim("iat", ClaimType.NUMBER, required=True),
        _claim("iss", required=True),
        _claim("nonce"),
        _claim("s_hash"),
    ),
    open_type=ClaimType.UNKNOWN,
)


def address_shape(extension: ClaimShape | None = None) -> ClaimShape:
    """
    Returns the address claim shape, optionally overridden.

    Args:
        extension: Address claims to add or retype, and/or a new open rule.

    Returns:
        ClaimShape: The effective address shape.
    """
    if extension is None:
        return ADDRESS_SHAPE
    return override(ADDRESS_SHAPE, extension)


def profile_shape(
    extension: ClaimShape | None = None,
    address_extension: ClaimShape | None = None,
) -> ClaimShape:
    """
    Returns the MonoCloud profile shape with custom claims layered on.

    The address sub-shape is overridden first, then `extension` is applied to the
    whole profile. An `extension` that redeclares `address` replaces the address
    claim entirely, including any `address_extension`.

    Args:
        extension: Profile claims to add or retype, and/or a new open rule.
            `ClaimShape(open_type=ClaimType.ANY)` turns off open-claim typing.
        address_extension: Address claims to add or retype.

    Returns:
        ClaimShape: The effective profile shape.

    Example:
        >>> shape = profile_shape(
        ...     ClaimShape(known_fields=(ClaimField(name="tenant_id", type=ClaimType.STRING),)),
        ...     address_extension=ClaimShape(known_fields=(ClaimField(name="formatted", type=ClaimType.STRING_LIST),)),
        ... )
        >>> shape.field("address").shape.field("formatted").type
        <ClaimType.STRING_LIST: 'string_list'>
    """
    shape = MONOCLOUD_PROFILE_SHAPE
    if address_extension is not None:
        address = ClaimField(name="address", type=ClaimType.OBJECT, shape=address_shape(address_extension))
        shape = override(shape, ClaimShape(known_fields=(address,)))
    if extension is not None:
        shape = override(shape, extension)
    return shape
