import os
import sys

# Add src to path for running directly
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "../src")))

from pydantic import SecretStr

from coreason_monocloud import (
    ClaimField,
    ClaimSet,
    ClaimShape,
    ClaimType,
    MonoCloudSettings,
    ProviderRegistry,
    callback_url,
    discovery_url,
    monocloud,
    profile_shape,
)


def main() -> None:
    """
    Demonstrates registering MonoCloud with an engine-side registry.
    Includes:
    - Settings from AUTH_MONOCLOUD_* (falls back to inline values here)
    - A custom claim shape layered onto the MonoCloud profile
    - Reading decoded claims through the effective shape
    """
    print(">>> Building MonoCloud descriptor")

    if "AUTH_MONOCLOUD_ID" in os.environ:
        settings = MonoCloudSettings()
    else:
        settings = MonoCloudSettings(
            id="example-client",
            secret=SecretStr("example-secret"),
            issuer="https://acme.us.monocloud.com",
        )

    descriptor = monocloud(settings.to_options())
    registry = ProviderRegistry()
    registry.register(descriptor)

    print(f">>> Registered: {registry.identifiers}")
    print(f"    Redirect URI: {callback_url('https://example.com', descriptor)}")
    print(f"    Discovery:    {discovery_url(settings.issuer)}")

    shape = profile_shape(
        ClaimShape(known_fields=(ClaimField(name="tenant_id", type=ClaimType.STRING),)),
        address_extension=ClaimShape(known_fields=(ClaimField(name="formatted", type=ClaimType.STRING_LIST),)),
    )

    # A decoded ID token, as the engine would hand it over
    claims = ClaimSet.from_claims(
        shape,
        {
            "sub": "user|123",
            "iss": settings.issuer,
            "aud": settings.id,
            "exp": 1_900_000_000,
            "iat": 1_800_000_000,
            "tenant_id": "acme",
            "address": {"formatted": ["1 Main St", "Springfield"], "country": "US"},
            "org_plan": "enterprise",
        },
    )
    address = claims.nested("address")

    print(f">>> Subject: {claims['sub']} / tenant {claims['tenant_id']}")
    print(f"    Country: {address['country'] if address else None}")
    print(f"    Open claim org_plan: {claims.get_extra_as('org_plan', str)}")


if __name__ == "__main__":
    main()
