# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_monocloud

import os
from collections.abc import Generator
from typing import Any

import pytest

from coreason_monocloud.claims import ClaimField, ClaimShape, ClaimType


@pytest.fixture(autouse=True)
def clean_monocloud_env() -> Generator[None, None, None]:
    """
    Removes AUTH_MONOCLOUD_* variables from the environment so that settings tests
    only see what they set themselves. The environment is restored afterwards.
    """
    saved = {key: value for key, value in os.environ.items() if key.upper().startswith("AUTH_MONOCLOUD_")}
    for key in saved:
        del os.environ[key]
    yield
    for key in [key for key in os.environ if key.upper().startswith("AUTH_MONOCLOUD_")]:
        del os.environ[key]
    os.environ.update(saved)


@pytest.fixture
def options() -> dict[str, Any]:
    return {"client_id": "a", "client_secret": "b", "issuer": "https://issuer.example"}


@pytest.fixture
def default_shape() -> ClaimShape:
    return ClaimShape(
        known_fields=(
            ClaimField(name="sub", type=ClaimType.STRING, required=True),
            ClaimField(name="email", type=ClaimType.STRING),
            ClaimField(name="updated_at", type=ClaimType.NUMBER),
        ),
        open_type=ClaimType.UNKNOWN,
    )
