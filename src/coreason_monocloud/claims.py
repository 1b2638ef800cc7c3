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
Claim shapes: explicit, immutable descriptions of the claims an IdP may return,
and the override merge used to layer a custom shape onto a default one.
"""

from collections.abc import Iterator, Mapping
from enum import StrEnum
from types import MappingProxyType
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

from coreason_monocloud.exceptions import ClaimShapeError, ClaimTypeError
from coreason_monocloud.utils.logger import logger

T = TypeVar("T")


class ClaimType(StrEnum):
    """
    Value type of a claim.

    UNKNOWN values are opaque and must be checked by the consumer before use.
    ANY is the escape hatch for profiles that opt out of open-claim typing.
    """

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    STRING_OR_LIST = "string_or_list"
    STRING_LIST = "string_list"
    OBJECT = "object"
    UNKNOWN = "unknown"
    ANY = "any"


def _type_schema(claim_type: ClaimType) -> dict[str, Any]:
    """Returns a fresh JSON Schema fragment for a scalar or list claim type."""
    string_list = {"type": "array", "items": {"type": "string"}}
    schemas: dict[ClaimType, dict[str, Any]] = {
        ClaimType.STRING: {"type": "string"},
        ClaimType.NUMBER: {"type": "number"},
        ClaimType.BOOLEAN: {"type": "boolean"},
        ClaimType.STRING_LIST: string_list,
        ClaimType.STRING_OR_LIST: {"anyOf": [{"type": "string"}, string_list]},
    }
    return schemas.get(claim_type, {})


class ClaimField(BaseModel):
    """
    A known claim.

    Attributes:
        name (str): The claim name as it appears in the token or userinfo response.
        type (ClaimType): The value type of the claim.
        required (bool): Whether the IdP always sends this claim.
        shape (ClaimShape | None): The nested shape, set exactly when type is OBJECT.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., min_length=1, description="The claim name.")
    type: ClaimType = Field(..., description="The value type of the claim.")
    required: bool = Field(default=False, description="Whether the claim is always present.")
    shape: "ClaimShape | None" = Field(default=None, description="Nested shape for OBJECT claims.")

    @model_validator(mode="after")
    def check_nested_shape(self) -> "ClaimField":
        """
        Ensures a nested shape is given for OBJECT claims and only for them.

        Raises:
            ClaimShapeError: If the nested shape does not match the claim type.
        """
        if self.type is ClaimType.OBJECT and self.shape is None:
            raise ClaimShapeError(f"Claim '{self.name}' is an object but declares no nested shape")
        if self.type is not ClaimType.OBJECT and self.shape is not None:
            raise ClaimShapeError(f"Claim '{self.name}' has type '{self.type}' and cannot carry a nested shape")
        return self

    def to_json_schema(self) -> dict[str, Any]:
        if self.shape is not None:
            return self.shape.to_json_schema()
        return _type_schema(self.type)


class ClaimShape(BaseModel):
    """
    An ordered set of known claims plus an optional open rule.

    The open rule covers every claim name that is not declared as a known field.
    `open_type=None` means the shape declares no open rule at all; when used as an
    override extension, the default shape's open rule is then kept.

    This model is frozen (immutable); shapes are resolved once and shared.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    known_fields: tuple[ClaimField, ...] = Field(default=(), description="Known claims in declaration order.")
    open_type: ClaimType | None = Field(default=None, description="Value type of claims not declared as known.")

    @model_validator(mode="after")
    def check_consistency(self) -> "ClaimShape":
        """
        Ensures each claim name is declared at most once and the open rule is not OBJECT.

        Raises:
            ClaimShapeError: If the shape is internally inconsistent.
        """
        seen: set[str] = set()
        for claim in self.known_fields:
            if claim.name in seen:
                raise ClaimShapeError(f"Claim '{claim.name}' is declared more than once")
            seen.add(claim.name)

        if self.open_type is ClaimType.OBJECT:
            raise ClaimShapeError("The open rule cannot be OBJECT; declare nested claims as known fields")
        return self

    def __contains__(self, name: object) -> bool:
        return any(claim.name == name for claim in self.known_fields)

    @property
    def known_names(self) -> tuple[str, ...]:
        return tuple(claim.name for claim in self.known_fields)

    @property
    def is_open(self) -> bool:
        return self.open_type is not None

    def field(self, name: str) -> ClaimField | None:
        """
        Looks up a known claim by name.

        Args:
            name: The claim name.

        Returns:
            The ClaimField, or None if the name is not a known claim.
        """
        for claim in self.known_fields:
            if claim.name == name:
                return claim
        return None

    def override(self, extension: "ClaimShape") -> "ClaimShape":
        """Method form of `override(self, extension)`."""
        return override(self, extension)

    def to_json_schema(self) -> dict[str, Any]:
        """
        Renders the shape as a JSON Schema object.

        The open rule maps to `additionalProperties`: true for UNKNOWN and ANY,
        the type's schema for concrete types, and false when no open rule is declared.

        Returns:
            dict[str, Any]: A JSON Schema document.
        """
        schema: dict[str, Any] = {
            "type": "object",
            "properties": {claim.name: claim.to_json_schema() for claim in self.known_fields},
        }
        required = [claim.name for claim in self.known_fields if claim.required]
        if required:
            schema["required"] = required

        if self.open_type is None:
            schema["additionalProperties"] = False
        elif self.open_type in (ClaimType.UNKNOWN, ClaimType.ANY):
            schema["additionalProperties"] = True
        else:
            schema["additionalProperties"] = _type_schema(self.open_type)
        return schema


ClaimField.model_rebuild()
ClaimShape.model_rebuild()


def override(default: ClaimShape, extension: ClaimShape) -> ClaimShape:
    """
    Computes the effective shape of `extension` layered onto `default`.

    - Known claims declared in `extension` replace the default's definition, in place.
    - Known claims of `default` not redeclared are inherited unchanged.
    - Claims new in `extension` are appended in their declared order.
    - The open rule is the extension's when it declares one, else the default's.

    No type-compatibility check is made between a default claim and its replacement.

    Args:
        default: The base shape.
        extension: The overriding shape.

    Returns:
        ClaimShape: The merged shape.
    """
    replacements = {claim.name: claim for claim in extension.known_fields}
    merged = [replacements.pop(claim.name, claim) for claim in default.known_fields]
    # Whatever was not consumed above is new to the default shape
    merged.extend(claim for claim in extension.known_fields if claim.name in replacements)

    open_type = extension.open_type if extension.open_type is not None else default.open_type

    logger.debug(
        f"Merged claim shape: {len(default.known_fields)} default, "
        f"{len(extension.known_fields)} extension, {len(merged)} effective claims"
    )
    return ClaimShape(known_fields=tuple(merged), open_type=open_type)


class ClaimSet(Mapping[str, Any]):
    """
    Read-only view of decoded claims through a ClaimShape.

    Known claims are available through the Mapping interface. Claims covered only by
    the open rule are kept apart and can only be reached by explicit key through
    `get_extra` / `get_extra_as`. No claim value is validated against its declared type.
    """

    __slots__ = ("shape", "_known", "_extra")

    def __init__(self, shape: ClaimShape, known: Mapping[str, Any], extra: Mapping[str, Any]) -> None:
        self.shape = shape
        self._known = MappingProxyType(dict(known))
        self._extra = MappingProxyType(dict(extra))

    @classmethod
    def from_claims(cls, shape: ClaimShape, claims: Mapping[str, Any]) -> "ClaimSet":
        """
        Splits a raw claim mapping into known and open claims.

        Claims outside a shape without an open rule are dropped.

        Args:
            shape: The effective claim shape.
            claims: The decoded claims (e.g. an ID token payload or userinfo response).

        Returns:
            ClaimSet: The view over the claims.
        """
        known: dict[str, Any] = {}
        extra: dict[str, Any] = {}
        dropped = 0
        for key, value in claims.items():
            if key in shape:
                known[key] = value
            elif shape.is_open:
                extra[key] = value
            else:
                dropped += 1

        if dropped:
            logger.debug(f"Dropped {dropped} claim(s) not declared by a closed claim shape")
        return cls(shape, known, extra)

    def __getitem__(self, name: str) -> Any:
        if name not in self.shape:
            raise KeyError(f"'{name}' is not a known claim; open claims are read with get_extra()")
        return self._known[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._known)

    def __len__(self) -> int:
        return len(self._known)

    def __repr__(self) -> str:
        # Claim values are PII; only names are shown
        return f"ClaimSet(known={sorted(self._known)!r}, extra={sorted(self._extra)!r})"

    @property
    def extra_keys(self) -> frozenset[str]:
        return frozenset(self._extra)

    def get_extra(self, key: str, default: object = None) -> object:
        """Returns an open claim as an opaque value, or `default` if absent."""
        return self._extra.get(key, default)

    def get_extra_as(self, key: str, expected: type[T]) -> T | None:
        """
        Returns an open claim after checking it is an instance of `expected`.

        Booleans are rejected when `int` or `float` is expected. Shapes whose open
        type is ANY skip the check.

        Args:
            key: The claim name.
            expected: The type the caller expects.

        Returns:
            The claim value, or None if absent.

        Raises:
            ClaimTypeError: If the value is not an instance of `expected`.
        """
        if key not in self._extra:
            return None
        value = self._extra[key]
        if self.shape.open_type is ClaimType.ANY:
            return value  # type: ignore[no-any-return]
        # bool is an int subclass; numeric casts reject it
        is_bool_as_number = isinstance(value, bool) and expected in (int, float)
        if is_bool_as_number or not isinstance(value, expected):
            raise ClaimTypeError(
                f"Claim '{key}' is {type(value).__name__}, expected {expected.__name__}"
            )
        return value

    def nested(self, name: str) -> "ClaimSet | None":
        """
        Returns a view over a nested OBJECT claim (e.g. `address`).

        Args:
            name: The name of a known OBJECT claim.

        Returns:
            The nested ClaimSet, or None if the claim is absent.

        Raises:
            KeyError: If the name is not a known OBJECT claim.
            ClaimTypeError: If the claim value is not a mapping.
        """
        claim = self.shape.field(name)
        if claim is None or claim.shape is None:
            raise KeyError(f"'{name}' is not a known object claim")
        if name not in self._known:
            return None
        value = self._known[name]
        if not isinstance(value, Mapping):
            raise ClaimTypeError(f"Claim '{name}' is {type(value).__name__}, expected a mapping")
        return ClaimSet.from_claims(claim.shape, value)
