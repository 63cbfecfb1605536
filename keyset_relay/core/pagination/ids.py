"""Opaque global identifiers.

A global ID hides an entity's internal UUID behind a cursor-shaped token
and namespaces it by type, so a single ``node(id: ID!)`` lookup can route
to the right table:

    to_global_id("Todo", UUID("6a45fd71-cc32-4eeb-823e-e8ef08ecd004"))
    -> CursorCodec.encode("Todo", "akX9ccwyTuuCPujvCOzQBA")

The UUID is compacted to its 22-character URL-safe base64 form first.
"""

from __future__ import annotations

import base64
import binascii
import re
import uuid

from keyset_relay.core.pagination.cursor import CursorCodec
from keyset_relay.core.pagination.errors import IdConversionError

SHORT_UUID_LENGTH = 22

_SHORT_UUID_RE = re.compile(r"^[A-Za-z0-9_-]{22}$")


def short_uuid(uid: uuid.UUID) -> str:
    """Convert UUID to its 22-character URL-safe base64 string."""
    encoded = base64.urlsafe_b64encode(uid.bytes).rstrip(b"=")
    return encoded.decode("ascii")


def parse_short_uuid(token: str) -> uuid.UUID:
    """Parse a 22-character URL-safe base64 token back into a UUID.

    Raises:
        IdConversionError: If token is not the canonical encoding of a UUID
    """
    if not _SHORT_UUID_RE.match(token):
        raise IdConversionError("Invalid identifier token", field="id", value=token)

    try:
        raw = base64.urlsafe_b64decode(token + "==")
    except (binascii.Error, ValueError) as e:
        raise IdConversionError("Invalid identifier token", field="id", value=token) from e

    uid = uuid.UUID(bytes=raw)
    # Trailing bits beyond 128 must be zero, otherwise two tokens map to one id
    if short_uuid(uid) != token:
        raise IdConversionError("Non-canonical identifier token", field="id", value=token)
    return uid


class OpaqueIdCodec:
    """Encode and decode global ``(type_name, UUID)`` identifiers.

    Example:
        global_id = OpaqueIdCodec.to_global_id("Todo", todo.id)
        type_name, todo_id = OpaqueIdCodec.from_global_id(global_id)
    """

    @staticmethod
    def to_global_id(type_name: str, internal_id: uuid.UUID) -> str:
        return CursorCodec.encode(type_name, short_uuid(internal_id))

    @staticmethod
    def from_global_id(global_id: str) -> tuple[str, uuid.UUID]:
        """Decode a global ID.

        Raises:
            CursorError: If the outer cursor envelope is malformed
            IdConversionError: If the UUID token is malformed
        """
        type_name, token = CursorCodec.decode(global_id)
        return type_name, parse_short_uuid(token)

    @staticmethod
    def expect(global_id: str, type_name: str) -> uuid.UUID:
        """Decode a global ID and require it to belong to ``type_name``.

        Raises:
            IdConversionError: If the ID names a different type
        """
        actual_type, internal_id = OpaqueIdCodec.from_global_id(global_id)
        if actual_type != type_name:
            raise IdConversionError(
                f"Expected a {type_name} identifier, got {actual_type}",
                field="type",
                value=actual_type,
            )
        return internal_id


to_global_id = OpaqueIdCodec.to_global_id
from_global_id = OpaqueIdCodec.from_global_id


__all__ = [
    "SHORT_UUID_LENGTH",
    "OpaqueIdCodec",
    "from_global_id",
    "parse_short_uuid",
    "short_uuid",
    "to_global_id",
]
