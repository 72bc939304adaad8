"""Identity helpers for entities.

Entities (Sale, SaleItem) carry a UUID ``id``.  Comparison by identity is
done through these functions instead of a shared base class.
"""

from __future__ import annotations

from typing import Protocol
from uuid import UUID, uuid4


class HasIdentity(Protocol):
    id: UUID


def new_id() -> UUID:
    return uuid4()


def same_identity(a: HasIdentity, b: HasIdentity) -> bool:
    """True when both entities are the same entity, whatever their state."""
    return type(a) is type(b) and a.id == b.id


def identity_key(entity: HasIdentity) -> str:
    """Stable sort key (used as a tie-breaker when ordering listings)."""
    return str(entity.id)
