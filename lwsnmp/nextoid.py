"""Search state for finding the OID that follows a starting point (get-next)."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .oid import oid_compare


class NextOidStatus(Enum):
    """Outcome of a next-OID search."""

    SUCCESS = "success"
    NO_MATCH = "no_match"
    BUF_TOO_SMALL = "buf_too_small"


@dataclass(eq=False)
class NextOidState:
    """Tracks the closest OID after ``start_oid`` seen so far."""

    start_oid: tuple[int, ...]
    max_len: int
    next_oid: tuple[int, ...] = ()
    status: NextOidStatus = NextOidStatus.NO_MATCH
    reference: Any = None

    def __post_init__(self) -> None:
        self.start_oid = tuple(self.start_oid)
        self.next_oid = tuple(self.next_oid)

    def precheck(self, oid: Sequence[int]) -> bool:
        """True if a (possibly incomplete) ``oid`` may still lead to a better candidate."""
        if self.status is NextOidStatus.BUF_TOO_SMALL:
            return False
        candidate = tuple(oid)
        start = self.start_oid[:len(candidate)]
        if oid_compare(candidate, start) < 0:
            return False
        return (
            self.status is NextOidStatus.NO_MATCH
            or oid_compare(candidate, self.next_oid) < 0
        )

    def check(self, oid: Sequence[int], reference: Any = None) -> bool:
        """Offer ``oid`` as a candidate; return True if it is now the closest one."""
        if self.status is NextOidStatus.BUF_TOO_SMALL:
            return False
        candidate = tuple(oid)
        if oid_compare(candidate, self.start_oid) <= 0:
            return False
        if (
            self.status is not NextOidStatus.NO_MATCH
            and oid_compare(candidate, self.next_oid) >= 0
        ):
            return False
        if len(candidate) > self.max_len:
            self.status = NextOidStatus.BUF_TOO_SMALL
            return False
        self.next_oid = candidate
        self.status = NextOidStatus.SUCCESS
        self.reference = reference
        return True