"""Redis key schema for governors.

Key format: {base_namespace}{id}{suffix}

Where:
- base_namespace: "rb:ap:" (shared by every governor)
- id: the governor identity, used verbatim
- suffix: ":co" (shared coefficient) or ":lock" (lock record)

The composition is a stable interface. Tooling outside this package may read
or write the same keys directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

BASE_NAMESPACE = "rb:ap:"
COEFFICIENT_SUFFIX = ":co"
LOCK_SUFFIX = ":lock"

KeyKind = Literal["coefficient", "lock"]


@dataclass(frozen=True)
class GovernorKeys:
    """Key generator for a single governor identity."""

    id: str

    @property
    def namespace(self) -> str:
        """Prefix scoping every key of this identity."""
        return f"{BASE_NAMESPACE}{self.id}"

    @property
    def coefficient_key(self) -> str:
        """Key for the shared correction coefficient."""
        return f"{self.namespace}{COEFFICIENT_SUFFIX}"

    @property
    def lock_key(self) -> str:
        """Key for the TTL-bound lock record."""
        return f"{self.namespace}{LOCK_SUFFIX}"

    @classmethod
    def parse(cls, key: str) -> tuple[str, KeyKind] | None:
        """Split a governor key into its identity and kind.

        Returns None if the key was not produced by this scheme.
        """
        if not key.startswith(BASE_NAMESPACE):
            return None

        rest = key[len(BASE_NAMESPACE) :]
        if rest.endswith(COEFFICIENT_SUFFIX):
            governor_id = rest[: -len(COEFFICIENT_SUFFIX)]
            kind: KeyKind = "coefficient"
        elif rest.endswith(LOCK_SUFFIX):
            governor_id = rest[: -len(LOCK_SUFFIX)]
            kind = "lock"
        else:
            return None

        if not governor_id:
            return None
        return governor_id, kind
