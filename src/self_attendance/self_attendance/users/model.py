from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Identity:
    """Domain entity: the signed-in user as reported by the identity provider.

    Note: ``user_id`` is opaque (e.g. the ``sub`` claim of an ID token).
    """

    user_id: str
    display_name: str
