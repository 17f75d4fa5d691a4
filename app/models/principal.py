from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Principal:
    """Authenticated caller extracted from a validated JWT.

    Carried through the request via FastAPI's dependency system.
    `user_id` is the JWT subject and is the identity the registry
    checks against its owner and its authorized-institution set.
    """

    user_id: str
