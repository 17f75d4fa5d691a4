"""Bearer tokens that carry the caller's identity (ES256 JWT).

The registry trusts whatever identity the host hands it.  Over HTTP
that identity is the `sub` claim of a token signed here, so a caller
cannot name themselves the owner or an institution without a token
minted for that identity.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime, timedelta

import jwt
from cryptography.hazmat.primitives.asymmetric import ec

# ---------------------------------------------------------------------------
# Key management
# ---------------------------------------------------------------------------
# Ephemeral EC key pair generated on import: tokens do not survive a
# restart, which matches the registry's own in-memory lifetime.
_private_key = ec.generate_private_key(ec.SECP256R1())
_public_key = _private_key.public_key()

ALGORITHM = "ES256"
ISSUER = "credential-registry"
AUDIENCE = "credential-registry"
ACCESS_TOKEN_TTL_MIN = 15


def create_access_token(
    *,
    sub: str,
    ttl: timedelta | None = None,
) -> str:
    """Build and sign an access token for identity `sub`.

    Claims: sub, iss, aud, exp, iat, jti.
    """
    if not sub:
        raise ValueError("sub must be non-empty")
    now = datetime.now(UTC)
    payload = {
        "sub": sub,
        "iss": ISSUER,
        "aud": AUDIENCE,
        "exp": now + (ttl or timedelta(minutes=ACCESS_TOKEN_TTL_MIN)),
        "iat": now,
        "jti": str(uuid.uuid4()),
    }
    return jwt.encode(payload, _private_key, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Verify signature and claims, return the payload.

    Pins the algorithm to ES256 (no alg:none, no alg switching) and
    validates exp, iss and aud.

    Raises jwt.ExpiredSignatureError, jwt.InvalidTokenError on failure.
    """
    return jwt.decode(
        token,
        _public_key,
        algorithms=[ALGORITHM],
        issuer=ISSUER,
        audience=AUDIENCE,
        options={"require": ["sub", "exp", "iat", "jti"]},
    )
