from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from jose import jwt
from jose.exceptions import JWTError
from fittrack.schemas.identity import Identity, IdentityMode
from fittrack.settings import get_settings

# Tokens are minted by the auth service. create_access_token exists for local
# development and tests; production code only ever decodes.

def create_access_token(
    sub: str,
    *,
    mode: IdentityMode = IdentityMode.real,
    expires_minutes: int = 60,
    extra: Optional[Dict[str, Any]] = None,
) -> str:
    s = get_settings()
    now = datetime.now(timezone.utc)
    exp = now + timedelta(minutes=expires_minutes)
    payload: Dict[str, Any] = {
        "sub": sub,
        "mode": mode.value,
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
    }
    if extra:
        payload.update(extra)
    return jwt.encode(payload, s.SECRET_KEY, algorithm=s.ALGORITHM)

def decode_token(token: str) -> Dict[str, Any]:
    """
    Verify signature and expiration. Raise if token is expired/invalid.
    """
    s = get_settings()
    payload = jwt.decode(
        token,
        s.SECRET_KEY,
        algorithms=[s.ALGORITHM],
        options={"verify_signature": True, "verify_exp": True},
    )
    if "exp" not in payload:
        raise JWTError("Missing exp")
    return payload

def identity_from_token(token: str) -> Identity:
    """Map verified claims to an Identity. Raises JWTError on bad claims."""
    payload = decode_token(token)
    sub = payload.get("sub")
    if not sub:
        raise JWTError("Missing sub")
    try:
        mode = IdentityMode(payload.get("mode", IdentityMode.real.value))
    except ValueError:
        raise JWTError("Unknown identity mode")
    converted_from = payload.get("converted_from")
    return Identity(
        owner_id=str(sub),
        mode=mode,
        converted_from=str(converted_from) if converted_from else None,
    )
