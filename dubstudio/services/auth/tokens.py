# dubstudio/services/auth/tokens.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from dubstudio.common.settings import Settings, get_settings
from dubstudio.domain.errors import AuthenticationError


@dataclass(frozen=True)
class Principal:
    """The caller, as asserted by a verified bearer token."""
    user_id: int
    role: str
    username: Optional[str] = None

    def has_role(self, role: str) -> bool:
        return self.role == role


def issue_token(
    user_id: int,
    role: str,
    username: Optional[str] = None,
    *,
    cfg: Optional[Settings] = None,
    ttl_sec: Optional[int] = None,
) -> str:
    cfg = cfg or get_settings()
    now = datetime.now(timezone.utc)
    claims = {
        "sub": str(user_id),
        "role": role,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(seconds=ttl_sec or cfg.auth.token_ttl_sec)).timestamp()),
    }
    if username:
        claims["username"] = username
    return jwt.encode(claims, cfg.auth.jwt_secret, algorithm=cfg.auth.jwt_algo)


def decode_token(token: str, *, cfg: Optional[Settings] = None) -> Principal:
    cfg = cfg or get_settings()
    try:
        claims = jwt.decode(token, cfg.auth.jwt_secret, algorithms=[cfg.auth.jwt_algo])
        return Principal(
            user_id=int(claims["sub"]),
            role=str(claims.get("role") or ""),
            username=claims.get("username"),
        )
    except (JWTError, KeyError, TypeError, ValueError) as e:
        raise AuthenticationError("Invalid or expired token") from e
