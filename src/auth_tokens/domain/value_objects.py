"""
Domain value objects for the token lifecycle.

Value objects are immutable: a refresh replaces a TokenPair as a whole,
it never updates individual fields.
"""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any

from jose import jwt, JWTError

from auth_tokens.domain.errors import InvalidTokenError


# ═══════════════════════════════════════════════════════════════
# JWT
# ═══════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class JWT:
    """
    A signed token together with its decoded claims.

    Claims are read without verifying the signature: this package only
    needs the expiry and subject, validation belongs to the resource server.
    """

    raw: str
    payload: Dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def decode(cls, raw: str) -> "JWT":
        """
        Decode a raw token string.

        Raises:
            InvalidTokenError: If the token is not a decodable JWT
        """
        if not raw:
            raise InvalidTokenError("Empty token", "EMPTY_TOKEN")
        try:
            payload = jwt.get_unverified_claims(raw)
        except JWTError as e:
            raise InvalidTokenError(str(e), "TOKEN_DECODE_ERROR")
        return cls(raw=raw, payload=payload)

    @property
    def exp(self) -> Optional[int]:
        """Expiration claim in seconds since epoch."""
        value = self.payload.get("exp")
        return int(value) if value is not None else None

    @property
    def iat(self) -> Optional[int]:
        value = self.payload.get("iat")
        return int(value) if value is not None else None

    @property
    def sub(self) -> Optional[str]:
        return self.payload.get("sub")

    def __str__(self) -> str:
        return self.raw

    def __repr__(self) -> str:
        # Never leak the raw token into logs or tracebacks
        return f"JWT(sub={self.sub!r}, exp={self.exp!r})"


# ═══════════════════════════════════════════════════════════════
# TOKEN PAIR
# ═══════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class TokenPair:
    """
    The token bundle owned by the token store.

    clock_drift is an offset in milliseconds added to a token's expiry
    before comparing it with the local clock. None means the issuer of
    this pair did not supply one.
    """

    access_token: JWT
    id_token: Optional[JWT] = None
    refresh_token: Optional[str] = field(default=None, repr=False)
    clock_drift: Optional[int] = None

    @property
    def effective_clock_drift(self) -> int:
        return self.clock_drift or 0

    @classmethod
    def from_raw(
        cls,
        access_token: str,
        id_token: Optional[str] = None,
        refresh_token: Optional[str] = None,
        clock_drift: Optional[int] = None,
    ) -> "TokenPair":
        """Build a pair from raw token strings as returned by an IdP."""
        return cls(
            access_token=JWT.decode(access_token),
            id_token=JWT.decode(id_token) if id_token else None,
            refresh_token=refresh_token or None,
            clock_drift=clock_drift,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Storage representation (raw strings only)."""
        return {
            "access_token": self.access_token.raw,
            "id_token": self.id_token.raw if self.id_token else None,
            "refresh_token": self.refresh_token,
            "clock_drift": self.clock_drift,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TokenPair":
        return cls.from_raw(
            access_token=data["access_token"],
            id_token=data.get("id_token"),
            refresh_token=data.get("refresh_token"),
            clock_drift=data.get("clock_drift"),
        )

    def to_auth_tokens(self) -> "AuthTokens":
        return AuthTokens(access_token=self.access_token, id_token=self.id_token)


@dataclass(frozen=True)
class AuthTokens:
    """
    Tokens handed out to callers.

    Carries no refresh token and no clock drift.
    """

    access_token: JWT
    id_token: Optional[JWT] = None
