"""
JSON Web Key Set parsing and token verification.

``ConsulComponents.get_jwks`` returns the raw key set; these helpers turn it
into something usable.

Example:
    raw = await consul.get_jwks(status, "v1/kv/config/auth/jwks", "jwks.json")
    claims = verify_token(token, raw, algorithms=["RS256"])
"""

from typing import Any, Dict, List, Optional, Sequence, Union

from jose import JWTError, jwt
from pydantic import BaseModel, ConfigDict, Field, ValidationError


class JSONWebKey(BaseModel):
    """A single JWK. Only ``kty`` is required; key material stays in extra fields."""

    model_config = ConfigDict(extra="allow")

    kty: str
    kid: Optional[str] = None
    alg: Optional[str] = None
    use: Optional[str] = None


class JSONWebKeySet(BaseModel):
    """A JWK Set (RFC 7517 section 5)."""

    keys: List[JSONWebKey] = Field(min_length=1)

    def find(self, kid: str) -> Optional[JSONWebKey]:
        """Return the key with the given key ID, if any."""
        return next((key for key in self.keys if key.kid == kid), None)

    def as_dict(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


def parse_jwks(raw: Union[str, bytes]) -> JSONWebKeySet:
    """
    Parse and validate a raw JWKS payload.

    Raises:
        ValueError: If the payload is not a JWK Set with at least one key
    """
    try:
        return JSONWebKeySet.model_validate_json(raw)
    except ValidationError as e:
        raise ValueError(f"Invalid JWKS: {e.error_count()} error(s)") from e


def verify_token(
    token: str,
    jwks: Union[str, bytes, JSONWebKeySet],
    algorithms: Sequence[str],
    audience: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Verify a JWT against a key set and return its claims.

    When the token header names a ``kid`` only that key is tried.

    Raises:
        ValueError: If the key set is invalid or the token does not verify
    """
    key_set = jwks if isinstance(jwks, JSONWebKeySet) else parse_jwks(jwks)

    try:
        header = jwt.get_unverified_header(token)
    except JWTError as e:
        raise ValueError(f"Invalid token: {e}")

    kid = header.get("kid")
    if kid:
        key = key_set.find(kid)
        if key is None:
            raise ValueError(f"Invalid token: no key with kid '{kid}'")
        signing_key: Dict[str, Any] = {"keys": [key.model_dump(exclude_none=True)]}
    else:
        signing_key = key_set.as_dict()

    options = {"verify_aud": audience is not None}
    try:
        return jwt.decode(
            token,
            signing_key,
            algorithms=list(algorithms),
            audience=audience,
            options=options,
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e}")
