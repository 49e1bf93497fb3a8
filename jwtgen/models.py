from enum import Enum
from typing import Any, Dict, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import ValidationError


class ProviderError(str, Enum):
    # OAuth 2.0 token endpoint error codes (RFC 6749 section 5.2)
    INVALID_REQUEST = "invalid_request"
    INVALID_CLIENT = "invalid_client"
    INVALID_GRANT = "invalid_grant"
    UNAUTHORIZED_CLIENT = "unauthorized_client"
    UNSUPPORTED_GRANT_TYPE = "unsupported_grant_type"
    INVALID_SCOPE = "invalid_scope"


def parse_error_claim(value: Optional[str]) -> Optional[ProviderError]:
    """Map a requested error code to a ``ProviderError``.

    ``None`` means no error claim was requested. Anything that is not one of
    the known codes raises ``ValidationError`` with the offending value.
    """
    if not value:
        return None
    try:
        return ProviderError(value)
    except ValueError:
        raise ValidationError(value) from None


class ClaimsPayload(BaseModel):
    """Apple-shaped ID token claims.

    Field order matches the wire order of the emitted JSON.
    """

    model_config = ConfigDict(frozen=True)

    email: str
    error: Optional[ProviderError] = Field(default=None, serialization_alias="err")
    # Apple sends this as a string, not a bool
    email_verified: Literal["true"] = "true"
    nonce_supported: Literal[True] = True
    issuer: str = Field(serialization_alias="iss")
    subject: str = Field(serialization_alias="sub")
    audience: Tuple[str] = Field(serialization_alias="aud")
    expires_at: int = Field(serialization_alias="exp")
    issued_at: int = Field(serialization_alias="iat")

    def to_claims(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
