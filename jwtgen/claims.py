import logging
from datetime import datetime, timezone
from typing import Optional

from .models import ClaimsPayload, parse_error_claim
from .settings import GeneratorConfig

# Documented as "two years" upstream; the literal value is what tokens carry.
EXPIRATION_OFFSET_SECONDS = 100_000_000

logger = logging.getLogger("jwtgen.claims")


def build_claims(config: GeneratorConfig, now: Optional[datetime] = None) -> ClaimsPayload:
    """Build the claims payload for ``config``.

    The clock is read once so ``iat`` and ``exp`` are always exactly
    ``EXPIRATION_OFFSET_SECONDS`` apart. Raises ``ValidationError`` for an
    unknown error code before anything else is assembled.
    """
    error = parse_error_claim(config.error)

    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        # naive values are UTC, not local time
        now = now.replace(tzinfo=timezone.utc)
    issued_at = int(now.timestamp())
    if config.expired:
        expires_at = issued_at - EXPIRATION_OFFSET_SECONDS
    else:
        expires_at = issued_at + EXPIRATION_OFFSET_SECONDS

    payload = ClaimsPayload(
        email=config.email,
        error=error,
        issuer=config.issuer,
        subject=config.subject,
        audience=(config.audience,),
        expires_at=expires_at,
        issued_at=issued_at,
    )
    logger.debug(
        "claims_built",
        extra={"extra": {"subject": payload.subject, "expired": config.expired, "error": error.value if error else None}},
    )
    return payload
