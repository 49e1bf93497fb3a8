import json
import logging
import sys
from typing import Any, Dict, Optional, TextIO

from jose import jwt
from jose.exceptions import JOSEError

from .exceptions import SigningError
from .keys import KeyProvider, load_private_key, private_key_pem_for_jose
from .models import ClaimsPayload
from .settings import DEFAULT_KEY_ID

ALGORITHM = "RS256"

logger = logging.getLogger("jwtgen.signer")


def token_header(key_id: str = DEFAULT_KEY_ID) -> Dict[str, Any]:
    return {"alg": ALGORITHM, "kid": key_id, "typ": "JWT"}


def render_json(obj: Any, pretty: bool = False) -> str:
    if pretty:
        return json.dumps(obj, indent=4)
    return json.dumps(obj, separators=(",", ":"))


def sign_token(
    payload: ClaimsPayload,
    key_provider: KeyProvider,
    *,
    key_id: str = DEFAULT_KEY_ID,
    debug: bool = False,
    pretty: bool = False,
    out: Optional[TextIO] = None,
) -> str:
    """Sign ``payload`` as a compact RS256 JWT and print it to ``out``.

    With ``debug`` the header and claims are printed first, one JSON document
    each. Raises ``SigningError`` if the key cannot be loaded or signing fails;
    nothing but the debug JSON is printed in that case.
    """
    out = out or sys.stdout
    header = token_header(key_id)
    claims = payload.to_claims()

    if debug:
        print(render_json(header, pretty), file=out)
        print(render_json(claims, pretty), file=out)

    key = load_private_key(key_provider)
    try:
        token = jwt.encode(claims, private_key_pem_for_jose(key), algorithm=ALGORITHM, headers={"kid": key_id})
    except (JOSEError, ValueError, TypeError) as exc:
        raise SigningError(f"Error signing token: {exc}") from exc

    logger.info("token_signed", extra={"extra": {"subject": payload.subject, "kid": key_id, "exp": payload.expires_at}})
    print(token, file=out)
    return token
