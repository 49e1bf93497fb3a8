from .claims import EXPIRATION_OFFSET_SECONDS, build_claims
from .exceptions import JwtGenError, SigningError, ValidationError
from .keys import EmbeddedKeyProvider, KeyProvider, StaticKeyProvider
from .models import ClaimsPayload, ProviderError
from .settings import GeneratorConfig
from .signer import sign_token

__all__ = [
    "EXPIRATION_OFFSET_SECONDS",
    "build_claims",
    "JwtGenError",
    "SigningError",
    "ValidationError",
    "EmbeddedKeyProvider",
    "KeyProvider",
    "StaticKeyProvider",
    "ClaimsPayload",
    "ProviderError",
    "GeneratorConfig",
    "sign_token",
]
