import argparse
import logging
import sys
from typing import List, Optional, TextIO

from pydantic import ValidationError as SettingsValidationError

from .claims import build_claims
from .exceptions import JwtGenError
from .keys import EmbeddedKeyProvider, KeyProvider, public_jwks
from .logging_config import configure_logging
from .settings import GeneratorConfig, Settings, load_settings
from .signer import render_json, sign_token

EXAMPLES = """\
Example usages:
  Generate a default, valid token:
    jwtgen
  Generate a default, valid token, and pretty-print debug information:
    jwtgen --debug -pp
  Generate an expired token for cole@test.com:
    jwtgen --expired --email=cole@test.com
  Same, in the -name=value form:
    jwtgen -expired=true -email=cole@test.com
  Print the public key as a JWKS for the verifier under test:
    jwtgen --jwks -pp
"""

logger = logging.getLogger("jwtgen.cli")

# Spellings accepted by Go's strconv.ParseBool
_TRUE = {"1", "t", "T", "true", "TRUE", "True"}
_FALSE = {"0", "f", "F", "false", "FALSE", "False"}


def parse_bool(value: str) -> bool:
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise argparse.ArgumentTypeError(f"invalid boolean value: {value!r}")


def _add_flag(ap: argparse.ArgumentParser, name: str, help: str) -> None:
    # bare -name means true; -name=false turns it off again
    ap.add_argument(f"-{name}", f"--{name}", type=parse_bool, nargs="?", const=True, default=False, metavar="BOOL", help=help)


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="jwtgen",
        description="Generate Sign in with Apple shaped JWTs for local testing.",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
    )
    ap.add_argument("-iss", "--iss", default=settings.ISSUER, help="Issuer for token")
    ap.add_argument("-aud", "--aud", default=settings.AUDIENCE, help="Audience for token")
    _add_flag(ap, "expired", "Should the token be expired, defaults to false")
    ap.add_argument("-sub", "--sub", default=settings.SUBJECT, help="Subject of the token")
    ap.add_argument("-email", "--email", default=settings.EMAIL, help="Email of user")
    ap.add_argument("-error", "--error", default="", help="Specify an error code in this token")
    _add_flag(ap, "pp", "Pretty print JSON, defaults to false")
    _add_flag(ap, "debug", "Print the header and claims before signing")
    ap.add_argument("-kid", "--kid", default=settings.KEY_ID, help="Key ID placed in the token header")
    _add_flag(ap, "jwks", "Print the public key as a JWKS and exit")
    return ap


def _describe(exc: SettingsValidationError) -> str:
    return "; ".join(f"{'.'.join(str(p) for p in e['loc'])}: {e['msg']}" for e in exc.errors())


def run(argv: List[str], key_provider: Optional[KeyProvider] = None, out: Optional[TextIO] = None) -> int:
    out = out or sys.stdout
    try:
        settings = load_settings()
    except SettingsValidationError as exc:
        print("ERROR:", f"Invalid configuration: {_describe(exc)}", file=out)
        return 1
    try:
        configure_logging(settings.LOG_LEVEL, settings.LOG_FILE)
    except OSError as exc:
        print("ERROR:", f"Cannot open log file {settings.LOG_FILE}: {exc}", file=out)
        return 1
    args = build_parser(settings).parse_args(argv)
    config = GeneratorConfig.from_args(args)
    key_provider = key_provider or EmbeddedKeyProvider()

    try:
        if args.jwks:
            print(render_json(public_jwks(key_provider, config.key_id), config.pretty), file=out)
            return 0
        claims = build_claims(config)
        sign_token(claims, key_provider, key_id=config.key_id, debug=config.debug, pretty=config.pretty, out=out)
    except JwtGenError as exc:
        logger.error("generate_failed", extra={"extra": {"error_type": type(exc).__name__, "detail": exc.message}})
        print("ERROR:", exc.message, file=out)
        return 1
    return 0


def main() -> None:
    sys.exit(run(sys.argv[1:]))
