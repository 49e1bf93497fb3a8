from typing import Optional, Any, Dict
from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict, PydanticBaseSettingsSource
import os
import json
import tomllib
from pathlib import Path

DEFAULT_ISSUER = "https://appleid.apple.com"
DEFAULT_AUDIENCE = "com.fake.fake.AppleSignIn"
DEFAULT_SUBJECT = "Test User"
DEFAULT_EMAIL = "test@example.com"
# Arbitrary, only needs to look like an Apple key id.
DEFAULT_KEY_ID = "86D88Kf"

CONFIG_FILE_ENV = "JWTGEN_CONFIG_FILE"


class Settings(BaseSettings):
    # Claim defaults, overridden per invocation by CLI flags
    ISSUER: str = DEFAULT_ISSUER
    AUDIENCE: str = DEFAULT_AUDIENCE
    SUBJECT: str = DEFAULT_SUBJECT
    EMAIL: str = DEFAULT_EMAIL

    # Header
    KEY_ID: str = DEFAULT_KEY_ID

    # Logging (stderr; stdout is reserved for debug JSON and the token)
    LOG_LEVEL: str = "WARNING"
    LOG_FILE: Optional[str] = None

    # Do NOT auto-load .env; environment variables and an optional config file only.
    # The config file path comes from JWTGEN_CONFIG_FILE (JSON/TOML). Env vars override file.
    model_config = SettingsConfigDict(case_sensitive=True, env_prefix="JWTGEN_")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,  # environment has priority over file
            _FileConfigSource(settings_cls),
            file_secret_settings,
        )


class _FileConfigSource(PydanticBaseSettingsSource):
    def __init__(self, settings_cls: type[BaseSettings]) -> None:
        super().__init__(settings_cls)
        self._data: Dict[str, Any] = {}
        cfg = os.environ.get(CONFIG_FILE_ENV)
        if not cfg:
            return
        path = Path(cfg).expanduser().resolve()
        if not path.is_file():
            return
        try:
            data: Dict[str, Any] = {}
            suffix = path.suffix.lower()
            if suffix == ".json":
                with path.open("r", encoding="utf-8") as f:
                    data = json.load(f) or {}
            elif suffix == ".toml":
                with path.open("rb") as f:
                    data = tomllib.load(f) or {}
            # Normalize to uppercase keys
            if isinstance(data, dict):
                self._data = {str(k).upper(): v for k, v in data.items()}
        except (OSError, ValueError):
            self._data = {}

    def get_field_value(self, field, field_name: str) -> tuple[Any, str, bool]:
        value = self._data.get(field_name.upper())
        return value, field_name, False

    def __call__(self) -> Dict[str, Any]:
        names = self.settings_cls.model_fields.keys()
        return {k: v for k, v in self._data.items() if k in names}


def load_settings(**overrides: Any) -> Settings:
    return Settings(**overrides)


class GeneratorConfig(BaseModel):
    """Everything one invocation needs, resolved once and never mutated."""

    model_config = ConfigDict(frozen=True)

    issuer: str = DEFAULT_ISSUER
    audience: str = DEFAULT_AUDIENCE
    expired: bool = False
    subject: str = DEFAULT_SUBJECT
    email: str = DEFAULT_EMAIL
    error: Optional[str] = None
    pretty: bool = False
    debug: bool = False
    key_id: str = DEFAULT_KEY_ID

    @classmethod
    def from_args(cls, args: Any) -> "GeneratorConfig":
        return cls(
            issuer=args.iss,
            audience=args.aud,
            expired=args.expired,
            subject=args.sub,
            email=args.email,
            error=args.error or None,
            pretty=args.pp,
            debug=args.debug,
            key_id=args.kid,
        )
