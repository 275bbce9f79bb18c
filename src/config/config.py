import os
from dataclasses import dataclass

from dotenv import load_dotenv

from exceptions.custom_exceptions import ConfigurationError
from utils.constants import (
    DEFAULT_LOCAL_ENDPOINT,
    DEFAULT_REGION,
    DEFAULT_SERVER_PORT,
    DEFAULT_TABLE_NAME,
    DYNAMODB_BATCH_LIMIT,
    FULL_GEOHASH_PRECISION,
    GEOHASH_PRECISION,
    AppEnv,
)


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def _env_number(name: str, default, parse):
    raw = os.getenv(name, str(default)).strip()
    try:
        return parse(raw)
    except ValueError as exc:
        raise ConfigurationError(
            f"{name} must be a valid {parse.__name__}", {name.lower(): raw}
        ) from exc


def _resolve_app_env(raw: str) -> str:
    value = raw.strip().lower()
    if value in (AppEnv.LOCAL.value, AppEnv.DEVELOPMENT.value):
        return value
    return AppEnv.PRODUCTION.value


@dataclass(frozen=True)
class Settings:
    app_env: str
    aws_region: str
    dynamodb_endpoint: str
    dynamodb_table_name: str
    geohash_precision: int
    full_geohash_precision: int
    batch_write_size: int
    server_port: int
    latency_injection_enabled: bool
    latency_base_delay_ms: int
    fault_injection_rate: float
    log_level: str

    def __init__(self):
        load_dotenv()
        object.__setattr__(
            self, "app_env", _resolve_app_env(os.getenv("APP_ENV", "production"))
        )
        object.__setattr__(
            self, "aws_region", os.getenv("AWS_REGION", "").strip() or DEFAULT_REGION
        )
        object.__setattr__(
            self,
            "dynamodb_endpoint",
            os.getenv("DYNAMODB_ENDPOINT", DEFAULT_LOCAL_ENDPOINT).strip(),
        )
        object.__setattr__(
            self,
            "dynamodb_table_name",
            os.getenv("DYNAMODB_TABLE_NAME", DEFAULT_TABLE_NAME).strip(),
        )
        object.__setattr__(
            self,
            "geohash_precision",
            _env_number("GEOHASH_PRECISION", GEOHASH_PRECISION, int),
        )
        object.__setattr__(
            self,
            "full_geohash_precision",
            _env_number("FULL_GEOHASH_PRECISION", FULL_GEOHASH_PRECISION, int),
        )
        object.__setattr__(
            self,
            "batch_write_size",
            _env_number("BATCH_WRITE_SIZE", DYNAMODB_BATCH_LIMIT, int),
        )
        object.__setattr__(
            self,
            "server_port",
            _env_number("SERVER_PORT", DEFAULT_SERVER_PORT, int),
        )
        object.__setattr__(
            self, "latency_injection_enabled", _env_bool("LATENCY_INJECTION_ENABLED")
        )
        object.__setattr__(
            self,
            "latency_base_delay_ms",
            _env_number("LATENCY_BASE_DELAY_MS", 0, int),
        )
        object.__setattr__(
            self,
            "fault_injection_rate",
            _env_number("FAULT_INJECTION_RATE", 0.0, float),
        )
        object.__setattr__(
            self, "log_level", os.getenv("LOG_LEVEL", "INFO").strip().upper()
        )

    @property
    def is_local(self) -> bool:
        return self.app_env in (AppEnv.LOCAL.value, AppEnv.DEVELOPMENT.value)


def validate_settings(settings: Settings) -> Settings:
    if settings.geohash_precision < 1:
        raise ConfigurationError(
            "GEOHASH_PRECISION must be positive",
            {"geohash_precision": settings.geohash_precision},
        )
    if settings.full_geohash_precision < settings.geohash_precision:
        raise ConfigurationError(
            "FULL_GEOHASH_PRECISION must not be coarser than GEOHASH_PRECISION",
            {
                "geohash_precision": settings.geohash_precision,
                "full_geohash_precision": settings.full_geohash_precision,
            },
        )
    if not 1 <= settings.batch_write_size <= DYNAMODB_BATCH_LIMIT:
        raise ConfigurationError(
            f"BATCH_WRITE_SIZE must be between 1 and {DYNAMODB_BATCH_LIMIT}",
            {"batch_write_size": settings.batch_write_size},
        )
    if not 0.0 <= settings.fault_injection_rate <= 1.0:
        raise ConfigurationError(
            "FAULT_INJECTION_RATE must be between 0 and 1",
            {"fault_injection_rate": settings.fault_injection_rate},
        )
    return settings


SETTINGS = Settings()
