import os
from dataclasses import dataclass
from typing import Mapping

from dotenv import load_dotenv


load_dotenv("secrets.env", override=False)


class ConfigError(RuntimeError):
    pass


class NoProvidersError(ConfigError):
    pass


def env(name: str, default: str | None = None) -> str:
    value = os.getenv(name, default)
    if value is None:
        raise ConfigError(f"Missing required env var: {name}")
    return value


def env_bool(name: str, default: str = "false") -> bool:
    value = os.getenv(name, default).strip().lower()
    return value in {"1", "true", "yes", "y", "on"}


@dataclass(frozen=True)
class Provider:
    location: str
    url: str


class Settings:
    user_agent = env("GBFS_USER_AGENT", "GbfsExporter/0.1")
    request_timeout_s = int(os.getenv("REQUEST_TIMEOUT_S", 20))
    ingest_interval_s = float(os.getenv("INGEST_INTERVAL_S", 300))
    feed_name = env("GBFS_FEED_NAME", "free_bike_status")
    feed_language = os.getenv("GBFS_LANGUAGE", "en")
    ingest_log = env_bool("INGEST_LOG", "true")
    provider_prefix = os.getenv("PROVIDER_PREFIX", "provider")
    metrics_port = int(os.getenv("METRICS_PORT", 9100))
    api_host = os.getenv("API_HOST", "0.0.0.0")
    api_port = int(os.getenv("API_PORT", 8080))
    api_background_ingest = env_bool("API_BACKGROUND_INGEST", "true")
    log_level = os.getenv("LOG_LEVEL", "INFO")


def load_providers(environ: Mapping[str, str] | None = None) -> list[Provider]:
    """
    Reads providerN_region / providerN_url pairs starting at N=1.

    Scanning stops at the first index where both variables are unset or empty.
    An index with only one of the two set is skipped.
    """
    environ = os.environ if environ is None else environ
    prefix = Settings.provider_prefix
    providers: list[Provider] = []
    index = 1
    while True:
        location = environ.get(f"{prefix}{index}_region", "").strip()
        url = environ.get(f"{prefix}{index}_url", "").strip()
        if not location and not url:
            break
        if location and url:
            providers.append(Provider(location=location, url=url))
        index += 1
    if not providers:
        raise NoProvidersError("no providers found in environment variables")
    return providers
