# settings.py
import os
from dataclasses import dataclass

DEFAULT_HOST = "example.com"

@dataclass(frozen=True)
class Settings:
    host: str
    key: str
    key_location: str
    token: str
    extra_endpoints: str
    http_timeout: float
    log_level: str

    @property
    def has_key(self) -> bool:
        return bool(self.key)

    @property
    def has_token(self) -> bool:
        return bool(self.token)

def _derive_key_location(host: str, key: str) -> str:
    return f"https://{host}/{key}.txt" if key else ""

def load_settings() -> Settings:
    """
    Snapshot the environment. Called per request so operators can
    change config without restarting.
    """
    host = (os.getenv("HOST") or DEFAULT_HOST).strip()
    key = (os.getenv("INDEXNOW_KEY") or "").strip()
    key_location = (os.getenv("INDEXNOW_KEY_LOCATION") or "").strip() or _derive_key_location(host, key)

    return Settings(
        host=host,
        key=key,
        key_location=key_location,
        token=os.getenv("INDEXNOW_TOKEN") or "",
        extra_endpoints=os.getenv("INDEXNOW_EXTRA_ENDPOINTS", ""),
        http_timeout=float(os.getenv("HTTP_TIMEOUT", "20")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
