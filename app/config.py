import os

from dotenv import load_dotenv

load_dotenv()


class ConfigError(RuntimeError):
    """Raised when a required setting is missing or malformed."""


def require_env(name: str) -> str:
    value = os.getenv(name, "").strip()
    if not value:
        raise ConfigError(f"{name} is not set")
    return value


def parse_seconds(name: str, raw: str) -> float:
    try:
        seconds = float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from None
    if seconds <= 0:
        raise ConfigError(f"{name} must be positive, got {raw!r}")
    return seconds


def parse_port(raw: str) -> int:
    try:
        port = int(raw)
    except ValueError:
        raise ConfigError(f"PORT must be an integer, got {raw!r}") from None
    if not 0 < port < 65536:
        raise ConfigError(f"PORT out of range: {port}")
    return port


# Debounce window: a call fires this long after the last trigger for its key.
DEBOUNCE_TIME_S = parse_seconds("DEBOUNCE_TIME_S", require_env("DEBOUNCE_TIME_S"))

PORT = parse_port(require_env("PORT"))

HOST = os.getenv("HOST", "0.0.0.0")

# Timeout applied to every outbound webhook call (seconds).
DISPATCH_TIMEOUT_SECONDS = parse_seconds(
    "DISPATCH_TIMEOUT_SECONDS", os.getenv("DISPATCH_TIMEOUT_SECONDS", "10")
)

# Logging format: "pretty" for colorized console, "json" for structured JSON.
LOG_FORMAT = os.getenv("LOG_FORMAT", "pretty")
