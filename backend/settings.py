from collections.abc import Mapping
import os
from pathlib import Path

from dotenv import dotenv_values
from pydantic import BaseModel, ConfigDict

_repo_dir = Path(__file__).resolve().parent.parent
DEFAULT_ENV_FILE = _repo_dir / ".env.local"


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: str = "*"
    log_level: str = "INFO"
    anthropic_api_key: str | None = None
    anthropic_api_url: str = "https://api.anthropic.com"
    anthropic_version: str = "2023-06-01"
    anthropic_model: str = "claude-opus-4-6"
    anthropic_timeout_s: float = 60.0


def _read_env_file(env_file: Path) -> dict[str, str]:
    """Load KEY=value pairs from a local env file, ignoring a missing file."""
    if not env_file.is_file():
        return {}
    return {k: v for k, v in dotenv_values(env_file).items() if v is not None}


def load_settings(env_file: Path | None = None, environ: Mapping[str, str] | None = None) -> Settings:
    """Build the process settings once at startup.

    Values from the real environment win over the ones in the local env file,
    which only serves local development.

    Args:
        env_file: Path to a ``KEY=value`` file. Defaults to ``.env.local`` at the repo root.
        environ: Environment mapping to read. Defaults to ``os.environ``.

    Returns:
        An immutable Settings instance.
    """
    process_env = environ if environ is not None else os.environ
    env = _read_env_file(env_file or DEFAULT_ENV_FILE)
    # Blank variables count as unset so they don't mask the file.
    env.update({k: v for k, v in process_env.items() if v})

    def get(name: str, default: str) -> str:
        return env.get(name) or default

    return Settings(
        host=get("HOST", "0.0.0.0"),
        port=int(get("PORT", "8000")),
        cors_origins=get("CORS_ORIGINS", "*"),
        log_level=get("LOG_LEVEL", "INFO").upper(),
        anthropic_api_key=env.get("ANTHROPIC_API_KEY") or None,
        anthropic_api_url=get("ANTHROPIC_API_URL", "https://api.anthropic.com").rstrip("/"),
        anthropic_version=get("ANTHROPIC_VERSION", "2023-06-01"),
        anthropic_model=get("ANTHROPIC_MODEL", "claude-opus-4-6"),
        anthropic_timeout_s=float(get("ANTHROPIC_TIMEOUT_S", "60")),
    )
