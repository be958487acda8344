"""Application settings for hype-rank."""

import os
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from hype_rank.runtime_config import current_runtime_config

API_KEY_NAMES = {"BALLDONTLIE_API_KEY", "HYPE_RANK_BALLDONTLIE_API_KEY"}


class Settings(BaseSettings):
    """Runtime settings for external service configuration."""

    model_config = SettingsConfigDict(
        env_prefix="HYPE_RANK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    balldontlie_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("BALLDONTLIE_API_KEY", "HYPE_RANK_BALLDONTLIE_API_KEY"),
    )
    balldontlie_base_url: str = "https://api.balldontlie.io"
    balldontlie_timeout_s: float = 10.0

    @staticmethod
    def _parse_key_file(path: Path, *, allowed_names: set[str]) -> str:
        try:
            raw = path.read_text(encoding="utf-8").strip()
        except OSError:
            return ""
        if not raw:
            return ""
        first_line = raw.splitlines()[0].strip()
        if not first_line:
            return ""
        if "=" in first_line:
            key_name, value = first_line.split("=", 1)
            if key_name.strip().upper() not in allowed_names:
                return ""
            return value.strip().strip('"').strip("'")
        return first_line.strip().strip('"').strip("'")

    @classmethod
    def from_runtime(cls) -> "Settings":
        """Construct settings from runtime config + direct secret env/key-file fallback."""
        runtime = current_runtime_config()
        config_root = runtime.config_path.parent.resolve()

        resolved_key = (
            os.environ.get("BALLDONTLIE_API_KEY", "").strip()
            or os.environ.get("HYPE_RANK_BALLDONTLIE_API_KEY", "").strip()
        )
        if not resolved_key:
            for candidate in runtime.balldontlie_key_files:
                candidate_path = Path(candidate).expanduser()
                path = (
                    candidate_path
                    if candidate_path.is_absolute()
                    else (config_root / candidate_path).resolve()
                )
                if not path.exists() or not path.is_file():
                    continue
                parsed = cls._parse_key_file(path, allowed_names=API_KEY_NAMES)
                if parsed:
                    resolved_key = parsed
                    break

        return cls(
            balldontlie_api_key=resolved_key,
            balldontlie_base_url=runtime.balldontlie_base_url,
            balldontlie_timeout_s=runtime.balldontlie_timeout_s,
        )
