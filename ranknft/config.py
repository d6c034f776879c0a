"""Service settings read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

LAST_CYCLE = "last_cycle"
ROLLING_24H = "rolling_24h"
RANKING_MODES = (LAST_CYCLE, ROLLING_24H)

DEFAULT_RESERVOIR_URL = "https://api-apechain.reservoir.tools"


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name, "").strip().lower()
    if not value:
        return default
    return value in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    """Runtime configuration. Build with Settings.from_env()."""

    reservoir_api_key: str = ""
    reservoir_base_url: str = DEFAULT_RESERVOIR_URL
    server_url: str = ""
    host: str = "0.0.0.0"
    port: int = 3000
    data_dir: Path = Path("data")
    assets_dir: Path = Path("assets")
    images_dir: Path = Path("images")
    update_interval: float = 300.0
    cycle_timeout: float = 240.0
    ranking_mode: str = LAST_CYCLE
    sticky_colors: bool = True
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, dotenv: bool = True) -> Settings:
        """Read settings from os.environ, after loading `.env` if present.

        Raises ValueError for an unknown RANKING_MODE or non-numeric numbers.
        """
        if dotenv:
            load_dotenv()

        mode = os.environ.get("RANKING_MODE", LAST_CYCLE).strip().lower() or LAST_CYCLE
        if mode not in RANKING_MODES:
            raise ValueError(f"RANKING_MODE must be one of {RANKING_MODES}, got {mode!r}")

        return cls(
            reservoir_api_key=os.environ.get("RESERVOIR_API_KEY", "").strip(),
            reservoir_base_url=os.environ.get("RESERVOIR_BASE_URL", DEFAULT_RESERVOIR_URL).strip(),
            server_url=os.environ.get("SERVER_URL", "").strip().rstrip("/"),
            host=os.environ.get("HOST", "0.0.0.0"),
            port=int(os.environ.get("PORT", "3000")),
            data_dir=Path(os.environ.get("DATA_DIR", "data")),
            assets_dir=Path(os.environ.get("ASSETS_DIR", "assets")),
            images_dir=Path(os.environ.get("IMAGES_DIR", "images")),
            update_interval=float(os.environ.get("UPDATE_INTERVAL", "300")),
            cycle_timeout=float(os.environ.get("CYCLE_TIMEOUT", "240")),
            ranking_mode=mode,
            sticky_colors=_env_bool("STICKY_COLORS", True),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        )

    @property
    def rankings_file(self) -> Path:
        return self.data_dir / "previous_rankings.json"

    @property
    def colors_file(self) -> Path:
        return self.data_dir / "previous_colors.json"

    @property
    def history_file(self) -> Path:
        return self.data_dir / "rankings_history.json"
