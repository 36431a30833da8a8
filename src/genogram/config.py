"""Layout constants and application settings."""

from dataclasses import dataclass
import os
from pathlib import Path

from dotenv import load_dotenv


@dataclass(frozen=True)
class LayoutConfig:
    base_x: float = 100.0
    base_y: float = 100.0
    slot_width: float = 180.0  # horizontal distance between neighbouring people
    band_spacing: float = 160.0  # vertical distance between generations
    band_stagger: float = 50.0  # extra left offset per band, visual only

    @property
    def half_slot(self) -> float:
        return self.slot_width / 2


DEFAULT_LAYOUT = LayoutConfig()


@dataclass(frozen=True)
class AppConfig:
    data_dir: Path
    db_path: Path
    gemini_api_key: str | None = None
    gemini_model: str = "gemini-2.0-flash"
    request_timeout: float = 120.0

    @classmethod
    def from_env(cls, env_file: str | os.PathLike | None = None) -> "AppConfig":
        """
        Build settings from the process environment.

        A .env file (or `env_file`) is loaded first; variables already set in
        the environment take precedence.
        """
        load_dotenv(env_file)

        data_dir = Path(os.getenv("GENOGRAM_DATA_DIR", "data"))
        db_path = Path(os.getenv("GENOGRAM_DB_PATH", str(data_dir / "genogram.db")))
        return cls(
            data_dir=data_dir,
            db_path=db_path,
            gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
            gemini_model=os.getenv("GEMINI_MODEL", "gemini-2.0-flash"),
            request_timeout=float(os.getenv("GEMINI_TIMEOUT", "120")),
        )
