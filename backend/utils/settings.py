# backend/utils/settings.py

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from utils.errors import ConfigError

BACKEND_DIR = Path(__file__).resolve().parents[1]
DEFAULT_DATA_DIR = BACKEND_DIR / "data"
DEFAULT_PUBLIC_DIR = BACKEND_DIR / "public"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000


@dataclass(frozen=True)
class Settings:
    """
    Runtime settings, read once at startup.
    Everything else receives this object instead of calling os.getenv.
    """

    data_dir: Path
    public_dir: Path
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    allowed_origins: Sequence[str] = ("*",)

    @classmethod
    def from_env(cls) -> "Settings":
        data_dir = os.getenv("DATA_DIR") or str(DEFAULT_DATA_DIR)
        public_dir = os.getenv("PUBLIC_DIR") or str(DEFAULT_PUBLIC_DIR)
        origins = os.getenv("CORS_ALLOWED_ORIGINS", "*").split(",")

        return cls(
            data_dir=Path(data_dir).expanduser().resolve(),
            public_dir=Path(public_dir).expanduser().resolve(),
            host=os.getenv("HOST", DEFAULT_HOST),
            port=_parse_port(os.getenv("PORT", str(DEFAULT_PORT))),
            allowed_origins=[o.strip() for o in origins if o.strip()] or ["*"],
        )


def _parse_port(raw: str) -> int:
    try:
        port = int(raw)
    except ValueError as error:
        raise ConfigError(f"Invalid PORT value: expected integer, got '{raw}'") from error

    if not 0 < port < 65536:
        raise ConfigError(f"Invalid PORT value: {port} is out of range")
    return port
