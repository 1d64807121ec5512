"""Configuration models and loading."""

import json
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

CONFIG_DIR = Path.home() / ".config" / "music-gateway"
CONFIG_FILE = CONFIG_DIR / "config.json"

BROWSER_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"


class ServerSettings(BaseModel):
    host: str = "127.0.0.1"
    port: int = 8080
    debug: bool = False


class AudioSettings(BaseModel):
    host_suffix: str = "kuwo.cn"
    referer: str = "https://www.kuwo.cn/"
    default_user_agent: str = "Mozilla/5.0"


class PrimarySettings(BaseModel):
    base_url: str = "https://music-api.gdstudio.xyz/api.php"
    default_user_agent: str = "Mozilla/5.0"


class KugouSettings(BaseModel):
    base_url: str = "https://kugo.520me.cf"
    referer: str = "https://m.kugou.com/"
    origin: str = "https://m.kugou.com"
    default_user_agent: str = BROWSER_USER_AGENT


class LimitsSettings(BaseModel):
    # None disables the client-side timeout; the hosting runtime's applies
    timeout: float | None = None
    max_connections: int = 100
    max_keepalive_connections: int = 20
    keep_alive_timeout: int = 5


class Config(BaseModel):
    server: ServerSettings = Field(default_factory=ServerSettings)
    audio: AudioSettings = Field(default_factory=AudioSettings)
    primary: PrimarySettings = Field(default_factory=PrimarySettings)
    kugou: KugouSettings = Field(default_factory=KugouSettings)
    limits: LimitsSettings = Field(default_factory=LimitsSettings)


def load_config(config_file: Path = CONFIG_FILE) -> Config:
    """Load configuration from JSON file, creating default if needed."""
    if not config_file.exists():
        config_file.parent.mkdir(parents=True, exist_ok=True)
        default = Config()
        config_file.write_text(default.model_dump_json(indent=2))
        return default

    try:
        data = json.loads(config_file.read_text())
        return Config.model_validate(data)
    except (json.JSONDecodeError, ValidationError):
        # Backup corrupted config and recreate default
        backup = config_file.with_suffix(".json.bak")
        config_file.rename(backup)
        default = Config()
        config_file.write_text(default.model_dump_json(indent=2))
        return default
