# config/bot_config.py
import os
from dataclasses import dataclass
from dotenv import load_dotenv
load_dotenv()


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class BotConfig:
    telegram_token: str
    log_level: str = "INFO"
    log_dir: str = ""
    user_agent: str = "BOTPADIL/1.0 (+https://github.com/)"
    http_timeout: float = 30.0
    render_enabled: bool = False
    screenshot_fallback: bool = False
    raster_fallback: bool = False
    port: int = 3000

    @classmethod
    def load(cls):
        return cls(
            telegram_token=os.getenv("TELEGRAM_BOT_TOKEN", ""),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_dir=os.getenv("LOG_DIR", ""),
            user_agent=os.getenv("HTTP_USER_AGENT", "BOTPADIL/1.0 (+https://github.com/)"),
            http_timeout=float(os.getenv("HTTP_TIMEOUT", "30")),
            render_enabled=_env_flag("RENDER_ENABLED"),
            screenshot_fallback=_env_flag("SCREENSHOT_FALLBACK"),
            raster_fallback=_env_flag("BMKG_RASTER_FALLBACK"),
            port=int(os.getenv("PORT", "3000"))
        )
