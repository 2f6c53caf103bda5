from typing import Literal

from dotenv import load_dotenv
from pydantic_settings import BaseSettings


class Config(BaseSettings):
    db_url: str = "sqlite+aiosqlite:///./srbrowser.db"
    env: Literal["prod", "dev"] = "prod"
    log_level: str = "INFO"

    # Speedrun middleware
    api_base_url: str = "https://sr-browser.dbeal.dev/api/v1/"
    request_timeout: float = 30.0

    # Player avatars are served by speedrun.com, keyed by the international name
    avatar_url_template: str = "https://www.speedrun.com/themes/user/{name}/image.png"

    @property
    def is_dev(self) -> bool:
        return self.env == "dev"


load_dotenv()
settings = Config()
