import tomllib
from functools import cache
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal
from pydantic_settings import BaseSettings, SettingsConfigDict


# Raise when required configuration is missing at startup.
class ConfigError(Exception):
    pass


class AppConfig(BaseSettings):

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    mode: Literal["prod", "dev"] = "prod"

    api_host: str = "0.0.0.0"
    api_port: int = 8000

    replicate_api_token: str = ""
    replicate_base_url: str = "https://api.replicate.com/v1"

    config_file: str = "config.toml"

    def require_token(self) -> str:
        if not self.replicate_api_token:
            raise ConfigError("REPLICATE_API_TOKEN must be set before starting the server.")
        return self.replicate_api_token


@dataclass
class ModelConfig:
    ref: str = "jagilley/controlnet-scribble:435061a1b5a4c1e26740464bf786efdfa9cb3a3ac488595a2de23e143fdb0117"
    a_prompt: str = "best quality, extremely detailed"
    n_prompt: str = (
        "longbody, lowres, bad anatomy, bad hands, missing fingers, extra digit, "
        "fewer digits, cropped, worst quality, low quality"
    )
    poll_interval: float = 1.0

    @staticmethod
    def load(toml: dict[str, Any]) -> "ModelConfig":
        return ModelConfig(
            ref=toml["ref"],
            a_prompt=toml["a_prompt"],
            n_prompt=toml["n_prompt"],
            poll_interval=float(toml["poll_interval"]),
        )


@dataclass
class UIConfig:
    proxy_url: str = "http://localhost:8000/api/replicate"
    canvas_size: int = 400
    stroke_width: int = 4
    stroke_color: str = "#000"

    @staticmethod
    def load(toml: dict[str, Any]) -> "UIConfig":
        return UIConfig(
            proxy_url=toml["proxy_url"],
            canvas_size=int(toml["canvas_size"]),
            stroke_width=int(toml["stroke_width"]),
            stroke_color=toml["stroke_color"],
        )


# Just read this config when needed.
@dataclass
class Config:
    model: ModelConfig = field(default_factory=ModelConfig)
    ui: UIConfig = field(default_factory=UIConfig)

    @staticmethod
    def load(toml: dict[str, Any]) -> "Config":
        return Config(
            model=ModelConfig.load(toml["model"]),
            ui=UIConfig.load(toml["ui"]),
        )


_default_filepath: str = "config.toml"


@cache
def get_config(filepath: str | None = None) -> Config:
    if filepath is None:
        filepath = _default_filepath

    # Fall back to built in defaults when no config file deployed.
    if not Path(filepath).exists():
        return Config()

    with open(filepath, "rb") as fp:
        toml = tomllib.load(fp)

    return Config.load(toml)


def set_config_file_path(path: str):
    global _default_filepath
    _default_filepath = path
    reload_config()


def reload_config() -> None:
    get_config.cache_clear()
