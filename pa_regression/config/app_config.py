# pa_regression/config/app_config.py
from __future__ import annotations

import os

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .log_config import LogConfig
from .training_config import DatasetConfig, PAConfig

# env -> training 覆盖项
_ENV_OVERRIDES = {
    "PA_VARIANT": "variant",
    "PA_AGGRESSIVENESS": "aggressiveness",
    "PA_EPSILON": "epsilon",
}


def project_root() -> str:
    """
    pa_regression/config/app_config.py → pa_regression/config → pa_regression → project_root
    """
    return os.path.abspath(os.path.join(os.path.dirname(__file__), "../../"))


def default_config_path() -> str:
    return os.path.join(os.path.dirname(os.path.abspath(__file__)), "base.yml")


class AppConfig(BaseModel):
    log: LogConfig = Field(default_factory=LogConfig)
    training: PAConfig = Field(default_factory=PAConfig)
    dataset: DatasetConfig = Field(default_factory=DatasetConfig)

    @classmethod
    def load(cls, path: str | None = None) -> "AppConfig":
        """
        加载 YAML 配置 + .env
        - 默认使用 pa_regression/config/base.yml
        - 不依赖当前工作目录
        - PA_VARIANT / PA_AGGRESSIVENESS / PA_EPSILON 覆盖 training
        """
        root = project_root()

        load_dotenv(os.path.join(root, ".env"))

        if path is None:
            path = default_config_path()

        if not os.path.exists(path):
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        training = dict(raw.get("training") or {})
        for env_key, field in _ENV_OVERRIDES.items():
            value = os.getenv(env_key)
            if value:
                training[field] = value
        raw["training"] = training

        return cls(**raw)
