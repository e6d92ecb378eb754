from __future__ import annotations

from pathlib import Path
from typing import List

import yaml
from pydantic import BaseModel, Field

from common.settings import settings


class AppConfig(BaseModel):
    output_dir: Path = Path("data/out")
    manifest_name: str = "feed_manifest.json"


class ProcessorConfig(BaseModel):
    important_type: str = Field(default="important", min_length=1)


class CreatorConfig(BaseModel):
    special_ids: List[str] = Field(default_factory=list)


class GlobalYAMLConfig(BaseModel):
    app: AppConfig = Field(default_factory=AppConfig)
    processor: ProcessorConfig = Field(default_factory=ProcessorConfig)
    creator: CreatorConfig = Field(default_factory=CreatorConfig)


def load_yaml_config(path: Path | None = None) -> GlobalYAMLConfig:
    """
    Load config/config.yaml (or FEED_CONFIG_PATH). Missing file or empty
    sections fall back to the defaults above.
    """
    path = Path(path or settings.config_path)
    if not path.exists():
        return GlobalYAMLConfig()
    with open(path, "r") as f:
        raw = yaml.safe_load(f) or {}
    return GlobalYAMLConfig(**raw)


yaml_config = load_yaml_config()
