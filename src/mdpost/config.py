"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    app_name:        str = "mdpost"
    backend:         str = Field(default="html", pattern="^(html|tree)$", description="html or tree")
    fallback_title:  Optional[str] = Field(default=None, description="Title used when neither frontmatter nor an H1 provides one (default: file name)")
    subtitle_policy: str = Field(default="frontmatter", pattern="^(frontmatter|extended)$",
                                 description="frontmatter: subtitle only; extended: subtitle, description, first paragraph")
    subtitle_max_length: int = Field(default=300, ge=1, description="Cap for a subtitle taken from the first paragraph")
    output_dir:      str = Field(default="dist", description="Directory for converted HTML/JSON files")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDPOST_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"MDPOST_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
