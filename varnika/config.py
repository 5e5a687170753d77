"""Configuration management for the transliteration engine."""

from pathlib import Path
from typing import List, Literal, Optional

import yaml
from pydantic import BaseModel, Field, field_validator


class StoreConfig(BaseModel):
    """Configuration for locating and querying the stores."""

    vst_dirs: List[Path] = Field(
        default_factory=list,
        description="Extra directories searched for <lang>.vst symbol tables",
    )
    learnings_dir: Optional[Path] = Field(
        default=None,
        description="Directory for learnings files (default: user data dir)",
    )
    more_limit: int = Field(default=10, ge=1, description="Completions fetched per learned word")
    pattern_limit: int = Field(default=10, ge=1, description="Pattern matches fetched per word")

    @field_validator("learnings_dir", mode="before")
    @classmethod
    def convert_to_path(cls, v):
        """Convert string to Path."""
        if v is None:
            return None
        return Path(v) if isinstance(v, str) else v


class EngineConfig(BaseModel):
    """Configuration for the transliteration engine."""

    max_workers: int = Field(default=4, ge=1, description="Threads used for store lookups")
    joiner_pattern: str = Field(default="~", description="Input sequence of the virama rule")
    debug: bool = False


class OutputConfig(BaseModel):
    """Configuration for batch output."""

    format: Literal["csv", "parquet", "json"] = "csv"
    top_n: int = Field(default=5, ge=1)


class Config(BaseModel):
    """Main configuration."""

    language: str = "ml"
    stores: StoreConfig = Field(default_factory=StoreConfig)
    engine: EngineConfig = Field(default_factory=EngineConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Config":
        """Load configuration from a YAML file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return cls(**data)

    def to_yaml(self, path: str | Path) -> None:
        """Save configuration to a YAML file."""
        data = self.model_dump(mode="json")
        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(data, f, default_flow_style=False, allow_unicode=True)
