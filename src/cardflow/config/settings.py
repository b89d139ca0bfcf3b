"""Application settings."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    project_root: Path = Field(
        default=Path(),
        description="Path to project root containing cardflow.yml",
    )

    card_count: int | None = Field(
        default=None,
        description="Number of cards to generate at startup (default: from cardflow.yml)",
    )

    verbose: int = Field(
        default=0,
        description="Logging verbosity: 0 silent, 1 info, 2 or more debug",
    )

    log_file: Path | None = Field(
        default=None,
        description="File that receives log records in addition to the console",
    )

    model_config = {
        "env_prefix": "CARDFLOW_",
    }
