from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings loaded from environment variables.

    The CLI takes no flags; everything optional is set through
    NEXTPATCH_* variables or a local .env file.

    Examples
    ────────
    • NEXTPATCH_PACKAGE=next          package to patch
    • NEXTPATCH_PROJECT_DIR=./web     project root (defaults to the cwd)
    • NEXTPATCH_JSON_LOGS=true        machine-parseable log output
    """

    model_config = SettingsConfigDict(
        env_prefix="NEXTPATCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    project_dir: Path = Field(default_factory=Path.cwd)

    # Target package and where pnpm stages its editable copy,
    # relative to project_dir.
    package: str = "next"
    staging_root: Path = Path("node_modules/.temp")

    # Logging
    debug: bool = False
    json_logs: bool = False

    @field_validator("package", mode="before")
    @classmethod
    def strip_package(cls, v: str) -> str:
        v = str(v).strip()
        if not v:
            raise ValueError("package must not be empty")
        return v


def get_settings() -> Settings:
    return Settings()
