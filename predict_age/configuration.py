"""The configuration module."""

import tomllib
from datetime import timedelta
from pathlib import Path

from pydantic import BaseModel, Field

DATA_DIRECTORY = Path(__file__).parent / "data"


class Configuration(BaseModel):
    """Configuration of the application."""

    project_name: str = "Predict Age"

    lexicon_file: Path = DATA_DIRECTORY / "lexicon.json"
    lexicon_category: str = "AGE"
    # Intercept of the WWBP age model, used if a lexicon does not carry its own.
    default_intercept: float = 23.2188604687
    spelling_file: Path = DATA_DIRECTORY / "uk_to_us.json"
    default_places: int = Field(9, ge=0)

    api_host: str = "0.0.0.0"  # noqa: S104, it is required for Docker deployment.
    api_port: int = 7124
    api_max_requests_per_interval: int = 5
    api_rate_limiter_interval: timedelta = timedelta(seconds=1)
    # Only enable behind a reverse proxy that sets X-Forwarded-For itself.
    api_trust_forwarded_for: bool = False
    cors_origins: list[str] = ["*"]
    max_text_length: int = Field(100_000, ge=1)


def load_configuration(
    configuration_file: Path = Path("config.toml"),
) -> Configuration:
    """Load configuration from the configuration file, if there is one."""
    if not configuration_file.exists():
        return Configuration()
    with configuration_file.open("rb") as f:
        settings = tomllib.load(f)
    return Configuration(**settings)


config = load_configuration()
