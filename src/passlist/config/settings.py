"""Runtime settings loaded from environment variables."""

from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

NonEmptyStr = Annotated[str, Field(min_length=1)]
BcryptRounds = Annotated[int, Field(ge=4, le=31)]
PortInt = Annotated[int, Field(gt=0, le=65_535)]


class Settings(BaseSettings):
    """Environment-driven application settings."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    passwd_file: NonEmptyStr = Field(default="pwaccess.db", validation_alias="PASSLIST_FILE")
    realm: NonEmptyStr = Field(default="Default", validation_alias="PASSLIST_REALM")
    pepper: str | None = Field(default=None, validation_alias="PASSLIST_PEPPER")
    bcrypt_rounds: BcryptRounds = Field(default=6, validation_alias="PASSLIST_BCRYPT_ROUNDS")
    auth_failure_policy: Literal["fail_open", "fail_closed"] = Field(
        default="fail_open",
        validation_alias="PASSLIST_AUTH_FAILURE_POLICY",
    )
    public_paths: str = Field(default="/health", validation_alias="PASSLIST_PUBLIC_PATHS")
    api_host: NonEmptyStr = Field(default="127.0.0.1", validation_alias="DEMO_API_HOST")
    api_port: PortInt = Field(default=8000, validation_alias="DEMO_API_PORT")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    @property
    def public_path_list(self) -> list[str]:
        """Parse public path prefixes from a comma-separated string."""
        return [path.strip() for path in self.public_paths.split(",") if path.strip()]


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Load and cache application settings."""

    return Settings()
