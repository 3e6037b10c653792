from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StoreSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    base_dir: Path = Field(default=Path("./blobs"), alias="CABS_BASE_DIR")
    verify_on_read: bool = Field(default=False, alias="CABS_VERIFY_ON_READ")
    fsync: bool = Field(default=True, alias="CABS_FSYNC")

    @model_validator(mode="after")
    def normalize_paths(self) -> "StoreSettings":
        self.base_dir = self.base_dir.expanduser()
        return self
