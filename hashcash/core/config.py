"""hashcash.core.config

Two config surfaces only:
1) `config/default.yaml` (or any YAML file passed explicitly)
2) Environment variables, prefix ``HASHCASH_``, nested with ``__``

Everything else is derived.
"""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path
from typing import TYPE_CHECKING, Literal

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from hashcash.core.difficulty import DIGEST_BITS
from hashcash.core.exceptions import ConfigError
from hashcash.core.models import HashcashConfig

if TYPE_CHECKING:
    from hashcash.core.ledger import Ledger


class StampConfig(BaseModel):
    bits: int = 20
    expiry_days: float = 30.0
    future_days: float = 2.0

    @field_validator("bits")
    @classmethod
    def bits_within_digest(cls, v: int) -> int:
        if not 0 <= v <= DIGEST_BITS:
            raise ValueError(f"bits must be within [0, {DIGEST_BITS}]")
        return v

    @property
    def expiry(self) -> timedelta:
        return timedelta(days=self.expiry_days)

    @property
    def future(self) -> timedelta:
        return timedelta(days=self.future_days)


class LedgerConfig(BaseModel):
    backend: Literal["memory", "sqlite"] = "sqlite"
    path: Path = Path("data/spent.db")


class LoggingConfig(BaseModel):
    level: str = "INFO"
    json_output: bool = False


class ApiConfig(BaseModel):
    host: str = "127.0.0.1"
    port: int = 5060


class Config(BaseSettings):
    """Root configuration. Single source of truth."""

    stamp: StampConfig = Field(default_factory=StampConfig)
    ledger: LedgerConfig = Field(default_factory=LedgerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)

    model_config = {"env_prefix": "HASHCASH_", "env_nested_delimiter": "__"}

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # YAML values arrive as init kwargs; HASHCASH_* variables outrank them.
        return env_settings, init_settings, dotenv_settings, file_secret_settings

    @classmethod
    def from_yaml(cls, path: Path) -> Config:
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")
        try:
            raw = yaml.safe_load(path.read_text()) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Config file is not valid YAML: {path}") from e
        if not isinstance(raw, dict):
            raise ConfigError(f"Config file must be a mapping: {path}")
        return cls(**raw)

    @classmethod
    def from_repo_defaults(cls, repo_root: Path | None = None) -> Config:
        root = repo_root or Path.cwd()
        return cls.from_yaml(root / "config" / "default.yaml")

    def hashcash_config(self, ledger: Ledger) -> HashcashConfig:
        return HashcashConfig(
            ledger=ledger,
            bits=self.stamp.bits,
            expiry=self.stamp.expiry,
            future=self.stamp.future,
        )
