"""Application configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from typing import Literal

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings

# Placeholder secret; deployments must override it.
DEFAULT_CIPHER_SECRET = "default-key-change-me"


class CipherConfig(BaseSettings):
    """Bank data cipher configuration."""

    model_config = {"env_prefix": "PAYRAIL_CIPHER_", "populate_by_name": True}

    secret: SecretStr = Field(
        default=SecretStr(DEFAULT_CIPHER_SECRET),
        validation_alias=AliasChoices("PAYRAIL_CIPHER_SECRET", "ENCRYPTION_KEY"),
    )
    salt: str = "payrail-bank-data"
    iterations: int = Field(default=100_000, ge=1)

    @property
    def uses_placeholder_secret(self) -> bool:
        return self.secret.get_secret_value() == DEFAULT_CIPHER_SECRET


class ACHConfig(BaseSettings):
    """NACHA file layout options."""

    model_config = {"env_prefix": "PAYRAIL_ACH_"}

    block_padding: bool = False  # pad to a multiple of 10 records with 9-filler


class SEPAConfig(BaseSettings):
    """SEPA pain.001 defaults used when metadata or payments omit a value."""

    model_config = {"env_prefix": "PAYRAIL_SEPA_"}

    default_currency: str = "EUR"
    debtor_iban: str = "DE89370400440532013000"
    debtor_bic: str = "COBADEFFXXX"
    creditor_bic: str = "COBADEFFXXX"


class S3Config(BaseSettings):
    """S3 storage for published bank files."""

    model_config = {"env_prefix": "PAYRAIL_S3_"}

    bucket: str = "payrail-bank-files"
    region: str = "us-east-1"
    endpoint_url: str | None = None  # LocalStack override


class AppSettings(BaseSettings):
    """Root application settings aggregating all sub-configs."""

    model_config = {"env_prefix": "PAYRAIL_"}

    environment: Literal["dev", "uat", "prod"] = "dev"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "console"] = "console"

    cipher: CipherConfig = Field(default_factory=CipherConfig)
    ach: ACHConfig = Field(default_factory=ACHConfig)
    sepa: SEPAConfig = Field(default_factory=SEPAConfig)
    s3: S3Config = Field(default_factory=S3Config)
