"""
Off-chain Configuration

Chain parameters for tooling and the API, loaded from the environment or a
.env file at the project root (variables prefixed with ``MINT_``).
"""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


PROJECT_ROOT = Path(__file__).parent.parent.parent


class ChainSettings(BaseSettings):
    network: str = "testnet"  # testnet, mainnet
    chain_id: int = 1
    log_level: str = "INFO"
    currency_decimals: int = 6
    domain_version: str = "1"

    model_config = SettingsConfigDict(
        env_prefix="MINT_",
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def is_mainnet(self) -> bool:
        return self.network.lower() == "mainnet"
