from typing import Literal

from dotenv import load_dotenv
from pydantic import ConfigDict, Field
from pydantic_settings import BaseSettings

# Load .env file automatically
load_dotenv()


class Settings(BaseSettings):
    """Ledger and verification settings loaded from environment variables."""

    # Address format (TRON mainnet defaults)
    ADDRESS_VERSION_BYTE: int = Field(default=0x41, ge=0, le=0xFF)
    TEXT_ADDRESS_PREFIX: str = "T"
    TEXT_ADDRESS_LENGTH: int = 34

    # Known token contracts (hex or text form)
    USDT_CONTRACT_ADDRESS: str | None = "41a614f803b6fd780986a42c78ec9c7f77e6ded13c"
    USDC_CONTRACT_ADDRESS: str | None = "41b8ae8b62f2a4cc78e3f66c45b5acfedb924fd2a6"

    # Fractional digits per token kind; kinds not listed use 6
    TOKEN_DECIMALS: dict[str, int] = {"TRX": 6, "USDT": 6, "USDC": 6, "OTHER": 6}

    # Reject transfer call data whose address word has non-zero high bytes
    STRICT_CALLDATA_PADDING: bool = False

    # App settings
    ENVIRONMENT: Literal["development", "test", "production"] = "development"
    LOG_LEVEL: str = "INFO"

    model_config = ConfigDict(env_file=".env", case_sensitive=True)
