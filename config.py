"""
Configuration for the V3 swap engine

Конфигурация движка: адреса фабрик (для вычисления адреса пула через
CREATE2), известные токены, fee tiers и настройки движка из окружения.
"""

import logging
import os
from dataclasses import dataclass
from typing import Dict, List, Optional

from dotenv import load_dotenv

load_dotenv()


@dataclass
class TokenConfig:
    """Конфигурация токена."""
    address: str
    symbol: str
    decimals: int


@dataclass
class V3DexConfig:
    """Configuration for V3 DEX (multiple DEXes per chain)."""
    name: str
    pool_deployer: str       # Адрес, от которого пулы создаются через CREATE2
    pool_init_code_hash: str
    fee_tiers: List[int]


@dataclass
class ChainConfig:
    """Конфигурация сети."""
    chain_id: int
    name: str
    dexes: Dict[str, V3DexConfig]


@dataclass
class EngineConfig:
    """Настройки движка (переопределяются через .env / окружение)."""
    validate_ticks: bool = True
    log_level: str = "INFO"


# ============================================================
# V3 DEX CONFIGURATIONS
# ============================================================

UNISWAP_V3_INIT_CODE_HASH = "0xe34f199b19b2b4f47f68442619d555527d244f78a3297ea89325f843f87b8b54"
PANCAKESWAP_V3_INIT_CODE_HASH = "0x6ce8eb472fa82df5469c6ab6d485f17c3ad13c8cd7af59b3d4a8026c5ce0f7e2"

# PancakeSwap V3 создаёт пулы через отдельный PoolDeployer, не через Factory
PANCAKESWAP_V3_DEPLOYER = "0x41ff9AA7e16B8B1a8a8dc4f0eFacd93D02d071c9"

UNISWAP_V3_ETHEREUM = V3DexConfig(
    name="Uniswap V3",
    pool_deployer="0x1F98431c8aD98523631AE4a59f267346ea31F984",
    pool_init_code_hash=UNISWAP_V3_INIT_CODE_HASH,
    fee_tiers=[100, 500, 3000, 10000],  # 0.01%, 0.05%, 0.3%, 1%
)

UNISWAP_V3_BSC = V3DexConfig(
    name="Uniswap V3",
    pool_deployer="0xdB1d10011AD0Ff90774D0C6Bb92e5C5c8b4461F7",
    pool_init_code_hash=UNISWAP_V3_INIT_CODE_HASH,
    fee_tiers=[100, 500, 3000, 10000],
)

UNISWAP_V3_BASE = V3DexConfig(
    name="Uniswap V3",
    pool_deployer="0x33128a8fC17869897dcE68Ed026d694621f6FDfD",
    pool_init_code_hash=UNISWAP_V3_INIT_CODE_HASH,
    fee_tiers=[100, 500, 3000, 10000],
)

PANCAKESWAP_V3 = V3DexConfig(
    name="PancakeSwap V3",
    pool_deployer=PANCAKESWAP_V3_DEPLOYER,
    pool_init_code_hash=PANCAKESWAP_V3_INIT_CODE_HASH,
    fee_tiers=[100, 500, 2500, 10000],  # 0.01%, 0.05%, 0.25%, 1%
)

# ============================================================
# CHAIN CONFIGURATIONS
# ============================================================

ETHEREUM = ChainConfig(
    chain_id=1,
    name="Ethereum",
    dexes={"uniswap": UNISWAP_V3_ETHEREUM, "pancakeswap": PANCAKESWAP_V3},
)

BNB_CHAIN = ChainConfig(
    chain_id=56,
    name="BNB Chain",
    dexes={"uniswap": UNISWAP_V3_BSC, "pancakeswap": PANCAKESWAP_V3},
)

BASE = ChainConfig(
    chain_id=8453,
    name="Base",
    dexes={"uniswap": UNISWAP_V3_BASE, "pancakeswap": PANCAKESWAP_V3},
)

# ============================================================
# TOKEN CONFIGURATIONS (Ethereum)
# ============================================================

TOKENS_ETHEREUM: Dict[str, TokenConfig] = {
    "USDC": TokenConfig(
        address="0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48",
        symbol="USDC",
        decimals=6
    ),
    "DAI": TokenConfig(
        address="0x6B175474E89094C44Da98b954EedeAC495271d0F",
        symbol="DAI",
        decimals=18
    ),
    "WETH": TokenConfig(
        address="0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2",
        symbol="WETH",
        decimals=18
    ),
    "USDT": TokenConfig(
        address="0xdAC17F958D2ee523a2206206994597C13D831ec7",
        symbol="USDT",
        decimals=6
    ),
}

# ============================================================
# TOKEN CONFIGURATIONS (Base)
# ============================================================

TOKENS_BASE: Dict[str, TokenConfig] = {
    "WETH": TokenConfig(
        address="0x4200000000000000000000000000000000000006",
        symbol="WETH",
        decimals=18
    ),
    "USDC": TokenConfig(
        address="0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913",
        symbol="USDC",
        decimals=6  # USDC on Base has 6 decimals
    ),
}

# ============================================================
# FEE TIERS
# ============================================================

# Tick spacing для каждого fee tier (fee tiers DEX перечислены в V3DexConfig)
TICK_SPACING = {
    100: 1,
    500: 10,
    2500: 50,   # PancakeSwap specific
    3000: 60,   # Uniswap standard
    10000: 200,
}

# ============================================================
# ENGINE SETTINGS
# ============================================================

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    value = value.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean, got {value!r}")


def load_engine_config() -> EngineConfig:
    """
    Чтение настроек движка из окружения.

    V3_VALIDATE_TICKS: проверять снапшоты тиков (по умолчанию true)
    V3_LOG_LEVEL: уровень логирования для setup_logging (по умолчанию INFO)
    """
    return EngineConfig(
        validate_ticks=_env_bool("V3_VALIDATE_TICKS", True),
        log_level=os.getenv("V3_LOG_LEVEL", "INFO").upper(),
    )


ENGINE = load_engine_config()


def setup_logging(level: Optional[str] = None) -> None:
    """Настройка логирования для скриптов и тестов. Библиотека сама handlers не добавляет."""
    logging.basicConfig(
        level=getattr(logging, level or ENGINE.log_level, logging.INFO),
        format=LOG_FORMAT,
    )


# ============================================================
# HELPER FUNCTIONS
# ============================================================

def get_chain_config(chain_id: int) -> ChainConfig:
    """Получение конфигурации по chain_id."""
    configs = {
        1: ETHEREUM,
        56: BNB_CHAIN,
        8453: BASE,
    }
    if chain_id not in configs:
        raise ValueError(f"Unknown chain_id: {chain_id}")
    return configs[chain_id]


def get_v3_dex_config(chain_id: int, dex: str = "uniswap") -> V3DexConfig:
    """Конфигурация V3 DEX в сети."""
    chain = get_chain_config(chain_id)
    if dex not in chain.dexes:
        raise ValueError(f"DEX {dex!r} is not configured for chain_id: {chain_id}")
    return chain.dexes[dex]


def get_token(symbol: str, chain_id: int = 1) -> TokenConfig:
    """Получение токена по символу."""
    tokens_map = {
        1: TOKENS_ETHEREUM,
        8453: TOKENS_BASE,
    }
    if chain_id not in tokens_map:
        raise ValueError(f"Tokens not configured for chain_id: {chain_id}")
    tokens = tokens_map[chain_id]
    if symbol not in tokens:
        raise ValueError(f"Unknown token: {symbol}")
    return tokens[symbol]
