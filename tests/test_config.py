"""
Tests for config.py module.

Covers dataclasses, data constants and helper functions:
- TokenConfig, V3DexConfig, ChainConfig, EngineConfig
- Chain configurations (ETHEREUM, BNB_CHAIN, BASE)
- Token dictionaries (TOKENS_ETHEREUM, TOKENS_BASE)
- TICK_SPACING
- load_engine_config(), setup_logging(), get_chain_config(), get_v3_dex_config(), get_token()
"""

import logging

import pytest
from unittest.mock import patch

from config import (
    # Dataclasses
    ChainConfig,
    EngineConfig,
    TokenConfig,
    V3DexConfig,
    # Chain configs
    BASE,
    BNB_CHAIN,
    ETHEREUM,
    # DEX configs
    PANCAKESWAP_V3,
    UNISWAP_V3_ETHEREUM,
    UNISWAP_V3_INIT_CODE_HASH,
    # Token dicts
    TOKENS_BASE,
    TOKENS_ETHEREUM,
    # Fee / tick data
    TICK_SPACING,
    # Engine settings
    LOG_FORMAT,
    # Helper functions
    get_chain_config,
    get_token,
    get_v3_dex_config,
    load_engine_config,
    setup_logging,
)


# ============================================================
# Dataclass tests
# ============================================================

class TestTokenConfig:
    """Tests for TokenConfig dataclass."""

    def test_create_token_config(self):
        token = TokenConfig(address="0xabc", symbol="TEST", decimals=18)
        assert token.address == "0xabc"
        assert token.symbol == "TEST"
        assert token.decimals == 18


class TestV3DexConfig:
    """Tests for V3DexConfig dataclass."""

    def test_create_v3_dex_config(self):
        dex = V3DexConfig(
            name="TestDEX",
            pool_deployer="0xdeployer",
            pool_init_code_hash="0x00",
            fee_tiers=[500, 3000],
        )
        assert dex.name == "TestDEX"
        assert dex.fee_tiers == [500, 3000]


class TestChainConfig:
    """Tests for ChainConfig dataclass."""

    def test_create_chain_config(self):
        cfg = ChainConfig(chain_id=999, name="Test", dexes={})
        assert cfg.chain_id == 999
        assert cfg.dexes == {}


class TestEngineConfig:
    """Tests for EngineConfig defaults."""

    def test_defaults(self):
        cfg = EngineConfig()
        assert cfg.validate_ticks is True
        assert cfg.log_level == "INFO"


# ============================================================
# Data tests
# ============================================================

class TestChainConfigData:
    """Tests for chain constants."""

    def test_chain_ids(self):
        assert ETHEREUM.chain_id == 1
        assert BNB_CHAIN.chain_id == 56
        assert BASE.chain_id == 8453

    def test_every_chain_has_uniswap(self):
        for chain in (ETHEREUM, BNB_CHAIN, BASE):
            assert "uniswap" in chain.dexes

    def test_uniswap_ethereum_factory(self):
        assert UNISWAP_V3_ETHEREUM.pool_deployer == "0x1F98431c8aD98523631AE4a59f267346ea31F984"
        assert UNISWAP_V3_ETHEREUM.pool_init_code_hash == UNISWAP_V3_INIT_CODE_HASH

    def test_init_code_hashes_are_32_bytes(self):
        for chain in (ETHEREUM, BNB_CHAIN, BASE):
            for dex in chain.dexes.values():
                assert dex.pool_init_code_hash.startswith("0x")
                assert len(dex.pool_init_code_hash) == 66

    def test_pancakeswap_has_2500_tier(self):
        assert 2500 in PANCAKESWAP_V3.fee_tiers


class TestTokens:
    """Tests for token dictionaries."""

    @pytest.mark.parametrize("tokens", [TOKENS_ETHEREUM, TOKENS_BASE])
    def test_symbol_matches_key(self, tokens):
        for key, token in tokens.items():
            assert token.symbol == key

    @pytest.mark.parametrize("tokens", [TOKENS_ETHEREUM, TOKENS_BASE])
    def test_addresses_are_hex(self, tokens):
        for token in tokens.values():
            assert token.address.startswith("0x")
            assert len(token.address) == 42

    def test_stablecoin_decimals(self):
        assert TOKENS_ETHEREUM["USDC"].decimals == 6
        assert TOKENS_ETHEREUM["USDT"].decimals == 6
        assert TOKENS_ETHEREUM["DAI"].decimals == 18
        assert TOKENS_BASE["USDC"].decimals == 6


class TestFeeTiers:
    """Tests for DEX fee tiers and TICK_SPACING."""

    def test_every_dex_fee_tier_has_spacing(self):
        for chain in (ETHEREUM, BNB_CHAIN, BASE):
            for dex in chain.dexes.values():
                for fee in dex.fee_tiers:
                    assert fee in TICK_SPACING

    def test_standard_spacings(self):
        assert TICK_SPACING[100] == 1
        assert TICK_SPACING[500] == 10
        assert TICK_SPACING[3000] == 60
        assert TICK_SPACING[10000] == 200


# ============================================================
# Engine settings
# ============================================================

class TestLoadEngineConfig:
    """Tests for load_engine_config() reading the environment."""

    def test_defaults_without_env(self, monkeypatch):
        monkeypatch.delenv("V3_VALIDATE_TICKS", raising=False)
        monkeypatch.delenv("V3_LOG_LEVEL", raising=False)
        cfg = load_engine_config()
        assert cfg.validate_ticks is True
        assert cfg.log_level == "INFO"

    @pytest.mark.parametrize("value, expected", [
        ("false", False),
        ("0", False),
        ("No", False),
        ("true", True),
        ("1", True),
        ("", True),
    ])
    def test_validate_ticks(self, monkeypatch, value, expected):
        monkeypatch.setenv("V3_VALIDATE_TICKS", value)
        assert load_engine_config().validate_ticks is expected

    def test_invalid_bool_raises(self, monkeypatch):
        monkeypatch.setenv("V3_VALIDATE_TICKS", "maybe")
        with pytest.raises(ValueError, match="V3_VALIDATE_TICKS"):
            load_engine_config()

    def test_log_level_uppercased(self, monkeypatch):
        monkeypatch.setenv("V3_LOG_LEVEL", "debug")
        assert load_engine_config().log_level == "DEBUG"


class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_uses_project_format(self):
        with patch("config.logging.basicConfig") as basic_config:
            setup_logging("DEBUG")
        basic_config.assert_called_once_with(level=logging.DEBUG, format=LOG_FORMAT)

    def test_unknown_level_falls_back_to_info(self):
        with patch("config.logging.basicConfig") as basic_config:
            setup_logging("NOPE")
        assert basic_config.call_args.kwargs["level"] == logging.INFO


# ============================================================
# Helper functions
# ============================================================

class TestGetChainConfig:
    """Tests for get_chain_config()."""

    @pytest.mark.parametrize("chain_id, expected", [(1, ETHEREUM), (56, BNB_CHAIN), (8453, BASE)])
    def test_known(self, chain_id, expected):
        assert get_chain_config(chain_id) is expected

    def test_unknown_raises(self):
        with pytest.raises(ValueError, match="Unknown chain_id"):
            get_chain_config(999)


class TestGetV3DexConfig:
    """Tests for get_v3_dex_config()."""

    def test_default_is_uniswap(self):
        assert get_v3_dex_config(1) is UNISWAP_V3_ETHEREUM

    def test_pancakeswap(self):
        assert get_v3_dex_config(56, "pancakeswap") is PANCAKESWAP_V3

    def test_unknown_dex_raises(self):
        with pytest.raises(ValueError):
            get_v3_dex_config(1, "sushiswap")


class TestGetToken:
    """Tests for get_token()."""

    def test_ethereum_default(self):
        assert get_token("DAI").decimals == 18

    def test_base(self):
        assert get_token("WETH", 8453).address == "0x4200000000000000000000000000000000000006"

    def test_unknown_symbol_raises(self):
        with pytest.raises(ValueError, match="Unknown token"):
            get_token("NOPE")

    def test_unknown_chain_raises(self):
        with pytest.raises(ValueError):
            get_token("USDC", 56)
