"""
Tests for src.contracts.pool_factory: CREATE2 адрес V3 пула.
"""

import pytest
from eth_abi import encode
from web3 import Web3

from config import PANCAKESWAP_V3_DEPLOYER, PANCAKESWAP_V3_INIT_CODE_HASH, UNISWAP_V3_INIT_CODE_HASH
from src.contracts.pool_factory import (
    compute_pool_address,
    get_pool_address,
    get_pool_salt,
    sort_tokens,
)


USDC = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"
DAI = "0x6B175474E89094C44Da98b954EedeAC495271d0F"
WETH = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"
UNISWAP_FACTORY = "0x1F98431c8aD98523631AE4a59f267346ea31F984"

USDC_DAI_500 = "0x6c6Bc977E13Df9b0de53b251522280BB72383700"


class TestSortTokens:
    """Tests for sort_tokens."""

    def test_sorted_by_numeric_value(self):
        assert sort_tokens(USDC, DAI) == (DAI, USDC)
        assert sort_tokens(DAI, USDC) == (DAI, USDC)

    def test_checksums_input(self):
        assert sort_tokens(USDC.lower(), DAI.lower()) == (DAI, USDC)

    def test_identical_raises(self):
        with pytest.raises(ValueError):
            sort_tokens(USDC, USDC.lower())


class TestComputePoolAddress:
    """Tests for compute_pool_address."""

    def test_usdc_dai_low(self):
        address = compute_pool_address(UNISWAP_FACTORY, USDC, DAI, 500, UNISWAP_V3_INIT_CODE_HASH)
        assert address == USDC_DAI_500

    def test_token_order_does_not_matter(self):
        a = compute_pool_address(UNISWAP_FACTORY, USDC, DAI, 500, UNISWAP_V3_INIT_CODE_HASH)
        b = compute_pool_address(UNISWAP_FACTORY, DAI, USDC, 500, UNISWAP_V3_INIT_CODE_HASH)
        assert a == b

    def test_fee_changes_address(self):
        low = compute_pool_address(UNISWAP_FACTORY, USDC, DAI, 500, UNISWAP_V3_INIT_CODE_HASH)
        medium = compute_pool_address(UNISWAP_FACTORY, USDC, DAI, 3000, UNISWAP_V3_INIT_CODE_HASH)
        assert low != medium

    def test_deployer_and_hash_change_address(self):
        uniswap = compute_pool_address(UNISWAP_FACTORY, USDC, WETH, 500, UNISWAP_V3_INIT_CODE_HASH)
        pancake = compute_pool_address(
            PANCAKESWAP_V3_DEPLOYER, USDC, WETH, 500, PANCAKESWAP_V3_INIT_CODE_HASH
        )
        assert uniswap != pancake

    def test_result_is_checksummed(self):
        address = compute_pool_address(UNISWAP_FACTORY, USDC, WETH, 3000, UNISWAP_V3_INIT_CODE_HASH)
        assert Web3.is_checksum_address(address)

    def test_salt_is_keccak_of_abi_encoded_key(self):
        expected = Web3.keccak(encode(['address', 'address', 'uint24'], [DAI, USDC, 500]))
        assert get_pool_salt(USDC, DAI, 500) == expected


class TestGetPoolAddress:
    """Tests for get_pool_address (config lookup)."""

    def test_ethereum_uniswap(self):
        assert get_pool_address(1, USDC, DAI, 500) == USDC_DAI_500

    def test_unknown_chain_raises(self):
        with pytest.raises(ValueError):
            get_pool_address(999, USDC, DAI, 500)

    def test_pancakeswap_tier(self):
        address = get_pool_address(56, USDC, WETH, 2500, "pancakeswap")
        assert address == compute_pool_address(
            PANCAKESWAP_V3_DEPLOYER, USDC, WETH, 2500, PANCAKESWAP_V3_INIT_CODE_HASH
        )

    @pytest.mark.parametrize("chain_id, fee, dex", [
        (1, 2500, "uniswap"),
        (56, 3000, "pancakeswap"),
        (1, 1234, "uniswap"),
    ])
    def test_fee_tier_not_enabled_raises(self, chain_id, fee, dex):
        with pytest.raises(ValueError, match="not enabled"):
            get_pool_address(chain_id, USDC, WETH, fee, dex)
