"""
Uniswap V3 Pool Address

Адрес пула вычисляется офлайн по CREATE2, без обращения к фабрике:

    address = keccak256(0xff ++ deployer ++ salt ++ init_code_hash)[12:]
    salt    = keccak256(abi.encode(token0, token1, fee))

Для PancakeSwap V3 deployer — это PoolDeployer, а не Factory.
"""

from eth_abi import encode
from web3 import Web3

from config import get_v3_dex_config


def sort_tokens(token_a: str, token_b: str) -> tuple:
    """Сортировка адресов как в фабрике: token0 < token1."""
    addr_a = Web3.to_checksum_address(token_a)
    addr_b = Web3.to_checksum_address(token_b)
    if int(addr_a, 16) == int(addr_b, 16):
        raise ValueError(f"Identical token addresses: {addr_a}")
    if int(addr_a, 16) < int(addr_b, 16):
        return addr_a, addr_b
    return addr_b, addr_a


def get_pool_salt(token_a: str, token_b: str, fee: int) -> bytes:
    token0, token1 = sort_tokens(token_a, token_b)
    encoded = encode(['address', 'address', 'uint24'], [token0, token1, fee])
    return Web3.keccak(encoded)


def compute_pool_address(
    deployer: str,
    token_a: str,
    token_b: str,
    fee: int,
    init_code_hash: str
) -> str:
    """
    CREATE2 адрес V3 пула.

    Args:
        deployer: Factory (Uniswap) или PoolDeployer (PancakeSwap)
        token_a, token_b: Адреса токенов в любом порядке
        fee: Fee tier (500, 3000, ...)
        init_code_hash: keccak256 init code пула

    Returns:
        Checksum адрес пула
    """
    salt = get_pool_salt(token_a, token_b, fee)
    payload = (
        b'\xff'
        + bytes.fromhex(Web3.to_checksum_address(deployer)[2:])
        + salt
        + bytes.fromhex(init_code_hash.removeprefix('0x'))
    )
    return Web3.to_checksum_address(Web3.keccak(payload)[12:])


def get_pool_address(
    chain_id: int,
    token_a: str,
    token_b: str,
    fee: int,
    dex: str = "uniswap"
) -> str:
    """
    Адрес пула для известной DEX из config.

    Raises:
        ValueError: Неизвестная сеть/DEX или fee tier не включён на DEX
    """
    dex_config = get_v3_dex_config(chain_id, dex)
    if fee not in dex_config.fee_tiers:
        raise ValueError(
            f"Fee tier {fee} is not enabled on {dex_config.name} (chain_id: {chain_id}), "
            f"available: {dex_config.fee_tiers}"
        )
    return compute_pool_address(
        dex_config.pool_deployer,
        token_a,
        token_b,
        fee,
        dex_config.pool_init_code_hash,
    )
