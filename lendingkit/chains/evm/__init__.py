"""EVM chain access."""
from .client import EvmClient, RpcError, encode_call
from .wallet import CdpWalletSigner

__all__ = ["CdpWalletSigner", "EvmClient", "RpcError", "encode_call"]
