"""EVM JSON-RPC client for read-only contract calls."""
import logging
import ssl
from typing import Any, Sequence

import aiohttp
import certifi
from eth_abi import decode, encode
from eth_utils import function_signature_to_4byte_selector, to_checksum_address

from ...config import ChainConfig

logger = logging.getLogger(__name__)


class RpcError(RuntimeError):
    """The node answered with a JSON-RPC error object or an unusable result."""


def _argument_types(signature: str) -> list[str]:
    """Extract argument types from a flat signature, e.g. 'approve(address,uint256)'."""
    inner = signature[signature.index("(") + 1 : signature.rindex(")")]
    return [t.strip() for t in inner.split(",")] if inner.strip() else []


def encode_call(signature: str, args: Sequence[Any]) -> str:
    """ABI-encode a function call as 0x-prefixed calldata."""
    types = _argument_types(signature)
    if len(types) != len(args):
        raise ValueError(
            f"{signature} takes {len(types)} arguments, got {len(args)}"
        )
    values = [
        to_checksum_address(arg) if typ == "address" else arg
        for typ, arg in zip(types, args)
    ]
    selector = function_signature_to_4byte_selector(signature)
    return "0x" + (selector + encode(types, values)).hex()


class EvmClient:
    """EVM RPC client. Errors propagate to the caller; there is no retry."""

    def __init__(self, config: ChainConfig) -> None:
        self.rpc_url = config.rpc_url
        self.timeout = config.rpc_timeout

    async def rpc_call(self, method: str, params: list[Any]) -> Any:
        """Make a single JSON-RPC call and return its ``result``."""
        payload = {"jsonrpc": "2.0", "id": 1, "method": method, "params": params}

        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)
        async with aiohttp.ClientSession(connector=connector) as session:
            async with session.post(
                self.rpc_url,
                json=payload,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as response:
                response.raise_for_status()
                result = await response.json()

        if "error" in result:
            raise RpcError(f"RPC Error: {result['error']}")
        return result.get("result")

    async def call_function(
        self,
        contract: str,
        signature: str,
        args: Sequence[Any],
        output_types: Sequence[str],
    ) -> tuple[Any, ...]:
        """Run ``eth_call`` against ``contract`` and decode the return data."""
        data = encode_call(signature, args)
        logger.debug("eth_call %s on %s", signature, contract)
        raw = await self.rpc_call(
            "eth_call",
            [{"to": to_checksum_address(contract), "data": data}, "latest"],
        )
        if not raw or raw == "0x":
            raise RpcError(f"Empty result for {signature} on {contract}")
        return tuple(decode(list(output_types), bytes.fromhex(raw[2:])))
