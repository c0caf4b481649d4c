"""Session bootstrap — wallet, chain clients and lending actions, built once."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from coinbase_agentkit import CdpWalletProvider, CdpWalletProviderConfig

from ..chains.evm import EvmClient
from ..chains.evm.wallet import CdpWalletSigner
from ..config import AppConfig, Credentials, WalletConfig
from ..constants import NETWORK_ID
from ..interfaces.lending import LendingActions
from ..protocols.aave import AaveV3Adapter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionContext:
    """Everything the tools need, passed explicitly instead of held in globals."""

    wallet_provider: CdpWalletProvider
    address: str
    actions: LendingActions


def load_wallet(config: WalletConfig, credentials: Credentials) -> CdpWalletProvider:
    """Build the CDP wallet provider, restoring and re-persisting wallet data.

    An existing but unreadable wallet file is a startup error.
    """
    path = Path(config.data_file)
    wallet_data: str | None = None
    if path.exists():
        wallet_data = path.read_text(encoding="utf-8").strip() or None
        logger.info("Loaded wallet data from %s", path)
    else:
        logger.info("No wallet data at %s, a new wallet will be created", path)

    provider = CdpWalletProvider(
        CdpWalletProviderConfig(
            api_key_name=credentials.cdp_api_key_name,
            api_key_private_key=credentials.cdp_api_key_private_key,
            network_id=NETWORK_ID,
            wallet_data=wallet_data,
        )
    )

    path.write_text(json.dumps(provider.export_wallet().to_dict()), encoding="utf-8")
    return provider


def build_session(config: AppConfig, credentials: Credentials) -> SessionContext:
    """Construct the wallet, the Chain Reader and the Aave adapter."""
    wallet_provider = load_wallet(config.wallet, credentials)
    sender = CdpWalletSigner(wallet_provider)
    actions = AaveV3Adapter(EvmClient(config.chain), sender)
    logger.info("Session ready for %s on %s", sender.address, NETWORK_ID)
    return SessionContext(
        wallet_provider=wallet_provider,
        address=sender.address,
        actions=actions,
    )
