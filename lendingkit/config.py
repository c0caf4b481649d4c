"""Configuration loader — reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import yaml
from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)

REQUIRED_ENV_VARS = ("OPENAI_API_KEY", "CDP_API_KEY_NAME", "CDP_API_KEY_PRIVATE_KEY")

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AgentConfig:
    model: str = "gpt-4o-mini"
    thread_id: str = "LendingKit Chatbot"


@dataclass(frozen=True)
class ChainConfig:
    rpc_url: str = "https://sepolia.base.org"
    rpc_timeout: int = 30


@dataclass(frozen=True)
class WalletConfig:
    data_file: str = "wallet_data.txt"


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "INFO"


@dataclass(frozen=True)
class AppConfig:
    agent: AgentConfig = field(default_factory=AgentConfig)
    chain: ChainConfig = field(default_factory=ChainConfig)
    wallet: WalletConfig = field(default_factory=WalletConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


@dataclass(frozen=True)
class Credentials:
    """Secrets for the model provider and the CDP wallet platform."""

    openai_api_key: str
    cdp_api_key_name: str
    cdp_api_key_private_key: str

    def __repr__(self) -> str:
        return f"Credentials(cdp_api_key_name={self.cdp_api_key_name!r})"


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------


def _build_agent(raw: dict[str, Any]) -> AgentConfig:
    return AgentConfig(
        model=str(raw.get("model", AgentConfig.model)),
        thread_id=str(raw.get("thread_id", AgentConfig.thread_id)),
    )


def _build_chain(raw: dict[str, Any]) -> ChainConfig:
    return ChainConfig(
        rpc_url=str(raw.get("rpc_url", ChainConfig.rpc_url)),
        rpc_timeout=int(raw.get("rpc_timeout", ChainConfig.rpc_timeout)),
    )


def _build_wallet(raw: dict[str, Any]) -> WalletConfig:
    return WalletConfig(data_file=str(raw.get("data_file", WalletConfig.data_file)))


def _build_logging(raw: dict[str, Any]) -> LoggingConfig:
    return LoggingConfig(level=str(raw.get("level", LoggingConfig.level)))


def _section(raw: dict[str, Any], name: str) -> dict[str, Any]:
    """Return a top-level section; an empty (null) section counts as absent."""
    section = raw.get(name) or {}
    if not isinstance(section, dict):
        raise ValueError(f"{name} must be a mapping, got {type(section).__name__}")
    return section


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. When omitted, ``config.yaml`` in the
            working directory is used if present, otherwise built-in defaults.
    """
    load_dotenv(find_dotenv(usecwd=True))

    if config_path is None:
        default_path = Path.cwd() / "config.yaml"
        if not default_path.exists():
            logger.debug("No config.yaml found, using defaults")
            return AppConfig()
        config_path = default_path
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"{config_path} must contain a mapping at the top level")

    raw = _interpolate_env(raw)

    cfg = AppConfig(
        agent=_build_agent(_section(raw, "agent")),
        chain=_build_chain(_section(raw, "chain")),
        wallet=_build_wallet(_section(raw, "wallet")),
        logging=_build_logging(_section(raw, "logging")),
    )

    _validate(cfg)
    logger.info("Configuration loaded from %s", config_path)
    return cfg


def _validate(cfg: AppConfig) -> None:
    """Raise on invalid configuration."""
    if not cfg.agent.model:
        raise ValueError("agent.model must not be empty")
    if not cfg.chain.rpc_url:
        raise ValueError("chain.rpc_url must not be empty")
    if cfg.chain.rpc_timeout <= 0:
        raise ValueError(
            f"chain.rpc_timeout must be positive, got {cfg.chain.rpc_timeout}"
        )
    if not cfg.wallet.data_file:
        raise ValueError("wallet.data_file must not be empty")


def missing_env_vars(environ: Mapping[str, str] | None = None) -> list[str]:
    """Return the required environment variables that are unset or empty."""
    env = os.environ if environ is None else environ
    return [name for name in REQUIRED_ENV_VARS if not env.get(name)]


def load_credentials(environ: Mapping[str, str] | None = None) -> Credentials:
    """Read credentials from the environment.

    The CDP private key is commonly stored on one line with literal ``\\n``
    sequences; those are turned back into newlines.
    """
    env = os.environ if environ is None else environ
    missing = missing_env_vars(env)
    if missing:
        raise ValueError(f"Missing environment variables: {', '.join(missing)}")
    return Credentials(
        openai_api_key=env["OPENAI_API_KEY"],
        cdp_api_key_name=env["CDP_API_KEY_NAME"],
        cdp_api_key_private_key=env["CDP_API_KEY_PRIVATE_KEY"].replace("\\n", "\n"),
    )
