"""Command-line entry point for the lending agent."""
from __future__ import annotations

import asyncio
import logging
import sys

import yaml

from .config import AppConfig, Credentials, load_config, load_credentials, missing_env_vars
from .logging_setup import configure_logging
from .services import build_agent, build_session, run_chat_mode

logger = logging.getLogger(__name__)

WELCOME = "Welcome to LendingKit, what can I help you with?"


def report_missing_env(missing: list[str]) -> None:
    """Print the missing variable names as ``.env`` template lines."""
    print("Error: Required environment variables are not set", file=sys.stderr)
    for name in missing:
        print(f"{name}=your_{name.lower()}_here", file=sys.stderr)


async def _run(config: AppConfig, credentials: Credentials) -> None:
    """Build the session and agent, then hand over to the chat loop."""
    session = build_session(config, credentials)
    agent, agent_config = build_agent(config, session, credentials)
    await run_chat_mode(agent, agent_config)


def main() -> None:
    """Entry point."""
    print(WELCOME)

    try:
        config = load_config()
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        sys.exit(1)

    configure_logging(config.logging.level)

    missing = missing_env_vars()
    if missing:
        report_missing_env(missing)
        sys.exit(1)

    try:
        asyncio.run(_run(config, load_credentials()))
    except KeyboardInterrupt:
        print("\nExiting chat mode via KeyboardInterrupt.")
    except Exception as e:
        logger.debug("Fatal error", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
