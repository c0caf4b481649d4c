"""Agent runtime — LangGraph ReAct agent over CDP AgentKit and the lending tools."""
from __future__ import annotations

import logging
from typing import Any

from coinbase_agentkit import (
    AgentKit,
    AgentKitConfig,
    cdp_api_action_provider,
    cdp_wallet_action_provider,
)
from coinbase_agentkit_langchain import get_langchain_tools
from langchain_openai import ChatOpenAI
from langgraph.checkpoint.memory import MemorySaver
from langgraph.prebuilt import create_react_agent

from ..config import AppConfig, Credentials
from ..constants import NETWORK_ID
from ..tools import get_tools
from .session import SessionContext

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = f"""
You are a helpful financial agent that can interact onchain using the Coinbase Developer Platform AgentKit. You are empowered to interact onchain using your tools. If you ever need funds, you can request them from the faucet if you are on network ID '{NETWORK_ID}'. Before executing your first action, get the wallet details to see what network you're on. If there is a 5XX (internal) HTTP error code, ask the user to try again later.
If someone asks you to do something you can't do with your currently available tools, you must say so. Be concise and helpful with your responses. Refrain from restating your tools' descriptions unless it is explicitly requested.
The commands are mostly within the scope of Aave with USDC; the exceptions are requesting faucet ETH on {NETWORK_ID} for gas fees and wrapping ETH. As a financial advisor, retrieve an overview of the user's Aave account before and after executing any action, then explain the impact of the action by comparing the two overviews.
The health factor measures the safety of a borrow position: Health Factor = (Total Collateral Value * Weighted Average Liquidation Threshold) / Total Borrow Value. A health factor below 1 means the position can be liquidated.
If a tool reports that an approval succeeded but the pool call failed, tell the user the allowance was granted but their position did not change.
If you encounter any error, give the error message to the user and skip the account analysis.
"""


def build_agent(
    config: AppConfig, session: SessionContext, credentials: Credentials
) -> tuple[Any, dict[str, Any]]:
    """Return the compiled agent and the runnable config holding its thread id."""
    llm = ChatOpenAI(model=config.agent.model, api_key=credentials.openai_api_key)

    agentkit = AgentKit(
        AgentKitConfig(
            wallet_provider=session.wallet_provider,
            action_providers=[
                cdp_api_action_provider(),
                cdp_wallet_action_provider(),
            ],
        )
    )

    tools = get_langchain_tools(agentkit)
    tools.extend(get_tools(session.actions))
    logger.info("Agent tools: %s", ", ".join(t.name for t in tools))

    # Conversation history lives for the lifetime of the process.
    memory = MemorySaver()
    agent = create_react_agent(
        llm,
        tools=tools,
        checkpointer=memory,
        prompt=SYSTEM_PROMPT,
    )
    agent_config = {"configurable": {"thread_id": config.agent.thread_id}}
    return agent, agent_config
