"""Interactive session loop."""
from __future__ import annotations

import logging
from typing import Any, Callable

from langchain_core.messages import HumanMessage

logger = logging.getLogger(__name__)

PROMPT = "\nPrompt: "
DIVIDER = "-------------------"


def _chunk_content(chunk: dict[str, Any]) -> str | None:
    """Content of the first message of an ``agent`` or ``tools`` update."""
    for node in ("agent", "tools"):
        if node in chunk:
            return chunk[node]["messages"][0].content
    return None


async def run_chat_mode(
    agent: Any,
    config: dict[str, Any],
    read_line: Callable[[str], str] = input,
) -> None:
    """Forward each line to the agent and print streamed chunks until ``exit``.

    End of input ends the session like ``exit``. Errors from the agent
    propagate to the caller. The prompt is read on the calling thread; nothing
    else runs on the loop while waiting for input.
    """
    while True:
        try:
            user_input = read_line(PROMPT)
        except EOFError:
            break

        if user_input.lower() == "exit":
            break

        logger.debug("Forwarding prompt to agent")
        async for chunk in agent.astream(
            {"messages": [HumanMessage(content=user_input)]}, config
        ):
            content = _chunk_content(chunk)
            if content is not None:
                print(content)
            print(DIVIDER)
