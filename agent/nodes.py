"""
Graph Nodes
===========
Each function here builds one node of the executor graph.

Node responsibilities:
  create_agent_node — asks the agent for the next step; one call = one iteration
  create_tools_node — runs the planned actions and records the observations

Nodes are pure state transformers: they read ExecutorState and return a dict
of updated fields. Routing lives in routing.py.
"""
import logging
from typing import Sequence

from langchain_core.agents import AgentAction
from langchain_core.exceptions import OutputParserException
from langchain_core.tools import BaseTool

from .errors import ParserErrorHandler
from .output_parser import EXCEPTION_TOOL
from .state import ExecutorState

logger = logging.getLogger(__name__)


def create_agent_node(agent, error_handler: ParserErrorHandler | None = None):
    """
    Factory that returns the planning node bound to an agent.

    Without an error handler an OutputParserException propagates out of the
    graph. With one, the formatted error becomes the observation of a
    synthetic step so the agent can correct itself on the next iteration.
    """
    def agent_node(state: ExecutorState) -> dict:
        steps = list(state["intermediate_steps"])
        iterations = state["iterations"] + 1

        try:
            outcome = agent.plan(steps, state["inputs"], state["history"])
        except OutputParserException as exc:
            if error_handler is None:
                raise
            logger.info("[agent] Unparsable output on iteration %d, feeding it back", iterations)
            step = AgentAction(tool=EXCEPTION_TOOL, tool_input=str(exc), log=exc.llm_output or "")
            return {
                "intermediate_steps": steps + [(step, error_handler.format(str(exc)))],
                "outcome": None,
                "iterations": iterations,
            }

        return {"outcome": outcome, "iterations": iterations}

    return agent_node


def run_action(tools_by_name: dict[str, BaseTool], action: AgentAction) -> str:
    """Invoke the tool an action names. Unknown tools yield a corrective observation."""
    tool = tools_by_name.get(action.tool.strip().lower())
    if tool is None:
        return f"{action.tool} is not a valid tool, try another one"
    return str(tool.invoke(action.tool_input))


def create_tools_node(tools: Sequence[BaseTool]):
    """Factory that returns the node running every action of the last plan, in order."""
    tools_by_name = {tool.name.strip().lower(): tool for tool in tools}

    def tools_node(state: ExecutorState) -> dict:
        steps = list(state["intermediate_steps"])
        for action in state["outcome"] or []:
            observation = run_action(tools_by_name, action)
            logger.info("[tools] %s(%r) -> %.80r", action.tool, action.tool_input, observation)
            steps.append((action, observation))
        return {"intermediate_steps": steps, "outcome": None}

    return tools_node
