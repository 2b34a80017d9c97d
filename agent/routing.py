"""
Routing Functions
=================
Pure functions that read ExecutorState and return a destination node name.
LangGraph calls these at conditional edges to decide where execution goes next.

Graph routing map:
  agent → route_after_agent → "tools" | "agent" | END
  tools → route_after_tools → "agent" | END
"""
from typing import Literal

from langchain_core.agents import AgentFinish
from langgraph.graph import END

from .state import ExecutorState


def _out_of_iterations(state: ExecutorState) -> bool:
    return state["iterations"] >= state["max_iterations"]


def route_after_agent(state: ExecutorState) -> Literal["tools", "agent", "__end__"]:
    """
    After the agent plans:
      - AgentFinish        → END
      - actions            → "tools"
      - parse failure fed back (outcome None) → "agent", or END when out of iterations
    """
    outcome = state.get("outcome")

    if isinstance(outcome, AgentFinish):
        return END

    if outcome:
        return "tools"

    return END if _out_of_iterations(state) else "agent"


def route_after_tools(state: ExecutorState) -> Literal["agent", "__end__"]:
    """Loop back for another plan unless max_iterations plans were already made."""
    return END if _out_of_iterations(state) else "agent"
