"""
Graph Construction
==================
Assembles the executor's LangGraph StateGraph from nodes, edges, and routing
functions.

Architecture:

    START
      │
      ▼
    agent ─────── finish ───────────────────────► END
      │  ▲  └──── parse error fed back ──┐
      │  │                               │
      │  └───────────────────────────────┘
      │ actions
      ▼
    tools ─────── out of iterations ────────────► END
      │
      └──────────► agent   (ReAct loop)

The graph is compiled without a checkpointer: conversation memory lives in the
executor's memory handle, and each run starts from a fresh state.
"""
from langgraph.graph import END, StateGraph

from .errors import ParserErrorHandler
from .nodes import create_agent_node, create_tools_node
from .routing import route_after_agent, route_after_tools
from .state import ExecutorState


def build_graph(agent, error_handler: ParserErrorHandler | None = None):
    """
    Build and compile the executor graph for an agent.

    Args:
        agent:         any agent exposing plan() and tools.
        error_handler: turns parse failures into observations; None re-raises them.

    Returns:
        A compiled graph ready for invoke() / ainvoke().
    """
    workflow = StateGraph(ExecutorState)

    workflow.add_node("agent", create_agent_node(agent, error_handler))
    workflow.add_node("tools", create_tools_node(agent.tools))

    workflow.set_entry_point("agent")

    workflow.add_conditional_edges(
        "agent",
        route_after_agent,
        {"tools": "tools", "agent": "agent", END: END},
    )
    workflow.add_conditional_edges(
        "tools",
        route_after_tools,
        {"agent": "agent", END: END},
    )

    return workflow.compile()


def recursion_limit(max_iterations: int) -> int:
    """Each iteration is at most two supersteps (agent, tools); keep headroom for the last one."""
    return 2 * max_iterations + 2
