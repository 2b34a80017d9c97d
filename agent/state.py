"""
Executor State
==============
Defines the state TypedDict that flows through the executor graph.

Every field is replaced wholesale by the node that writes it — no reducers.
The graph is compiled without a checkpointer, so a run starts from the state
the Executor builds and nothing leaks between runs.
"""
from typing import Any

from langchain_core.agents import AgentAction, AgentFinish
from langchain_core.messages import BaseMessage
from typing_extensions import TypedDict


class ExecutorState(TypedDict):
    inputs: dict[str, Any]
    history: list[BaseMessage]
    intermediate_steps: list[tuple[AgentAction, str]]
    # Last plan: actions still to run, a finish, or None after a parse failure
    # or once the tools node has consumed the actions.
    outcome: list[AgentAction] | AgentFinish | None
    iterations: int
    max_iterations: int
