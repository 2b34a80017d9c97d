"""
Agent Executor
==============
Runs an agent's plan / act loop until it finishes or runs out of iterations.

Responsibilities:
  - Resolve the executor options (max iterations, memory, callbacks,
    parser error handler, intermediate steps)
  - Build and hold the compiled LangGraph graph for the agent
  - Load history from the memory handle before a run and save the
    human / AI exchange after a finished run

Usage:
    executor = initialize_agent(llm, tools, AgentKind.MRKL, with_max_iterations(3))
    result   = executor.invoke("What is 2 + 2?")
    result["output"]

A resolved Executor is read-only; concurrent invocations are safe as long as
the memory handle and callback handler are.
"""
import logging
from typing import Any, Mapping, Sequence

from langchain_core.agents import AgentFinish
from langchain_core.language_models import BaseLanguageModel
from langchain_core.messages import AIMessage, HumanMessage
from langchain_core.tools import BaseTool

from .agents import build_agent
from .errors import ExecutorInputError, NotFinishedError
from .graph import build_graph, recursion_limit
from .options import AgentKind, CreationOption, resolve_options

logger = logging.getLogger(__name__)

RESERVED_INPUT_KEYS = frozenset({"history", "agent_scratchpad"})


def normalize_inputs(inputs: str | Mapping[str, Any]) -> dict[str, Any]:
    """
    Accept a bare question or a mapping with a string 'input'.

    history and agent_scratchpad are filled in by the agents and may not be
    passed by the caller.
    """
    if isinstance(inputs, str):
        return {"input": inputs}
    if isinstance(inputs, Mapping) and isinstance(inputs.get("input"), str):
        reserved = sorted(RESERVED_INPUT_KEYS.intersection(inputs))
        if reserved:
            raise ExecutorInputError(f"reserved input keys: {reserved}")
        return dict(inputs)
    raise ExecutorInputError(f"input to executor not string: {inputs!r}")


class Executor:
    """
    Wraps one agent in the executor graph.

    Args:
        agent:   OneShotZeroAgent, ConversationalAgent, OpenAIFunctionsAgent,
                 or anything exposing plan(), tools and options.
        options: CreationOption values resolved against the executor baseline.
    """

    def __init__(self, agent, *options: CreationOption):
        self.agent = agent
        self.options = resolve_options(AgentKind.EXECUTOR, *options)
        self._graph = build_graph(agent, self.options.error_handler)

    @property
    def memory(self):
        return self.options.memory

    @property
    def output_key(self) -> str:
        return self.agent.options.output_key

    # ── Run helpers ─────────────────────────────────────────────────────────

    def _initial_state(self, inputs: dict[str, Any]) -> dict:
        history = list(self.memory.messages) if self.memory is not None else []
        return {
            "inputs": inputs,
            "history": history,
            "intermediate_steps": [],
            "outcome": None,
            "iterations": 0,
            "max_iterations": self.options.max_iterations,
        }

    def _config(self) -> dict:
        config: dict[str, Any] = {"recursion_limit": recursion_limit(self.options.max_iterations)}
        if self.options.callbacks_handler is not None:
            config["callbacks"] = [self.options.callbacks_handler]
        return config

    def _finish(self, inputs: dict[str, Any], final_state: dict) -> dict[str, Any]:
        outcome = final_state.get("outcome")
        steps = list(final_state.get("intermediate_steps", []))

        if not isinstance(outcome, AgentFinish):
            logger.warning(
                "[executor] Stopped after %d iterations without a final answer",
                final_state.get("iterations", 0),
            )
            raise NotFinishedError(self.options.max_iterations, steps)

        result = dict(outcome.return_values)
        if self.options.return_intermediate_steps:
            result["intermediate_steps"] = steps

        self._save_context(inputs["input"], result)
        logger.info("[executor] Finished after %d iterations", final_state.get("iterations", 0))
        return result

    def _save_context(self, question: str, result: dict[str, Any]) -> None:
        if self.memory is None:
            return
        answer = result.get(self.output_key, "")
        self.memory.add_messages([
            HumanMessage(content=question),
            AIMessage(content=str(answer)),
        ])

    def _log_run(self) -> None:
        logger.info(
            "[executor] Running %s agent (max_iterations=%d)",
            getattr(self.agent, "kind", "custom"), self.options.max_iterations,
        )

    # ── Public interface ────────────────────────────────────────────────────

    def invoke(self, inputs: str | Mapping[str, Any]) -> dict[str, Any]:
        """
        Run the agent to completion.

        Returns:
            The finish's return values (keyed by the agent's output key), plus
            intermediate_steps when with_return_intermediate_steps() was given.

        Raises:
            ExecutorInputError:     inputs has no string 'input', or sets history or agent_scratchpad.
            NotFinishedError:       max_iterations plans without a final answer.
            OutputParserException:  unparsable output and no parser error handler.
        """
        inputs = normalize_inputs(inputs)
        self._log_run()
        final_state = self._graph.invoke(self._initial_state(inputs), config=self._config())
        return self._finish(inputs, final_state)

    async def ainvoke(self, inputs: str | Mapping[str, Any]) -> dict[str, Any]:
        """Async variant of invoke(); the agent and tools still run synchronously inside the graph."""
        inputs = normalize_inputs(inputs)
        self._log_run()
        final_state = await self._graph.ainvoke(self._initial_state(inputs), config=self._config())
        return self._finish(inputs, final_state)

    def get_history(self) -> list[dict]:
        """
        Return the remembered conversation as a list of
        { role: "user"|"assistant", content: str } dicts.
        """
        if self.memory is None:
            return []
        history = []
        for msg in self.memory.messages:
            if isinstance(msg, HumanMessage):
                history.append({"role": "user", "content": msg.content})
            elif isinstance(msg, AIMessage) and msg.content:
                history.append({"role": "assistant", "content": msg.content})
        return history


def initialize_agent(
    llm: BaseLanguageModel,
    tools: Sequence[BaseTool],
    kind: AgentKind | str,
    *options: CreationOption,
) -> Executor:
    """Build the agent for kind and wrap it in an Executor sharing the same options."""
    agent = build_agent(llm, tools, kind, *options)
    return Executor(agent, *options)
