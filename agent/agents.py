"""
Agents
======
Planners that decide the next step from the question, the conversation
history and the steps already taken. They never run tools; the executor does.

    OneShotZeroAgent      MRKL text agent (Thought / Action / Final Answer)
    ConversationalAgent   MRKL-style text agent that also sees the history
    OpenAIFunctionsAgent  native tool calling via llm.bind_tools()

Every agent resolves its own options against the baseline for its kind, so
the same option list can be handed to the agent and to its executor.
"""
import logging
from typing import Any, Sequence

from langchain_core.agents import AgentAction, AgentFinish
from langchain_core.language_models import BaseLanguageModel
from langchain_core.messages import BaseMessage, get_buffer_string
from langchain_core.tools import BaseTool

from .errors import UnknownAgentKindError
from .options import AgentKind, CreationOption, resolve_options
from .output_parser import (
    ToolCallAction,
    format_conversational_scratchpad,
    format_mrkl_scratchpad,
    format_tool_messages,
    parse_conversational_output,
    parse_mrkl_output,
)

logger = logging.getLogger(__name__)

STOP_WORDS = ["\nObservation:", "Observation:"]


def _text(response: Any) -> str:
    """Chat models return messages, completion models return strings."""
    return response.content if isinstance(response, BaseMessage) else str(response)


def _callbacks_config(options) -> dict:
    handler = options.callbacks_handler
    return {"callbacks": [handler]} if handler is not None else {}


class _TextAgent:
    kind: AgentKind

    def __init__(self, llm: BaseLanguageModel, tools: Sequence[BaseTool], *options: CreationOption):
        self.llm = llm
        self.tools = list(tools)
        self.options = resolve_options(self.kind, *options)
        self.prompt = self._build_prompt()

    @property
    def input_keys(self) -> list[str]:
        return ["input"]

    @property
    def output_keys(self) -> list[str]:
        return [self.options.output_key]

    def _build_prompt(self):
        raise NotImplementedError

    def _prompt_inputs(self, intermediate_steps, inputs: dict, history: list[BaseMessage]) -> dict:
        raise NotImplementedError

    def _parse(self, text: str):
        raise NotImplementedError

    def plan(
        self,
        intermediate_steps: list[tuple[AgentAction, str]],
        inputs: dict,
        history: list[BaseMessage] | None = None,
    ) -> list[AgentAction] | AgentFinish:
        text = self.prompt.format(**self._prompt_inputs(intermediate_steps, inputs, history or []))
        response = self.llm.invoke(text, stop=STOP_WORDS, config=_callbacks_config(self.options))
        return self._parse(_text(response))


class OneShotZeroAgent(_TextAgent):
    kind = AgentKind.MRKL

    def _build_prompt(self):
        return self.options.get_mrkl_prompt(self.tools)

    def _prompt_inputs(self, intermediate_steps, inputs, history):
        return {
            **inputs,
            "agent_scratchpad": format_mrkl_scratchpad(intermediate_steps),
        }

    def _parse(self, text):
        return parse_mrkl_output(text, self.options.output_key)


class ConversationalAgent(_TextAgent):
    kind = AgentKind.CONVERSATIONAL

    def _build_prompt(self):
        return self.options.get_conversational_prompt(self.tools)

    def _prompt_inputs(self, intermediate_steps, inputs, history):
        return {
            **inputs,
            "history": get_buffer_string(history),
            "agent_scratchpad": format_conversational_scratchpad(intermediate_steps),
        }

    def _parse(self, text):
        return parse_conversational_output(text, self.options.output_key)


class OpenAIFunctionsAgent:
    """Tool-calling agent; one action per tool call in the model's reply."""

    kind = AgentKind.OPENAI_FUNCTIONS

    def __init__(self, llm: BaseLanguageModel, tools: Sequence[BaseTool], *options: CreationOption):
        self.llm = llm
        self.tools = list(tools)
        self.options = resolve_options(self.kind, *options)
        self.prompt = self.options.get_openai_functions_prompt()
        self._llm_with_tools = llm.bind_tools(self.tools) if self.tools else llm

    @property
    def input_keys(self) -> list[str]:
        return ["input"]

    @property
    def output_keys(self) -> list[str]:
        return [self.options.output_key]

    def plan(
        self,
        intermediate_steps: list[tuple[AgentAction, str]],
        inputs: dict,
        history: list[BaseMessage] | None = None,
    ) -> list[AgentAction] | AgentFinish:
        messages = self.prompt.format_messages(
            **inputs,
            history=list(history or []),
            agent_scratchpad=format_tool_messages(intermediate_steps),
        )
        response = self._llm_with_tools.invoke(messages, config=_callbacks_config(self.options))

        tool_calls = getattr(response, "tool_calls", None) or []
        if not tool_calls:
            text = _text(response)
            return AgentFinish(return_values={self.options.output_key: text}, log=text)

        logger.debug("[agent] %d tool call(s): %s", len(tool_calls), [tc["name"] for tc in tool_calls])
        return [
            ToolCallAction(
                tool=tc["name"],
                tool_input=tc.get("args", {}),
                log=f"\nInvoking: `{tc['name']}` with `{tc.get('args', {})}`\n",
                message_log=[response],
                tool_call_id=tc.get("id") or "",
            )
            for tc in tool_calls
        ]


_AGENT_CLASSES = {
    AgentKind.MRKL:             OneShotZeroAgent,
    AgentKind.CONVERSATIONAL:   ConversationalAgent,
    AgentKind.OPENAI_FUNCTIONS: OpenAIFunctionsAgent,
}


def build_agent(
    llm: BaseLanguageModel,
    tools: Sequence[BaseTool],
    kind: AgentKind | str,
    *options: CreationOption,
):
    """Return the agent for kind. AgentKind.EXECUTOR is not an agent."""
    try:
        agent_cls = _AGENT_CLASSES[AgentKind(kind)]
    except (KeyError, ValueError):
        raise UnknownAgentKindError(kind) from None
    return agent_cls(llm, tools, *options)
