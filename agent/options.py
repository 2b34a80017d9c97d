"""
Agent Creation Options
======================
Resolves the configuration record used to build agents and executors.

Resolution is a fold: pick the default baseline for the agent kind, then apply
each option in call order. An option is a plain function that returns a copy
of the record with one field replaced, so options on different fields commute
and later options silently win over earlier ones on the same field.

    opts = resolve_options(
        AgentKind.MRKL,
        with_max_iterations(3),
        with_prompt_prefix("You are a calculator.\n\n{tool_descriptions}"),
    )
    prompt = opts.get_mrkl_prompt(tools)

Baselines are rebuilt on every call, so no two resolutions share a memory
handle or any other mutable state.
"""
from dataclasses import dataclass, replace
from enum import Enum
from functools import reduce
from typing import Callable, Sequence

from langchain_core.callbacks import BaseCallbackHandler
from langchain_core.chat_history import BaseChatMessageHistory, InMemoryChatMessageHistory
from langchain_core.messages import SystemMessage
from langchain_core.prompts import (
    ChatPromptTemplate,
    MessagesPlaceholder,
    PromptTemplate,
    SystemMessagePromptTemplate,
)
from langchain_core.tools import BaseTool

from .errors import ParserErrorHandler, UnknownAgentKindError
from .prompts import (
    DEFAULT_CONVERSATIONAL_FORMAT_INSTRUCTIONS,
    DEFAULT_CONVERSATIONAL_PREFIX,
    DEFAULT_CONVERSATIONAL_SUFFIX,
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_MRKL_FORMAT_INSTRUCTIONS,
    DEFAULT_MRKL_PREFIX,
    DEFAULT_MRKL_SUFFIX,
    DEFAULT_OUTPUT_KEY,
    DEFAULT_SYSTEM_MESSAGE,
    create_conversational_prompt,
    create_mrkl_prompt,
)


class AgentKind(str, Enum):
    EXECUTOR = "executor"
    MRKL = "mrkl"
    CONVERSATIONAL = "conversational"
    OPENAI_FUNCTIONS = "openai_functions"


@dataclass(frozen=True)
class CreationOptions:
    prompt: PromptTemplate | None = None
    memory: BaseChatMessageHistory | None = None
    callbacks_handler: BaseCallbackHandler | None = None
    error_handler: ParserErrorHandler | None = None
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    return_intermediate_steps: bool = False
    output_key: str = DEFAULT_OUTPUT_KEY
    prompt_prefix: str = ""
    format_instructions: str = ""
    prompt_suffix: str = ""

    # functions agent
    system_message: str = ""
    extra_messages: tuple = ()

    def _explicit_prompt(self) -> PromptTemplate | None:
        if self.prompt is not None and self.prompt.template:
            return self.prompt
        return None

    def get_mrkl_prompt(self, tools: Sequence[BaseTool]) -> PromptTemplate:
        """Explicit prompt if one was given, else prefix + format instructions + suffix."""
        explicit = self._explicit_prompt()
        if explicit is not None:
            return explicit
        return create_mrkl_prompt(
            tools, self.prompt_prefix, self.format_instructions, self.prompt_suffix
        )

    def get_conversational_prompt(self, tools: Sequence[BaseTool]) -> PromptTemplate:
        explicit = self._explicit_prompt()
        if explicit is not None:
            return explicit
        return create_conversational_prompt(
            tools, self.prompt_prefix, self.format_instructions, self.prompt_suffix
        )

    def get_openai_functions_prompt(self) -> ChatPromptTemplate:
        """
        Chat prompt for the functions agent.

        The system slot holds the explicit prompt when one was given, otherwise
        the system message as a literal (braces in it are not template fields).
        """
        explicit = self._explicit_prompt()
        system = (
            SystemMessagePromptTemplate(prompt=explicit)
            if explicit is not None
            else SystemMessage(content=self.system_message)
        )
        return ChatPromptTemplate.from_messages([
            system,
            *self.extra_messages,
            MessagesPlaceholder("history", optional=True),
            ("human", "{input}"),
            MessagesPlaceholder("agent_scratchpad"),
        ])


CreationOption = Callable[[CreationOptions], CreationOptions]


# ── Default baselines ───────────────────────────────────────────────────────

def executor_default_options() -> CreationOptions:
    return CreationOptions(
        max_iterations=DEFAULT_MAX_ITERATIONS,
        output_key=DEFAULT_OUTPUT_KEY,
        memory=InMemoryChatMessageHistory(),
    )


def mrkl_default_options() -> CreationOptions:
    return CreationOptions(
        prompt_prefix=DEFAULT_MRKL_PREFIX,
        format_instructions=DEFAULT_MRKL_FORMAT_INSTRUCTIONS,
        prompt_suffix=DEFAULT_MRKL_SUFFIX,
        output_key=DEFAULT_OUTPUT_KEY,
    )


def conversational_default_options() -> CreationOptions:
    return CreationOptions(
        prompt_prefix=DEFAULT_CONVERSATIONAL_PREFIX,
        format_instructions=DEFAULT_CONVERSATIONAL_FORMAT_INSTRUCTIONS,
        prompt_suffix=DEFAULT_CONVERSATIONAL_SUFFIX,
        output_key=DEFAULT_OUTPUT_KEY,
    )


def openai_functions_default_options() -> CreationOptions:
    return CreationOptions(
        system_message=DEFAULT_SYSTEM_MESSAGE,
        output_key=DEFAULT_OUTPUT_KEY,
    )


_BASELINES: dict[AgentKind, Callable[[], CreationOptions]] = {
    AgentKind.EXECUTOR:         executor_default_options,
    AgentKind.MRKL:             mrkl_default_options,
    AgentKind.CONVERSATIONAL:   conversational_default_options,
    AgentKind.OPENAI_FUNCTIONS: openai_functions_default_options,
}


def resolve_options(kind: AgentKind | str, *options: CreationOption) -> CreationOptions:
    """
    Fold options over the default baseline for kind.

    Raises:
        UnknownAgentKindError: kind is not one of AgentKind.
    """
    try:
        baseline = _BASELINES[AgentKind(kind)]
    except ValueError:
        raise UnknownAgentKindError(kind) from None
    return reduce(lambda co, option: option(co), options, baseline())


# ── Options ─────────────────────────────────────────────────────────────────

def with_max_iterations(iterations: int) -> CreationOption:
    """Max number of plan steps the executor runs before giving up."""
    if iterations < 1:
        raise ValueError(f"max iterations must be at least 1, got {iterations}")
    return lambda co: replace(co, max_iterations=iterations)


def with_output_key(output_key: str) -> CreationOption:
    """Key the final answer is returned under."""
    if not output_key:
        raise ValueError("output key must not be empty")
    return lambda co: replace(co, output_key=output_key)


def with_prompt_prefix(prefix: str) -> CreationOption:
    return lambda co: replace(co, prompt_prefix=prefix)


def with_prompt_format_instructions(instructions: str) -> CreationOption:
    return lambda co: replace(co, format_instructions=instructions)


def with_prompt_suffix(suffix: str) -> CreationOption:
    return lambda co: replace(co, prompt_suffix=suffix)


def with_prompt(prompt: PromptTemplate) -> CreationOption:
    """Use this prompt as-is. A non-empty prompt overrides prefix, instructions and suffix."""
    return lambda co: replace(co, prompt=prompt)


def with_return_intermediate_steps() -> CreationOption:
    """Make the executor return the (action, observation) steps it took."""
    return lambda co: replace(co, return_intermediate_steps=True)


def with_memory(memory: BaseChatMessageHistory) -> CreationOption:
    return lambda co: replace(co, memory=memory)


def with_callbacks_handler(handler: BaseCallbackHandler) -> CreationOption:
    return lambda co: replace(co, callbacks_handler=handler)


def with_parser_error_handler(error_handler: ParserErrorHandler) -> CreationOption:
    """Feed unparsable model output back to the agent instead of raising."""
    return lambda co: replace(co, error_handler=error_handler)


def with_system_message(message: str) -> CreationOption:
    return lambda co: replace(co, system_message=message)


def with_extra_messages(extra_messages: Sequence) -> CreationOption:
    """Message templates placed between the system message and the human input."""
    return lambda co: replace(co, extra_messages=tuple(extra_messages))
