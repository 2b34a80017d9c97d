"""
agent — Agent Options, Agents and Executor
==========================================

Package layout:

    options.py        CreationOptions, AgentKind, with_* options, resolve_options()
    prompts.py        default MRKL / conversational scaffolding, prompt assembly
    output_parser.py  Final Answer / Action parsing, scratchpad rendering
    errors.py         AgentError family, ParserErrorHandler
    agents.py         OneShotZeroAgent, ConversationalAgent, OpenAIFunctionsAgent
    state.py          ExecutorState TypedDict
    nodes.py          LangGraph node factories (plan, run tools)
    routing.py        Pure routing functions for conditional edges
    graph.py          build_graph() — assembles and compiles the StateGraph
    executor.py       Executor, initialize_agent()
    providers.py      chat-model selection from environment variables

Entry points for external callers:
"""
from .agents import ConversationalAgent, OneShotZeroAgent, OpenAIFunctionsAgent, build_agent
from .errors import (
    AgentError,
    ExecutorInputError,
    NotFinishedError,
    ParserErrorHandler,
    UnknownAgentKindError,
)
from .executor import Executor, initialize_agent
from .options import (
    AgentKind,
    CreationOption,
    CreationOptions,
    resolve_options,
    with_callbacks_handler,
    with_extra_messages,
    with_max_iterations,
    with_memory,
    with_output_key,
    with_parser_error_handler,
    with_prompt,
    with_prompt_format_instructions,
    with_prompt_prefix,
    with_prompt_suffix,
    with_return_intermediate_steps,
    with_system_message,
)

__all__ = [
    "AgentKind",
    "CreationOption",
    "CreationOptions",
    "resolve_options",
    "with_callbacks_handler",
    "with_extra_messages",
    "with_max_iterations",
    "with_memory",
    "with_output_key",
    "with_parser_error_handler",
    "with_prompt",
    "with_prompt_format_instructions",
    "with_prompt_prefix",
    "with_prompt_suffix",
    "with_return_intermediate_steps",
    "with_system_message",
    "OneShotZeroAgent",
    "ConversationalAgent",
    "OpenAIFunctionsAgent",
    "build_agent",
    "Executor",
    "initialize_agent",
    "AgentError",
    "ExecutorInputError",
    "NotFinishedError",
    "ParserErrorHandler",
    "UnknownAgentKindError",
]
