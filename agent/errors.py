"""
Agent Errors
============
Exception types raised while building and running agents, plus the
ParserErrorHandler used to feed unparsable model output back to the agent.

Parse failures themselves are raised as langchain_core's
OutputParserException so they compose with the rest of the LangChain stack.
"""
from typing import Callable


class AgentError(Exception):
    """Base class for every error raised by the agent package."""


class UnknownAgentKindError(AgentError, ValueError):
    """Raised when no baseline or agent class exists for the requested kind."""

    def __init__(self, kind: object):
        self.kind = kind
        super().__init__(f"unknown agent kind: {kind!r}")


class ExecutorInputError(AgentError, TypeError):
    """Raised when the executor input is not a string (or has no string 'input')."""


class NotFinishedError(AgentError):
    """
    Raised when the agent made max_iterations plans without finishing.

    Attributes:
        max_iterations:     the limit that was reached
        intermediate_steps: (action, observation) pairs taken before giving up
    """

    def __init__(self, max_iterations: int, intermediate_steps: list):
        self.max_iterations = max_iterations
        self.intermediate_steps = list(intermediate_steps)
        super().__init__(
            f"agent not finished before max iterations ({max_iterations})"
        )


class ParserErrorHandler:
    """
    Turns an output-parsing failure into an observation the agent can read.

    The formatter receives the error text and returns the observation. Without
    a formatter the error text is used verbatim.
    """

    def __init__(self, formatter: Callable[[str], str] | None = None):
        self.formatter = formatter

    def format(self, error_text: str) -> str:
        if self.formatter is None:
            return error_text
        return self.formatter(error_text)
