"""
Output Parsing
==============
Turns raw model text into an AgentAction or an AgentFinish, and renders the
steps taken so far back into the form each agent expects in its prompt.

Text agents:
  MRKL            "Final Answer: ..."   or  "Action: x\\nAction Input: y"
  Conversational  "AI: ..."             or  "Action: x\\nAction Input: y"

Unparsable text raises OutputParserException with the text attached as
llm_output; the executor decides whether to raise it or feed it back.
"""
import re

from langchain_core.agents import AgentAction, AgentActionMessageLog, AgentFinish
from langchain_core.exceptions import OutputParserException
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, ToolMessage

from .prompts import CONVERSATIONAL_FINAL_ANSWER_MARKER, MRKL_FINAL_ANSWER_MARKER

# Tool name used for the synthetic step recorded after a parse failure.
EXCEPTION_TOOL = "_Exception"

_MRKL_ACTION_RE = re.compile(r"Action:\s*(.+?)\s*Action Input:\s*(.+)", re.DOTALL)
_CONVERSATIONAL_ACTION_RE = re.compile(r"Action:\s*(.*?)[\n]*Action Input:\s*(.*)", re.DOTALL)


class ToolCallAction(AgentActionMessageLog):
    """An action produced by a native tool call; remembers which call it answers."""

    tool_call_id: str


def _parse(text: str, output_key: str, marker: str, action_re: re.Pattern):
    if marker in text:
        answer = text.split(marker)[-1].strip()
        return AgentFinish(return_values={output_key: answer}, log=text)

    match = action_re.search(text)
    if match is None:
        raise OutputParserException(
            f"unable to parse agent output: {text}",
            llm_output=text,
        )
    return [AgentAction(
        tool=match.group(1).strip(),
        tool_input=match.group(2).strip().strip('"'),
        log=text,
    )]


def parse_mrkl_output(text: str, output_key: str) -> list[AgentAction] | AgentFinish:
    return _parse(text, output_key, MRKL_FINAL_ANSWER_MARKER, _MRKL_ACTION_RE)


def parse_conversational_output(text: str, output_key: str) -> list[AgentAction] | AgentFinish:
    return _parse(text, output_key, CONVERSATIONAL_FINAL_ANSWER_MARKER, _CONVERSATIONAL_ACTION_RE)


# ── Scratchpads ─────────────────────────────────────────────────────────────

def format_mrkl_scratchpad(steps: list[tuple[AgentAction, str]]) -> str:
    scratchpad = ""
    for action, observation in steps:
        scratchpad += "\n" + action.log
        scratchpad += "\nObservation: " + str(observation) + "\n"
    return scratchpad


def format_conversational_scratchpad(steps: list[tuple[AgentAction, str]]) -> str:
    scratchpad = ""
    for action, observation in steps:
        scratchpad += action.log
        scratchpad += "\nObservation: " + str(observation) + "\nThought:"
    return scratchpad


def format_tool_messages(steps: list[tuple[AgentAction, str]]) -> list[BaseMessage]:
    """
    Rebuild the message trail of a tool-calling agent.

    Every tool call in an AIMessage must be answered by a ToolMessage, and the
    AIMessage must appear once even when it carried several calls.
    """
    messages: list[BaseMessage] = []
    for action, observation in steps:
        if isinstance(action, ToolCallAction):
            for message in action.message_log:
                if not any(m is message for m in messages):
                    messages.append(message)
            messages.append(ToolMessage(content=str(observation), tool_call_id=action.tool_call_id))
        else:
            messages.append(AIMessage(content=action.log))
            messages.append(HumanMessage(content=str(observation)))
    return messages
