"""
Prompt Scaffolding
==================
Default prefix / format-instruction / suffix texts for the text agents and the
functions that assemble them into a PromptTemplate.

The texts are f-string templates. Variables they use:

    tool_descriptions   one "- name: description" line per tool (partial)
    tool_names          comma-separated tool names (partial)
    today               current date, MRKL only (partial, evaluated per format)
    input               the user's question
    agent_scratchpad    previous actions and observations
    history             prior conversation, conversational only
"""
from datetime import date
from typing import Sequence

from langchain_core.prompts import PromptTemplate
from langchain_core.tools import BaseTool

DEFAULT_OUTPUT_KEY = "output"
DEFAULT_MAX_ITERATIONS = 5
DEFAULT_SYSTEM_MESSAGE = "You are a helpful AI assistant."

# ── MRKL (zero-shot ReAct) ──────────────────────────────────────────────────

MRKL_FINAL_ANSWER_MARKER = "Final Answer:"

DEFAULT_MRKL_PREFIX = """Today is {today}.
Answer the following questions as best you can. You have access to the following tools:

{tool_descriptions}"""

DEFAULT_MRKL_FORMAT_INSTRUCTIONS = """Use the following format:

Question: the input question you must answer
Thought: you should always think about what to do
Action: the action to take, should be one of [ {tool_names} ]
Action Input: the input to the action
Observation: the result of the action
... (this Thought/Action/Action Input/Observation can repeat N times)
Thought: I now know the final answer
Final Answer: the final answer to the original input question"""

DEFAULT_MRKL_SUFFIX = """Begin!

Question: {input}
{agent_scratchpad}"""

# ── Conversational ──────────────────────────────────────────────────────────

CONVERSATIONAL_FINAL_ANSWER_MARKER = "AI:"

DEFAULT_CONVERSATIONAL_PREFIX = """Assistant is a large language model trained to help with a wide range of tasks, from answering simple questions to providing in-depth explanations and discussions on a wide range of topics. As a language model, Assistant is able to generate human-like text based on the input it receives, allowing it to engage in natural-sounding conversations and provide responses that are coherent and relevant to the topic at hand.

Assistant is constantly learning and improving. It is able to process and understand large amounts of text, and can use this knowledge to provide accurate and informative responses to a wide range of questions. Additionally, Assistant is able to generate its own text based on the input it receives, allowing it to engage in discussions and provide explanations and descriptions on a wide range of topics.

TOOLS:
------

Assistant has access to the following tools:

{tool_descriptions}"""

DEFAULT_CONVERSATIONAL_FORMAT_INSTRUCTIONS = """To use a tool, please use the following format:

Thought: Do I need to use a tool? Yes
Action: the action to take, should be one of [{tool_names}]
Action Input: the input to the action
Observation: the result of the action

When you have a response to say to the Human, or if you do not need to use a tool, you MUST use the format:

Thought: Do I need to use a tool? No
AI: [your response here]"""

DEFAULT_CONVERSATIONAL_SUFFIX = """Begin!

Previous conversation history:
{history}

New input: {input}

Thought:{agent_scratchpad}"""


def render_tool_names(tools: Sequence[BaseTool]) -> str:
    return ", ".join(tool.name for tool in tools)


def render_tool_descriptions(tools: Sequence[BaseTool]) -> str:
    return "\n".join(f"- {tool.name}: {tool.description}" for tool in tools)


def _today() -> str:
    return date.today().strftime("%B %d, %Y")


def _join_sections(prefix: str, instructions: str, suffix: str) -> str:
    return "\n\n".join([prefix, instructions, suffix])


def create_mrkl_prompt(
    tools: Sequence[BaseTool],
    prefix: str,
    instructions: str,
    suffix: str,
) -> PromptTemplate:
    """
    Assemble the MRKL prompt.

    tool_names, tool_descriptions and today are bound as partial variables, so
    the caller only supplies input and agent_scratchpad.
    """
    return PromptTemplate.from_template(
        _join_sections(prefix, instructions, suffix),
        partial_variables={
            "tool_names": render_tool_names(tools),
            "tool_descriptions": render_tool_descriptions(tools),
            "today": _today,
        },
    )


def create_conversational_prompt(
    tools: Sequence[BaseTool],
    prefix: str,
    instructions: str,
    suffix: str,
) -> PromptTemplate:
    """Assemble the conversational prompt; the caller supplies input, history and agent_scratchpad."""
    return PromptTemplate.from_template(
        _join_sections(prefix, instructions, suffix),
        partial_variables={
            "tool_names": render_tool_names(tools),
            "tool_descriptions": render_tool_descriptions(tools),
        },
    )
