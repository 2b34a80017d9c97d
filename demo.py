"""
Interactive CLI Demo
=====================
Chat with an agent executor in your terminal.

Usage:
    python demo.py

Environment:
    LLM_PROVIDER   groq | azure | openai (otherwise picked from the API keys set)
    AGENT_KIND     mrkl | conversational | openai_functions (default: conversational)
    LOG_LEVEL      DEBUG | INFO | WARNING (default: WARNING)

Suggested conversations:

  Single tool call:
    "What is 17 * 23?"

  Multi-step reasoning (2+ tool calls):
    "What day of the week is it, and how many letters are in its name?"

  Memory (conversational and openai_functions kinds):
    "My name is Sam."
    "What is my name?"

Type 'quit' to exit, 'new' to forget the conversation.
"""
import ast
import logging
import operator
import os
from datetime import date

from langchain_core.chat_history import InMemoryChatMessageHistory
from langchain_core.tools import tool

from agent import (
    AgentKind,
    NotFinishedError,
    ParserErrorHandler,
    initialize_agent,
    with_max_iterations,
    with_memory,
    with_parser_error_handler,
)
from agent.providers import build_llm

_OPERATORS = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.Pow: operator.pow,
    ast.USub: operator.neg,
}


def _evaluate(node):
    if isinstance(node, ast.Constant) and isinstance(node.value, (int, float)):
        return node.value
    if isinstance(node, ast.BinOp) and type(node.op) in _OPERATORS:
        return _OPERATORS[type(node.op)](_evaluate(node.left), _evaluate(node.right))
    if isinstance(node, ast.UnaryOp) and type(node.op) in _OPERATORS:
        return _OPERATORS[type(node.op)](_evaluate(node.operand))
    raise ValueError("only arithmetic is supported")


@tool
def calculator(expression: str) -> str:
    """Evaluate an arithmetic expression such as '17 * 23' or '(2 + 3) ** 2'."""
    try:
        return str(_evaluate(ast.parse(expression, mode="eval").body))
    except (SyntaxError, ValueError, ZeroDivisionError) as exc:
        return f"error: {exc}"


@tool
def today(query: str = "") -> str:
    """Return today's date and weekday. The input is ignored."""
    return date.today().strftime("%A, %B %d, %Y")


@tool
def letter_count(word: str) -> str:
    """Count the letters in a single word."""
    return str(sum(ch.isalpha() for ch in word))


TOOLS = [calculator, today, letter_count]


def build_executor(memory: InMemoryChatMessageHistory):
    kind = AgentKind(os.getenv("AGENT_KIND", AgentKind.CONVERSATIONAL.value))
    return initialize_agent(
        build_llm(),
        TOOLS,
        kind,
        with_max_iterations(6),
        with_memory(memory),
        with_parser_error_handler(ParserErrorHandler(
            lambda err: f"Invalid format, follow the format instructions exactly. ({err})"
        )),
    )


def main():
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "WARNING").upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
    )

    print("\n" + "=" * 60)
    print("  Agent Executor Demo")
    print("=" * 60)
    print(f"\nTools: {', '.join(t.name for t in TOOLS)}")
    print("\nType 'quit' to exit, 'new' to forget the conversation.\n")

    memory = InMemoryChatMessageHistory()
    executor = build_executor(memory)

    while True:
        try:
            user_input = input("You: ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\n\nGoodbye!")
            break

        if not user_input:
            continue

        if user_input.lower() == "quit":
            print("\nGoodbye!")
            break

        if user_input.lower() == "new":
            memory.clear()
            print("\n[Conversation cleared]\n")
            continue

        try:
            result = executor.invoke(user_input)
        except NotFinishedError as exc:
            print(f"\nAgent: (gave up after {exc.max_iterations} iterations)\n")
            continue

        print(f"\nAgent: {result[executor.output_key]}\n")


if __name__ == "__main__":
    main()
