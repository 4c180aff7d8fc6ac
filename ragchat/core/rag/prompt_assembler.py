"""
Prompt assembly for session chat.

Builds the single prompt string sent to the model from the retrieved
chunks, the history window and the user utterance.

Dependencies: None
System role: Prompt construction stage of the message pipeline
"""

from collections.abc import Sequence

from ragchat.boundary.db.models.message_model import MessageModel, MessageSender
from ragchat.boundary.vdb.vector_schemas import RetrievedChunk

DEFAULT_CONTEXT_CHAR_BUDGET = 3000

PREAMBLE = (
    "You are a helpful assistant. Use any provided context and recent conversation "
    "to answer the user's question. If the context is not relevant, you may also use "
    "your general knowledge, but prefer the provided context when possible.\n"
)
CONTEXT_HEADER = "Context:\n"
HISTORY_HEADER = (
    "Recent conversation (lines starting with 'User:' are the human, "
    "'Assistant:' are you):\n"
)
QUESTION_HEADER = "User question:\n"
CLOSING_INSTRUCTION = (
    "When you answer, respond only with the answer text itself. Do not include any "
    "speaker labels like 'Assistant:' or 'User:' in your response.\n\n"
)

SPEAKER_LABELS = {
    MessageSender.USER: "User",
    MessageSender.AI: "Assistant",
}


def _context_section(chunks: Sequence[RetrievedChunk], char_budget: int) -> str:
    """Numbered snippets, truncated so their text never exceeds char_budget."""
    lines: list[str] = []
    used = 0
    index = 1
    for chunk in chunks:
        snippet = chunk.text
        if not snippet or not snippet.strip():
            continue
        if used >= char_budget:
            break
        remaining = char_budget - used
        if len(snippet) > remaining:
            snippet = snippet[:remaining]
        lines.append(f"[{index}] {snippet}\n\n")
        used += len(snippet)
        index += 1

    if not lines:
        return ""
    return CONTEXT_HEADER + "".join(lines)


def _history_section(history: Sequence[MessageModel]) -> str:
    if not history:
        return ""
    lines = [f"{SPEAKER_LABELS[message.sender]}: {message.content}\n" for message in history]
    return HISTORY_HEADER + "".join(lines) + "\n"


def build_prompt(
    user_content: str,
    chunks: Sequence[RetrievedChunk],
    history: Sequence[MessageModel],
    char_budget: int = DEFAULT_CONTEXT_CHAR_BUDGET,
) -> str:
    """
    Assemble the model prompt.

    Sections in order: preamble, context (omitted without usable chunks),
    recent conversation (omitted when empty), user question, closing
    instruction.

    Args:
        user_content: Utterance being answered
        chunks: Retrieved chunks in score order
        history: Selected history in chronological order
        char_budget: Maximum total characters of snippet text

    Returns:
        str: Prompt text
    """
    return (
        PREAMBLE
        + _context_section(chunks, char_budget)
        + _history_section(history)
        + QUESTION_HEADER
        + user_content
        + "\n\n"
        + CLOSING_INSTRUCTION
    )
