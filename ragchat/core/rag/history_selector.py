"""
Conversation history window selection.

Dependencies: ragchat.boundary.db.models
System role: Bounds the conversation history placed in the prompt
"""

from collections.abc import Sequence

from ragchat.boundary.db.models.message_model import MessageModel, MessageSender


def select_history(
    messages: Sequence[MessageModel],
    current_sequence: int,
    limit: int,
) -> list[MessageModel]:
    """
    Pick the recent turns to show the model.

    Keeps at most `limit` messages per sender among those before the current
    message, taken newest first, and returns them oldest first.

    Args:
        messages: Session messages in ascending sequence order
        current_sequence: Sequence of the message being answered
        limit: Per-sender cap

    Returns:
        list[MessageModel]: Selected messages in chronological order
    """
    if limit <= 0:
        return []

    taken = {MessageSender.USER: 0, MessageSender.AI: 0}
    selected: list[MessageModel] = []

    for message in reversed(messages):
        if message.sequence >= current_sequence:
            continue
        if taken[message.sender] < limit:
            selected.append(message)
            taken[message.sender] += 1
        if all(count >= limit for count in taken.values()):
            break

    selected.reverse()
    return selected
