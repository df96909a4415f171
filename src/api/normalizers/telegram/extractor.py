"""Extrator de payloads Telegram Bot API.

Estrutura do webhook Telegram:
- update_id
- um dos objetos: message, edited_message, channel_post,
  edited_channel_post, callback_query, my_chat_member, chat_member

O chat fica em `<objeto>.chat.id`, exceto em callback_query, onde
fica em `callback_query.message.chat.id`.
"""

from __future__ import annotations

from typing import Any

CHAT_BEARING_KEYS = (
    "message",
    "edited_message",
    "channel_post",
    "edited_channel_post",
    "my_chat_member",
    "chat_member",
)


def _chat_id_from(container: Any) -> str | None:
    if not isinstance(container, dict):
        return None
    chat = container.get("chat")
    if not isinstance(chat, dict):
        return None
    chat_id = chat.get("id")
    if chat_id is None or isinstance(chat_id, bool):
        return None
    return str(chat_id)


def extract_chat_id(payload: dict[str, Any]) -> str | None:
    """Chat de origem do update como string, ou None se não houver.

    >>> extract_chat_id({"message": {"chat": {"id": -1001234567890}}})
    '-1001234567890'
    """
    for key in CHAT_BEARING_KEYS:
        chat_id = _chat_id_from(payload.get(key))
        if chat_id is not None:
            return chat_id

    callback = payload.get("callback_query")
    if isinstance(callback, dict):
        return _chat_id_from(callback.get("message"))
    return None
