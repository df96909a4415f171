"""Normalizers por canal — conversão de payloads externos para dados internos.

Estrutura:
- telegram/: extração do chat de origem de updates da Bot API
"""

from .telegram import extract_chat_id

__all__ = ["extract_chat_id"]
