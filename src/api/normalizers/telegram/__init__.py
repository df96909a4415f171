"""Normalizer Telegram — extração de dados de updates da Bot API."""

from api.normalizers.telegram.extractor import extract_chat_id

__all__ = ["extract_chat_id"]
