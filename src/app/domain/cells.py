"""Representação explícita do valor bruto de uma célula de planilha.

openpyxl entrega texto, números (serial de data do Excel) ou objetos
datetime/time nativos. classify_cell converte o valor em uma das três
variantes; None representa célula vazia.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time


@dataclass(frozen=True, slots=True)
class TextCell:
    """Célula com texto livre (já sem espaços nas bordas)."""

    text: str


@dataclass(frozen=True, slots=True)
class NativeDateTimeCell:
    """Célula formatada como data/hora; `value` é datetime ou time."""

    value: datetime | time


@dataclass(frozen=True, slots=True)
class NumericSerialCell:
    """Célula numérica; interpretada como serial do Excel quando usada como data."""

    serial: float


Cell = TextCell | NativeDateTimeCell | NumericSerialCell


def classify_cell(raw: object) -> Cell | None:
    """Classifica o valor bruto de uma célula.

    `date` puro vira meia-noite; `bool` é tratado como texto.
    """
    if raw is None:
        return None
    if isinstance(raw, (datetime, time)):
        return NativeDateTimeCell(raw)
    if isinstance(raw, date):
        return NativeDateTimeCell(datetime(raw.year, raw.month, raw.day))
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return NumericSerialCell(float(raw))
    text = str(raw).strip()
    if not text:
        return None
    return TextCell(text)


__all__ = ["Cell", "NativeDateTimeCell", "NumericSerialCell", "TextCell", "classify_cell"]
