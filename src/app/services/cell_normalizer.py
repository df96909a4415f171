"""Normalização de células de planilha de anúncios.

Funções puras e totais: nunca levantam exceção. Valor não reconhecido
vira None (ou lista vazia) e quem chama decide pelo carry-forward ou
por ignorar a linha.

Formas canônicas:
- data: "dd.mm.yyyy"
- hora: "HH:MM"
- listas: strings sem duplicatas, na ordem em que aparecem
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from datetime import datetime, timedelta

from app.domain.cells import (
    Cell,
    NativeDateTimeCell,
    NumericSerialCell,
    TextCell,
    classify_cell,
)

# Dias entre o dia 0 do Excel (1899-12-30) e a época Unix
EXCEL_EPOCH_OFFSET_DAYS = 25569
SECONDS_PER_DAY = 86400

MIN_YEAR = 1900
MAX_YEAR = 3000

_UNIX_EPOCH = datetime(1970, 1, 1)

_LIST_DELIMITERS = re.compile(r"[,|]")
_LINE_BREAKS = re.compile(r"[\r\n\t]+")
_SEPARATOR_PADDING = re.compile(r"\s*;\s*")
_REPEATED_SEPARATORS = re.compile(r";{2,}")

_TIME_PATTERN = re.compile(r"(\d{1,2})\D(\d{2})")
_NON_DIGITS = re.compile(r"\D")

_DATE_SEPARATORS = re.compile(r"[/\-]")
_WHITESPACE_RUN = re.compile(r"\s+")
_REPEATED_DOTS = re.compile(r"\.{2,}")
_DATE_PATTERN = re.compile(r"(\d{1,4})\.(\d{1,2})\.(\d{1,4})")


def serial_to_datetime(serial: float) -> datetime | None:
    """Converte serial de data do Excel em datetime ingênuo.

    unix_ms = (serial - 25569) * 86_400_000, arredondado ao segundo
    para que 0.375 vire exatamente 09:00.
    """
    try:
        seconds = round((serial - EXCEL_EPOCH_OFFSET_DAYS) * SECONDS_PER_DAY)
        return _UNIX_EPOCH + timedelta(seconds=seconds)
    except (OverflowError, ValueError):
        return None


def _dedupe(items: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(items))


def _format_number(value: float) -> str:
    return str(int(value)) if value.is_integer() else str(value)


def _format_time(hour: int, minute: int) -> str:
    return f"{hour:02d}:{minute:02d}"


def _format_date(day: int, month: int, year: int) -> str:
    return f"{day:02d}.{month:02d}.{year:04d}"


def split_list(text: str) -> list[str]:
    """Divide texto em itens por `,` `|` `;`, quebras de linha e tabs."""
    unified = _LIST_DELIMITERS.sub(";", text)
    unified = _LINE_BREAKS.sub(";", unified)
    unified = _SEPARATOR_PADDING.sub(";", unified)
    unified = _REPEATED_SEPARATORS.sub(";", unified)
    unified = unified.strip().strip(";")
    parts = (part.strip() for part in unified.split(";"))
    return _dedupe(part for part in parts if part)


def normalize_list(raw: object) -> list[str]:
    """Lista ordenada e sem duplicatas a partir de uma célula.

    >>> normalize_list("a,a;b")
    ['a', 'b']
    """
    cell = classify_cell(raw)
    if cell is None:
        return []
    if isinstance(cell, NativeDateTimeCell):
        return [cell.value.isoformat()]
    if isinstance(cell, NumericSerialCell):
        return [_format_number(cell.serial)]
    return split_list(cell.text)


# ──────────────────────────────────────────────────────────────
# Hora
# ──────────────────────────────────────────────────────────────


def _parse_time_text(text: str) -> str | None:
    """Aceita "9:05", "9.05", "905", "0905".

    Faixas de hora/minuto não são checadas aqui; "2561" vira "25:61"
    e é descartado ao montar o timestamp final.
    """
    match = _TIME_PATTERN.fullmatch(text.strip())
    if match:
        return _format_time(int(match.group(1)), int(match.group(2)))

    digits = _NON_DIGITS.sub("", text)
    if len(digits) == 3:
        return _format_time(int(digits[:1]), int(digits[1:]))
    if len(digits) == 4:
        return _format_time(int(digits[:2]), int(digits[2:]))
    return None


def _time_from_cell(cell: Cell | None) -> str | None:
    if cell is None:
        return None
    if isinstance(cell, NativeDateTimeCell):
        return _format_time(cell.value.hour, cell.value.minute)
    if isinstance(cell, NumericSerialCell):
        moment = serial_to_datetime(cell.serial)
        return None if moment is None else _format_time(moment.hour, moment.minute)
    if isinstance(cell, TextCell):
        return _parse_time_text(cell.text)
    return None


def normalize_time(raw: object) -> str | None:
    """Hora canônica "HH:MM" ou None."""
    return _time_from_cell(classify_cell(raw))


# ──────────────────────────────────────────────────────────────
# Data
# ──────────────────────────────────────────────────────────────


def _parse_date_text(text: str) -> str | None:
    """Aceita dd.mm.yyyy e yyyy.mm.dd com `.`, `/`, `-` ou espaços.

    Só checa faixas (dia 1-31, mês 1-12, ano 1900-3000): 31.04 passa
    aqui e é descartado ao montar o timestamp final.
    """
    cleaned = text.strip().split("T", 1)[0].strip()
    cleaned = _DATE_SEPARATORS.sub(".", cleaned)
    cleaned = _WHITESPACE_RUN.sub(".", cleaned)
    cleaned = _REPEATED_DOTS.sub(".", cleaned).strip(".")

    match = _DATE_PATTERN.fullmatch(cleaned)
    if not match:
        return None

    first, month_part, last = match.groups()
    if len(first) == 4:
        year_part, day_part = first, last
    elif len(last) == 4:
        day_part, year_part = first, last
    else:
        return None

    day, month, year = int(day_part), int(month_part), int(year_part)
    if not (1 <= month <= 12 and 1 <= day <= 31 and MIN_YEAR <= year <= MAX_YEAR):
        return None
    return _format_date(day, month, year)


def _date_from_cell(cell: Cell | None) -> str | None:
    if cell is None:
        return None
    if isinstance(cell, NativeDateTimeCell):
        value = cell.value
        if not isinstance(value, datetime):
            return None
        return _format_date(value.day, value.month, value.year)
    if isinstance(cell, NumericSerialCell):
        moment = serial_to_datetime(cell.serial)
        return None if moment is None else _format_date(moment.day, moment.month, moment.year)
    if isinstance(cell, TextCell):
        return _parse_date_text(cell.text)
    return None


def normalize_date(raw: object) -> str | None:
    """Data canônica "dd.mm.yyyy" ou None.

    >>> normalize_date(44562)
    '01.01.2022'
    """
    return _date_from_cell(classify_cell(raw))


# ──────────────────────────────────────────────────────────────
# Listas de datas/horas
# ──────────────────────────────────────────────────────────────


def normalize_date_list(raw: object) -> list[str]:
    """Todas as datas válidas da célula, sem duplicatas."""
    cell = classify_cell(raw)
    if isinstance(cell, (NativeDateTimeCell, NumericSerialCell)):
        single = _date_from_cell(cell)
        return [single] if single else []
    parsed = (_parse_date_text(part) for part in normalize_list(raw))
    return _dedupe(value for value in parsed if value)


def normalize_time_list(raw: object) -> list[str]:
    """Todas as horas válidas da célula, sem duplicatas."""
    cell = classify_cell(raw)
    if isinstance(cell, (NativeDateTimeCell, NumericSerialCell)):
        single = _time_from_cell(cell)
        return [single] if single else []
    parsed = (_parse_time_text(part) for part in normalize_list(raw))
    return _dedupe(value for value in parsed if value)


__all__ = [
    "EXCEL_EPOCH_OFFSET_DAYS",
    "normalize_date",
    "normalize_date_list",
    "normalize_list",
    "normalize_time",
    "normalize_time_list",
    "serial_to_datetime",
    "split_list",
]
