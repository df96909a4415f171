"""Planilhas .xlsx montadas em memória com openpyxl para testes."""

from __future__ import annotations

import zipfile
from io import BytesIO
from typing import TYPE_CHECKING

from openpyxl import Workbook

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

HEADER = ("Nome", "Data", "Hora", "Mensagem")


def build_workbook_bytes(
    rows: Iterable[Sequence[object]],
    *,
    header: Sequence[object] | None = HEADER,
) -> bytes:
    """Cria um .xlsx com uma aba contendo `header` seguido de `rows`."""
    workbook = Workbook()
    sheet = workbook.active
    if header is not None:
        sheet.append(list(header))
    for row in rows:
        sheet.append(list(row))

    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def truncate_first_sheet(data: bytes) -> bytes:
    """Reempacota o .xlsx com o XML da primeira aba cortado ao meio."""
    source = zipfile.ZipFile(BytesIO(data))
    buffer = BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as target:
        for item in source.infolist():
            content = source.read(item.filename)
            if item.filename == "xl/worksheets/sheet1.xml":
                content = content[: len(content) // 2]
            target.writestr(item, content)
    return buffer.getvalue()
