"""Leitor de .xlsx baseado em openpyxl.

Devolve as linhas da primeira aba como tuplas de valores brutos:
texto, números (seriais do Excel) ou datetime/time nativos, exatamente
como openpyxl os entrega. Interpretação fica com o cell_normalizer.

Upload vazio, ilegível ou sem abas não é erro: não há o que importar,
então a leitura devolve lista vazia e a importação termina com zero.
"""

from __future__ import annotations

import logging
import zipfile
from io import BytesIO
from xml.etree.ElementTree import ParseError

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

logger = logging.getLogger(__name__)

# openpyxl lê o XML das abas sob demanda em read_only, então o conteúdo
# corrompido só aparece durante iter_rows.
UNREADABLE_WORKBOOK_ERRORS = (
    InvalidFileException,
    zipfile.BadZipFile,
    ParseError,
    KeyError,
    ValueError,
    OSError,
)


def read_first_sheet_rows(data: bytes) -> list[tuple[object, ...]]:
    """Lê todas as linhas da primeira aba (incluindo o cabeçalho).

    Bytes vazios, que não formam um .xlsx ou com a aba corrompida
    devolvem lista vazia (logado como warning).
    """
    if not data:
        return []

    try:
        workbook = load_workbook(BytesIO(data), read_only=True, data_only=True)
    except UNREADABLE_WORKBOOK_ERRORS as exc:
        logger.warning(
            "spreadsheet_unreadable",
            extra={"stage": "open", "error_type": type(exc).__name__, "size_bytes": len(data)},
        )
        return []

    try:
        if not workbook.worksheets:
            return []
        sheet = workbook.worksheets[0]
        rows = [tuple(row) for row in sheet.iter_rows(values_only=True)]
    except UNREADABLE_WORKBOOK_ERRORS as exc:
        logger.warning(
            "spreadsheet_unreadable",
            extra={"stage": "rows", "error_type": type(exc).__name__, "size_bytes": len(data)},
        )
        return []
    finally:
        workbook.close()

    logger.debug("spreadsheet_rows_read", extra={"row_count": len(rows)})
    return rows
