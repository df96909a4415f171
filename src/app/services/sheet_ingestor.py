"""Importação de planilha de anúncios.

Cada linha de dados tem quatro colunas: nome(s), data(s), hora(s) e
mensagem(ns). A primeira linha é cabeçalho e é ignorada.

Regras por linha:
- Sem nome ou sem mensagem: linha ignorada.
- Data/hora em branco herda a última data/hora explícita de uma linha
  anterior (células mescladas chegam vazias). Sem nada para herdar,
  a linha é ignorada.
- Um anúncio por nome; a mensagem é a de mesmo índice ou a primeira.
- Um instante para cada combinação datas × horas que forme um
  timestamp válido.

Linhas ignoradas não são erro: aparecem apenas nos totais e em log DEBUG.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from datetime import UTC, datetime, tzinfo
from typing import TYPE_CHECKING

from app.domain.announcement import IngestionResult
from app.infra.spreadsheet import read_first_sheet_rows
from app.observability import record_ingestion, record_latency
from app.services.cell_normalizer import (
    normalize_date_list,
    normalize_list,
    normalize_time_list,
)
from utils.errors import AnnouncementPersistError

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from app.protocols.announcement_store import AnnouncementStoreProtocol

logger = logging.getLogger(__name__)

EXPECTED_COLUMNS = 4
INSTANT_FORMAT = "%d.%m.%Y %H:%M"


@dataclass
class IngestionRun:
    """Estado de uma única chamada de ingest.

    carried_dates/carried_times guardam a última lista explícita vista,
    nunca uma lista herdada.
    """

    carried_dates: list[str] = field(default_factory=list)
    carried_times: list[str] = field(default_factory=list)
    announcements_created: int = 0
    instants_created: int = 0

    def result(self) -> IngestionResult:
        return IngestionResult(
            announcements_created=self.announcements_created,
            instants_created=self.instants_created,
        )


@dataclass(frozen=True)
class ResolvedRow:
    """Linha com todas as células já normalizadas e herdadas."""

    row_number: int
    names: list[str]
    messages: list[str]
    dates: list[str]
    times: list[str]

    def message_for(self, index: int) -> str:
        return self.messages[index] if index < len(self.messages) else self.messages[0]


def _pad(row: Sequence[object]) -> list[object]:
    cells = list(row[:EXPECTED_COLUMNS])
    cells.extend([None] * (EXPECTED_COLUMNS - len(cells)))
    return cells


def resolve_row(
    row: Sequence[object],
    row_number: int,
    run: IngestionRun,
) -> ResolvedRow | None:
    """Normaliza a linha e aplica carry-forward de datas/horas.

    O estado de carry-forward só é atualizado por linhas aproveitadas.
    """
    name_cell, date_cell, time_cell, message_cell = _pad(row)

    names = normalize_list(name_cell)
    messages = normalize_list(message_cell)
    if not names or not messages:
        logger.debug(
            "sheet_row_skipped",
            extra={"row_number": row_number, "reason": "missing_name_or_message"},
        )
        return None

    own_dates = normalize_date_list(date_cell)
    own_times = normalize_time_list(time_cell)
    dates = own_dates or list(run.carried_dates)
    times = own_times or list(run.carried_times)
    if not dates or not times:
        logger.debug(
            "sheet_row_skipped",
            extra={"row_number": row_number, "reason": "missing_date_or_time"},
        )
        return None

    if own_dates:
        run.carried_dates = list(own_dates)
    if own_times:
        run.carried_times = list(own_times)

    return ResolvedRow(
        row_number=row_number,
        names=names,
        messages=messages,
        dates=dates,
        times=times,
    )


def parse_instant(date_text: str, time_text: str, tz: tzinfo = UTC) -> datetime | None:
    """Monta o timestamp UTC de "dd.mm.yyyy" + "HH:MM" no fuso `tz`.

    Combinações impossíveis (31.04, 25:61) devolvem None.
    """
    try:
        local = datetime.strptime(f"{date_text} {time_text}", INSTANT_FORMAT)
    except ValueError:
        return None
    return local.replace(tzinfo=tz).astimezone(UTC)


def build_instants(
    dates: Sequence[str],
    times: Sequence[str],
    tz: tzinfo = UTC,
) -> list[datetime]:
    """Produto datas × horas (datas por fora), sem combinações inválidas."""
    instants: list[datetime] = []
    for date_text in dates:
        for time_text in times:
            instant = parse_instant(date_text, time_text, tz)
            if instant is not None:
                instants.append(instant)
    return instants


class SheetIngestor:
    """Transforma uma planilha em anúncios e instantes persistidos.

    Args:
        store: Store de anúncios (escrita atômica por anúncio)
        timezone: Fuso em que datas/horas da planilha foram escritas
        reader: Função bytes -> linhas (default: openpyxl, primeira aba)
    """

    def __init__(
        self,
        store: AnnouncementStoreProtocol,
        *,
        timezone: tzinfo = UTC,
        reader: Callable[[bytes], Sequence[Sequence[object]]] = read_first_sheet_rows,
    ) -> None:
        self._store = store
        self._timezone = timezone
        self._reader = reader

    async def ingest(self, data: bytes) -> IngestionResult:
        """Importa a planilha e devolve os totais criados.

        Upload vazio ou ilegível não tem linhas de dados e resulta em zero.

        Raises:
            AnnouncementPersistError: Falha ao gravar um anúncio; os
                anteriores permanecem gravados.
        """
        started_at = time.perf_counter()
        rows = await asyncio.to_thread(self._reader, data)

        run = IngestionRun()
        for row_number, row in enumerate(rows[1:], start=2):
            resolved = resolve_row(row, row_number, run)
            if resolved is not None:
                await self._persist_row(resolved, run)

        result = run.result()
        logger.info(
            "announcements_imported",
            extra={
                "data_rows": max(len(rows) - 1, 0),
                "announcements_created": result.announcements_created,
                "instants_created": result.instants_created,
            },
        )
        record_ingestion(result.announcements_created, result.instants_created)
        record_latency("sheet_ingestor", "ingest", (time.perf_counter() - started_at) * 1000)
        return result

    async def _persist_row(self, row: ResolvedRow, run: IngestionRun) -> None:
        instants = build_instants(row.dates, row.times, self._timezone)
        for index, name in enumerate(row.names):
            try:
                await self._store.create_announcement_with_instants(
                    name,
                    row.message_for(index),
                    instants,
                )
            except Exception as exc:
                logger.error(
                    "announcement_persist_failed",
                    extra={
                        "row_number": row.row_number,
                        "error_type": type(exc).__name__,
                        "announcements_created": run.announcements_created,
                    },
                )
                raise AnnouncementPersistError(
                    f"Falha ao gravar anúncio da linha {row.row_number}",
                    announcements_created=run.announcements_created,
                    instants_created=run.instants_created,
                ) from exc
            run.announcements_created += 1
            run.instants_created += len(instants)
