"""Scheduler de notificações — entrega anúncios vencidos.

A cada intervalo um tick é disparado como task própria:
1. Se outro tick ainda está rodando, o disparo é ignorado (sem IO).
2. Busca instantes pendentes com at <= agora + grace, em ordem de at.
3. Entrega um a um pelo MessageSink; sucesso marca o instante como
   entregue, falha apenas registra log e o instante volta no próximo tick.
4. Se houve lote, remove anúncios sem instantes pendentes.

Não há limite de tentativas nem backoff para entregas que falham.
Pensado para uma única instância: dois schedulers sobre o mesmo store
entregariam em duplicidade.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import time
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

from app.observability import correlation_scope, record_delivery, record_latency
from config.settings.notifications import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_INTERVAL_MS,
    MIN_INTERVAL_MS,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.domain.announcement import DueInstant
    from app.protocols.announcement_store import AnnouncementStoreProtocol
    from app.protocols.message_sink import DeliveryResult, MessageSinkProtocol
    from config.settings.notifications import NotificationSettings

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True, slots=True)
class TickSummary:
    """Resultado de um tick."""

    skipped: bool = False
    due: int = 0
    delivered: int = 0
    failed: int = 0
    not_yet_due: int = 0
    cleaned: int = 0
    error: str | None = None


class NotificationScheduler:
    """Loop recorrente de entrega com guarda de reentrância.

    Args:
        store: Store de anúncios/instantes
        sink: Destino das mensagens (fan-out para assinantes)
        interval_ms: Intervalo entre disparos (piso de 1000ms)
        grace_ms: Tolerância para instantes ligeiramente futuros
        batch_size: Máximo de instantes por tick
        delivery_timeout_seconds: Timeout por entrega; None = sem limite
        clock: Fonte de "agora" (timezone-aware)
    """

    def __init__(
        self,
        store: AnnouncementStoreProtocol,
        sink: MessageSinkProtocol,
        *,
        interval_ms: int = DEFAULT_INTERVAL_MS,
        grace_ms: int = 0,
        batch_size: int = DEFAULT_BATCH_SIZE,
        delivery_timeout_seconds: float | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._store = store
        self._sink = sink
        self._interval_ms = max(MIN_INTERVAL_MS, interval_ms)
        self._grace_ms = max(0, grace_ms)
        self._batch_size = max(1, batch_size)
        self._delivery_timeout = delivery_timeout_seconds
        self._clock = clock

        self._busy = False
        self._loop_task: asyncio.Task[None] | None = None
        self._tick_tasks: set[asyncio.Task[Any]] = set()

    @classmethod
    def from_settings(
        cls,
        store: AnnouncementStoreProtocol,
        sink: MessageSinkProtocol,
        settings: NotificationSettings,
    ) -> NotificationScheduler:
        return cls(
            store,
            sink,
            interval_ms=settings.interval_ms,
            grace_ms=settings.grace_ms,
            batch_size=settings.batch_size,
            delivery_timeout_seconds=settings.delivery_timeout_seconds,
        )

    @property
    def interval_ms(self) -> int:
        return self._interval_ms

    @property
    def grace_ms(self) -> int:
        return self._grace_ms

    @property
    def is_running(self) -> bool:
        return self._loop_task is not None and not self._loop_task.done()

    @property
    def is_busy(self) -> bool:
        return self._busy

    # ──────────────────────────────────────────────────────────────
    # Ciclo de vida
    # ──────────────────────────────────────────────────────────────

    def start(self) -> None:
        """Inicia o loop no event loop corrente (idempotente)."""
        if self.is_running:
            return
        self._loop_task = asyncio.create_task(self._run_loop(), name="notification-scheduler")
        logger.info(
            "notification_scheduler_started",
            extra={"interval_ms": self._interval_ms, "grace_ms": self._grace_ms},
        )

    async def stop(self, timeout_seconds: float = 30.0) -> None:
        """Cancela o loop e aguarda ticks em andamento."""
        if self._loop_task is not None:
            self._loop_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._loop_task
            self._loop_task = None

        if self._tick_tasks:
            _, pending = await asyncio.wait(list(self._tick_tasks), timeout=timeout_seconds)
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)
            if pending:
                logger.warning(
                    "notification_scheduler_ticks_cancelled",
                    extra={"cancelled_ticks": len(pending)},
                )
        logger.info("notification_scheduler_stopped")

    async def _run_loop(self) -> None:
        while True:
            await asyncio.sleep(self._interval_ms / 1000)
            self._fire()

    def _fire(self) -> None:
        task = asyncio.create_task(self.tick())
        self._tick_tasks.add(task)
        task.add_done_callback(self._on_tick_done)

    def _on_tick_done(self, task: asyncio.Task[Any]) -> None:
        self._tick_tasks.discard(task)
        with contextlib.suppress(asyncio.CancelledError):
            exc = task.exception()
            if exc is not None:
                logger.error(
                    "notification_tick_task_failed",
                    extra={"error_type": type(exc).__name__},
                )

    # ──────────────────────────────────────────────────────────────
    # Tick
    # ──────────────────────────────────────────────────────────────

    async def tick(self) -> TickSummary:
        """Executa um ciclo de entrega; nunca propaga erro de store/sink."""
        if self._busy:
            logger.debug("notification_tick_skipped_busy")
            return TickSummary(skipped=True)

        self._busy = True
        try:
            with correlation_scope(prefix="tick"):
                return await self._run_tick()
        finally:
            self._busy = False

    async def _run_tick(self) -> TickSummary:
        started_at = time.perf_counter()
        now = self._clock()
        threshold = now + timedelta(milliseconds=self._grace_ms)

        due: list[DueInstant] = []
        delivered = failed = not_yet_due = cleaned = 0
        error: str | None = None
        try:
            due = await self._store.find_due(now, self._grace_ms, self._batch_size)
            if due:
                logger.info("notification_batch_due", extra={"due": len(due)})

            for instant in due:
                if instant.at > threshold:
                    not_yet_due += 1
                    continue
                if await self._deliver(instant):
                    delivered += 1
                else:
                    failed += 1

            if due:
                cleaned = await self._cleanup()
        except Exception as exc:
            error = type(exc).__name__
            logger.error("notification_tick_failed", extra={"error_type": error})

        if due:
            record_delivery(delivered, failed, cleaned)
        record_latency(
            "notification_scheduler",
            "tick",
            (time.perf_counter() - started_at) * 1000,
        )
        return TickSummary(
            due=len(due),
            delivered=delivered,
            failed=failed,
            not_yet_due=not_yet_due,
            cleaned=cleaned,
            error=error,
        )

    async def _send(self, instant: DueInstant) -> DeliveryResult:
        delivery = self._sink.deliver(instant.name, instant.message)
        if self._delivery_timeout is None:
            return await delivery
        return await asyncio.wait_for(delivery, timeout=self._delivery_timeout)

    async def _deliver(self, instant: DueInstant) -> bool:
        """Entrega um instante; True somente se entregue e marcado."""
        log_extra = {
            "instant_id": instant.instant_id,
            "announcement_id": instant.announcement_id,
        }
        try:
            result = await self._send(instant)
        except Exception as exc:
            logger.error(
                "notification_delivery_failed",
                extra={**log_extra, "error_type": type(exc).__name__},
            )
            return False

        if not result.success:
            logger.error(
                "notification_delivery_failed",
                extra={**log_extra, "error_code": result.error_code},
            )
            return False

        try:
            await self._store.mark_delivered(instant.instant_id)
        except Exception as exc:
            logger.error(
                "notification_mark_delivered_failed",
                extra={**log_extra, "error_type": type(exc).__name__},
            )
            return False

        logger.info(
            "notification_delivered",
            extra={**log_extra, "recipients": result.recipients},
        )
        return True

    async def _cleanup(self) -> int:
        """Remove anúncios sem instantes pendentes."""
        counts = await self._store.list_announcements_with_pending_counts()
        removed = 0
        for announcement_id, pending in counts.items():
            if pending == 0 and await self._store.delete_announcement_if_exhausted(
                announcement_id
            ):
                removed += 1
        if removed:
            logger.info("exhausted_announcements_removed", extra={"removed": removed})
        return removed
