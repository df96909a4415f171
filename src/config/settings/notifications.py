"""Settings do scheduler de notificações.

Controla o intervalo de varredura, a tolerância para instantes
ligeiramente futuros e o fuso usado para interpretar a planilha.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

MIN_INTERVAL_MS = 1000
DEFAULT_INTERVAL_MS = 5000
DEFAULT_BATCH_SIZE = 500


@dataclass(frozen=True)
class NotificationSettings:
    """Configurações do NotificationScheduler.

    Attributes:
        interval_ms: Intervalo entre ticks (piso de 1000ms)
        grace_ms: Janela para entregar instantes ligeiramente futuros (>= 0)
        batch_size: Máximo de instantes processados por tick
        delivery_timeout_seconds: Timeout por entrega (None = sem limite)
        timezone: Fuso das datas/horas escritas na planilha
        scheduler_enabled: Liga o loop no startup da aplicação
    """

    interval_ms: int = DEFAULT_INTERVAL_MS
    grace_ms: int = 0
    batch_size: int = DEFAULT_BATCH_SIZE
    delivery_timeout_seconds: float | None = None
    timezone: str = "UTC"
    scheduler_enabled: bool = True

    @property
    def interval_seconds(self) -> float:
        """Intervalo entre ticks em segundos."""
        return self.interval_ms / 1000

    @property
    def tzinfo(self) -> ZoneInfo:
        """Fuso configurado como ZoneInfo."""
        return ZoneInfo(self.timezone)

    def validate(self) -> list[str]:
        """Valida configurações do scheduler.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if self.interval_ms < MIN_INTERVAL_MS:
            errors.append(f"NOTIFY_INTERVAL_MS deve ser >= {MIN_INTERVAL_MS}")
        if self.grace_ms < 0:
            errors.append("NOTIFY_GRACE_MS deve ser >= 0")
        if self.batch_size < 1:
            errors.append("NOTIFY_BATCH_SIZE deve ser >= 1")
        if self.delivery_timeout_seconds is not None and self.delivery_timeout_seconds <= 0:
            errors.append("NOTIFY_DELIVERY_TIMEOUT_SECONDS deve ser > 0")

        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            errors.append(f"ANNOUNCEMENT_TIMEZONE inválido: {self.timezone}")

        return errors


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name, "")
    try:
        return int(raw) if raw.strip() else default
    except ValueError:
        return default


def _float_from_env(name: str) -> float | None:
    raw = os.getenv(name, "").strip()
    try:
        return float(raw) if raw else None
    except ValueError:
        return None


def _load_notification_from_env() -> NotificationSettings:
    """Carrega NotificationSettings de variáveis de ambiente.

    Intervalo abaixo do piso e grace negativo são ajustados aos limites.
    """
    return NotificationSettings(
        interval_ms=max(MIN_INTERVAL_MS, _int_from_env("NOTIFY_INTERVAL_MS", DEFAULT_INTERVAL_MS)),
        grace_ms=max(0, _int_from_env("NOTIFY_GRACE_MS", 0)),
        batch_size=max(1, _int_from_env("NOTIFY_BATCH_SIZE", DEFAULT_BATCH_SIZE)),
        delivery_timeout_seconds=_float_from_env("NOTIFY_DELIVERY_TIMEOUT_SECONDS"),
        timezone=os.getenv("ANNOUNCEMENT_TIMEZONE", "UTC"),
        scheduler_enabled=os.getenv("NOTIFY_SCHEDULER_ENABLED", "true").lower()
        in ("true", "1", "yes"),
    )


@lru_cache(maxsize=1)
def get_notification_settings() -> NotificationSettings:
    """Retorna instância cacheada de NotificationSettings."""
    return _load_notification_from_env()
