"""Serviços de aplicação.

Normalização de células, importação de planilhas e scheduler de
entrega. Implementações concretas de IO ficam em app/infra/.
"""

from app.services.notification_scheduler import NotificationScheduler, TickSummary
from app.services.sheet_ingestor import SheetIngestor

__all__ = [
    "NotificationScheduler",
    "SheetIngestor",
    "TickSummary",
]
