"""Protocolos de entrega de anúncios aos assinantes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class DeliveryResult:
    """Resultado de uma entrega em fan-out.

    Attributes:
        success: True se a entrega pode ser considerada confirmada
        recipients: Assinantes que receberam a mensagem
        failed_recipients: Assinantes cujo envio falhou
        error_code: Código curto do erro quando success=False
    """

    success: bool
    recipients: int = 0
    failed_recipients: int = 0
    error_code: str | None = None

    @classmethod
    def failure(cls, error_code: str, *, failed_recipients: int = 0) -> DeliveryResult:
        return cls(success=False, failed_recipients=failed_recipients, error_code=error_code)


class MessageSinkProtocol(Protocol):
    """Contrato mínimo para entregar um anúncio a todos os assinantes.

    Falhas devem ser devolvidas como DeliveryResult(success=False);
    exceções ainda assim são capturadas pelo scheduler.
    """

    async def deliver(self, name: str, message: str) -> DeliveryResult: ...
