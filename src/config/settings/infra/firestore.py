"""Settings do Firestore.

Configurações para Google Cloud Firestore (anúncios, instantes agendados
e perguntas frequentes).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class FirestoreSettings:
    """Configurações do Firestore.

    Attributes:
        project_id: ID do projeto GCP (usa GCP_PROJECT se não definido)
        collection_announcements: Collection de anúncios
        collection_instants: Collection de instantes agendados
        collection_questions: Collection de perguntas frequentes
    """

    project_id: str = ""
    collection_announcements: str = "announcements"
    collection_instants: str = "scheduled_instants"
    collection_questions: str = "questions"

    def validate(self, gcp_project: str) -> list[str]:
        """Valida configurações do Firestore.

        Args:
            gcp_project: Projeto GCP padrão para fallback.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if not (self.project_id or gcp_project):
            errors.append("FIRESTORE_PROJECT_ID ou GCP_PROJECT deve estar configurado")

        collections = (
            self.collection_announcements,
            self.collection_instants,
            self.collection_questions,
        )
        if len(set(collections)) != len(collections):
            errors.append("Collections de anúncios, instantes e perguntas devem ser distintas")

        return errors


def _load_firestore_from_env() -> FirestoreSettings:
    """Carrega FirestoreSettings de variáveis de ambiente."""
    return FirestoreSettings(
        project_id=os.getenv("FIRESTORE_PROJECT_ID", ""),
        collection_announcements=os.getenv(
            "FIRESTORE_COLLECTION_ANNOUNCEMENTS", "announcements"
        ),
        collection_instants=os.getenv("FIRESTORE_COLLECTION_INSTANTS", "scheduled_instants"),
        collection_questions=os.getenv("FIRESTORE_COLLECTION_QUESTIONS", "questions"),
    )


@lru_cache(maxsize=1)
def get_firestore_settings() -> FirestoreSettings:
    """Retorna instância cacheada de FirestoreSettings."""
    return _load_firestore_from_env()
