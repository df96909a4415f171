"""Utilitários compartilhados (sem dependência de app/ ou api/)."""
