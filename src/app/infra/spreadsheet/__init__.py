"""Leitura de planilhas enviadas para importação."""

from app.infra.spreadsheet.xlsx_reader import read_first_sheet_rows

__all__ = ["read_first_sheet_rows"]
