"""Exceptions raised by the import pipeline, the store and the summary client."""


class DashboardError(Exception):
    """Base class for every error raised by sales_dashboard."""


class SpreadsheetImportError(DashboardError):
    """The uploaded workbook could not be turned into daily records."""


class UnreadableFileError(SpreadsheetImportError):
    def __init__(self, message: str = "Não foi possível ler o arquivo como uma planilha."):
        super().__init__(message)


class NoSheetError(SpreadsheetImportError):
    def __init__(self, message: str = "Não foi possível encontrar uma planilha no arquivo."):
        super().__init__(message)


class NoValidRowsError(SpreadsheetImportError):
    """Raised when no row passes the day-number gate.

    Carries ``days_in_month`` so the caller can tell the user which range
    column E was expected to hold.
    """

    def __init__(self, days_in_month: int):
        self.days_in_month = days_in_month
        super().__init__(
            "Nenhuma linha de dados válida foi encontrada. Verifique se a coluna 'E' "
            f"contém os dias do mês (números de 1 a {days_in_month}) a partir da linha 6."
        )


class ExternalServiceError(DashboardError):
    """The text-generation service failed or returned an unusable payload."""


class SalespersonValidationError(DashboardError, ValueError):
    """A salesperson form was submitted without the required fields."""


class SalespersonNotFoundError(DashboardError, KeyError):
    """No salesperson with the given id exists in the collection."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""
