"""Domain-specific exceptions"""

from typing import Dict


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidQuoteInputError(DomainException):
    """Quote form inputs failed validation"""

    def __init__(self, errors: Dict[str, str]):
        super().__init__(f"Invalid quote inputs: {', '.join(sorted(errors))}")
        self.errors = errors


class ChartRenderError(DomainException):
    """Chart could not be drawn from the cash-flow series"""

    pass


class DocumentExportError(DomainException):
    """Quotation document could not be generated"""

    pass
