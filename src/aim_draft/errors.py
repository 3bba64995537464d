"""Exceptions raised by the pipeline stages."""


class AimDraftError(Exception):
    """Base class for stage failures that carry a user-facing message."""


class TitleRetrievalError(AimDraftError):
    """Document title could not be fetched (bad URL, HTTP error)."""


class SheetLookupError(AimDraftError):
    """Spreadsheet request failed."""
