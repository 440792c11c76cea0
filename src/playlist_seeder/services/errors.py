"""Errors raised by the import pipeline itself (as opposed to the HTTP layer)."""


class InvalidRecordError(ValueError):
    """An external record is missing required fields or has the wrong shape."""

    def __init__(self, label: str, problems: list[str]) -> None:
        super().__init__(f"Invalid record {label}: {'; '.join(problems)}")
        self.label = label
        self.problems = problems


class AssetArchiveError(Exception):
    """Downloading an asset or writing it to the content store failed."""

    def __init__(self, message: str, source_url: str | None = None) -> None:
        super().__init__(message)
        self.source_url = source_url


class ImportAbortedError(Exception):
    """A fatal error stopped an import run before it completed."""

    def __init__(self, stage: str, cause: Exception) -> None:
        super().__init__(f"Import aborted during {stage}: {cause}")
        self.stage = stage
        self.cause = cause
