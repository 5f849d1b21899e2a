"""Harness exception hierarchy"""


class HarnessError(Exception):
    """Base class for all harness errors"""


class DataStoreError(HarnessError):
    """Problems with the tabular test data"""


class DataLoadError(DataStoreError):
    """Tabular file is missing, unreadable or not a spreadsheet"""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load test data from {path}: {reason}")


class DataNotLoadedError(DataStoreError):
    """Lookup attempted before the data store was loaded"""


class GenerationError(HarnessError):
    """Generated feature file could not be produced"""


class SessionError(HarnessError):
    """Browser session could not be opened"""


class UnrecognizedOutcomeError(HarnessError, ValueError):
    """expected_result value follows neither the Success nor the Error: form"""
