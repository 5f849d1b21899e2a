"""
Expected result protocol for data-driven login cases

The expected_result column carries either a string starting with
"Success" or "Error: <message>". Anything else is rejected.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any

from uiharness.errors import UnrecognizedOutcomeError

SUCCESS_PREFIX = 'Success'
ERROR_PREFIX = 'Error:'


class OutcomeKind(Enum):
    SUCCESS = 'success'
    ERROR = 'error'


@dataclass(frozen=True)
class ExpectedOutcome:
    kind: OutcomeKind
    message: str = ''

    @property
    def is_success(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS


def parse_expected_result(value: Any) -> ExpectedOutcome:
    """Route an expected_result cell to the success or error branch"""
    text = '' if value is None else str(value).strip()

    if text.startswith(SUCCESS_PREFIX):
        return ExpectedOutcome(OutcomeKind.SUCCESS)

    if text.startswith(ERROR_PREFIX):
        message = text[len(ERROR_PREFIX):].strip()
        if not message:
            raise UnrecognizedOutcomeError(f"expected_result '{text}' has no error message after 'Error:'")
        return ExpectedOutcome(OutcomeKind.ERROR, message)

    raise UnrecognizedOutcomeError(
        f"Unrecognized expected_result '{text}': expected a value starting with "
        f"'{SUCCESS_PREFIX}' or '{ERROR_PREFIX} <message>'"
    )
