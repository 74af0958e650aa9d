"""
Concept Errors
==============

Error taxonomy shared by every concept.

Two roots describe what went wrong:
- NotFoundError: the referenced entity or relationship does not exist.
- NotAllowedError: the action would break an invariant (duplicate,
  unauthorized, already exists).

Concrete errors keep a message template with positional placeholders
("{0} is not the author of community {1}") together with the raw
parameters (ids). Turning ids into display values happens later, in the
enrichment registry, so an error never needs another concept to exist.
"""
from enum import Enum
from typing import Any, ClassVar, Tuple


class ErrorCategory(str, Enum):
    """Client-visible error class."""
    NOT_FOUND = "NotFound"
    NOT_ALLOWED = "NotAllowed"


class ConceptError(Exception):
    """
    Base class for errors raised by concepts.

    Attributes:
        kind: Tag identifying the concrete error; used as the registry key.
        category: Root category the error belongs to.
        template: Message template with ``{0}``, ``{1}``... placeholders.
        params: Raw values substituted into the template by default.
    """
    kind: ClassVar[str] = "ConceptError"
    category: ClassVar[ErrorCategory]

    def __init__(self, template: str, *params: Any) -> None:
        self.template = template
        self.params: Tuple[Any, ...] = params
        super().__init__(self.message)

    def format_with(self, *values: Any) -> str:
        """Fill the template positionally with the given display values."""
        return self.template.format(*values)

    @property
    def message(self) -> str:
        """Template filled with the raw parameters."""
        return self.format_with(*self.params)


class NotFoundError(ConceptError):
    kind = "NotFound"
    category = ErrorCategory.NOT_FOUND


class NotAllowedError(ConceptError):
    kind = "NotAllowed"
    category = ErrorCategory.NOT_ALLOWED
