"""Custom exceptions for the document context."""

from typing import Any, Iterable, Optional


class InvalidResumeStructureError(ValueError):
    """
    Exception raised when a resume record cannot be normalized.

    Attributes:
        message: Error description
        field_name: Dotted path of the offending field (e.g., 'work_experience[2]')
        value: The value that failed to normalize
    """

    def __init__(self, message: str, field_name: Optional[str] = None, value: Any = None):
        self.message = message
        self.field_name = field_name
        self.value = value

        parts = [message]

        if field_name:
            parts.append(f"Field: {field_name}")

        if value is not None:
            snippet = repr(value)
            snippet = snippet[:200] + "..." if len(snippet) > 200 else snippet
            parts.append(f"Actual value: {snippet}")

        super().__init__("\n".join(parts))


class UnknownSectionError(KeyError):
    """
    Exception raised when a section action names a section not in the current order.

    Attributes:
        section_id: The identifier that was not found
        available: Identifiers present in the section order
    """

    def __init__(self, section_id: str, available: Iterable[str] = ()):
        self.section_id = section_id
        self.available = list(available)
        super().__init__(f"Section not found: '{section_id}'. Available sections: {self.available}")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]
