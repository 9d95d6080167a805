"""Exceptions raised while parsing, expanding or rendering API documents."""


class DocmdError(Exception):
    """Base class for all document processing failures."""


class MarkdownStructureError(DocmdError):
    """Raised when a document violates the nesting rules of the grammar."""

    def __init__(self, message: str, line_number: int | None = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"Line {line_number}: {message}"
        super().__init__(message)


class MarkdownTemplateError(DocmdError):
    """Raised when a template reference cannot be expanded."""

    def __init__(self, message: str, reference: str | None = None):
        self.reference = reference
        super().__init__(message)


class ArgumentParseError(DocmdError):
    """Raised when an argument signature line is malformed."""

    def __init__(self, message: str, line: str):
        self.line = line
        super().__init__(f"{message}: {line}")


class MarkdownRenderError(DocmdError):
    """Raised when a tree holds a node the text form cannot represent."""
