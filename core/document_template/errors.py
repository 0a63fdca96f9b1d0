"""Exceptions raised when a caller breaks the template editing contract."""


class DocumentTemplateError(Exception):
    """Base class for document template errors."""


class NotFoundError(DocumentTemplateError, LookupError):
    """A column or footer line id does not exist in the current template."""


class ReadOnlyFieldError(DocumentTemplateError, ValueError):
    """A system-written field (such as a row total) was edited directly."""


class UnknownDocumentTypeError(DocumentTemplateError, ValueError):
    """The requested document type has no preset."""
