"""Custom exceptions for mdtoc."""


class MdtocError(Exception):
    """Base exception for mdtoc operations."""


class FetchError(MdtocError):
    """Error while loading a document."""


class DocumentNotFoundError(FetchError):
    """The requested document does not exist."""


class ParseError(MdtocError):
    """Error during Markdown parsing."""


class TocNotFoundError(ParseError):
    """Document has no table of contents section."""


class DocumentRejectedError(FetchError):
    """The document was refused for its host, size or content type."""
