"""Exceptions and collected layout diagnostics."""


class GenogramError(Exception):
    """Base class for errors raised by the genogram package."""


class InvalidInputError(GenogramError, ValueError):
    """The input document is not shaped as {members: [...], marriages: [...]}."""


class DocumentNotFoundError(GenogramError, KeyError):
    """No stored document exists under the requested name."""


class StoreError(GenogramError):
    """A document could not be saved to or read from the store."""


class GenerationError(GenogramError):
    """The language model call failed or returned something unusable."""


# Diagnostics are collected on the layout result, never raised.


class LayoutWarning(UserWarning):
    def __init__(self, message: str, union_id: str | None = None, ref: str | None = None):
        super().__init__(message)
        self.message = message
        self.union_id = union_id
        self.ref = ref

    def to_dict(self) -> dict:
        return {
            "type": type(self).__name__,
            "message": self.message,
            "unionId": self.union_id,
            "ref": self.ref,
        }


class UnresolvedUnionWarning(LayoutWarning):
    """A union has no resolvable partner, or references an unknown person id."""


class MalformedGenerationWarning(LayoutWarning):
    """A union's partners are declared in different generations."""
