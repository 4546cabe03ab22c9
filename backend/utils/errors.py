# backend/utils/errors.py

"""
Error types raised by the item list pipeline.

Routers never build error payloads themselves; main.py maps these
classes to status codes and a {"error": message} body.
"""


class ItemListError(Exception):
    """Base class for every failure the service reports to a caller."""


class ConfigError(ItemListError):
    """Invalid environment configuration."""


class NoFileError(ItemListError):
    """The upload request carried no file."""


class UnsupportedFormatError(ItemListError):
    """The uploaded file extension is not accepted."""


class SheetNotFoundError(ItemListError):
    """A spreadsheet upload has no DataSheet sheet."""


class ParseError(ItemListError):
    """The dataset or spreadsheet could not be parsed."""


class NotFoundError(ItemListError):
    """The dataset was requested before any upload exists."""


class StorageError(ItemListError):
    """A filesystem read, write or rename failed."""
