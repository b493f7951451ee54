# errors.py
"""
Exceptions raised by the form reading pipeline and the result store.
"""


class FormReaderError(Exception):
    """Base class for every failure the pipeline reports to its caller."""


class InvalidImage(FormReaderError):
    """The input image is missing, unreadable or has no area."""


class NoRegionsFound(FormReaderError):
    """Detection accepted zero answer regions."""


class StorageUnavailable(FormReaderError):
    """A result file or diagnostic artifact could not be read or written."""
