# filename: errors.py


class HuffmanError(Exception):
    """Base class for every error raised by huffman_compressor."""


class CorruptContainerError(HuffmanError, ValueError):
    """The buffer handed to uncompress is not a well-formed container."""


class EmptyAlphabetError(HuffmanError, ValueError):
    """A tree was requested for a frequency table with no symbols."""
