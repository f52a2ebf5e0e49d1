from .errors import CorruptContainerError, EmptyAlphabetError, HuffmanError
from .huffman_core import HuffmanLogic, Internal, Leaf, count_frequencies
from .huffman_service import HuffmanService, compress, uncompress

__all__ = [
    "CorruptContainerError",
    "EmptyAlphabetError",
    "HuffmanError",
    "HuffmanLogic",
    "HuffmanService",
    "Internal",
    "Leaf",
    "compress",
    "count_frequencies",
    "uncompress",
]

__version__ = "0.1.0"
