# filename: huffman_service.py

from . import container
from .errors import CorruptContainerError
from .huffman_core import HuffmanLogic, count_frequencies


class HuffmanService:
    def __init__(self):
        self.logic = HuffmanLogic()

    def compress(self, data):
        # Empty input never reaches tree construction; it becomes the
        # container with a zero-length tree and a zero-length bit stream.
        if not data:
            return container.serialize(None, "")
        table = count_frequencies(data)
        tree = self.logic.build_tree(table)
        codes = self.logic.generate_codes(tree)
        bits = self.logic.encode_bits(data, codes)
        return container.serialize(tree, bits)

    def uncompress(self, data):
        tree, bits = container.deserialize(data)
        if tree is None:
            return b""
        decoded = self.logic.decode_bits(tree, bits)
        if len(decoded) != tree.weight:
            raise CorruptContainerError(
                f"bit stream decodes to {len(decoded)} bytes, tree weight is {tree.weight}"
            )
        return decoded


_service = HuffmanService()


def compress(data):
    """Compress a byte buffer into a self-describing Huffman container."""
    return _service.compress(data)


def uncompress(data):
    """Recover the original bytes from a container made by compress().

    Raises CorruptContainerError if data is not a well-formed container.
    """
    return _service.uncompress(data)
