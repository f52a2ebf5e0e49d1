# filename: huffman_core.py

import heapq
from collections import Counter, namedtuple

from .errors import CorruptContainerError, EmptyAlphabetError

# Tree nodes. A tree is identified with its root node.
Leaf = namedtuple("Leaf", ["weight", "symbol"])
Internal = namedtuple("Internal", ["weight", "left", "right"])

# Priority kinds: on equal weight a leaf sorts before an internal node.
_LEAF = 0
_INTERNAL = 1


def count_frequencies(data):
    """Return a mapping of byte value -> number of occurrences in data."""
    return Counter(data)


def merge(left, right):
    return Internal(left.weight + right.weight, left, right)


class HuffmanLogic:
    def build_tree(self, table):
        """Build the Huffman tree for a frequency table and return its root.

        Heap entries are keyed by (weight, kind, tiebreak) which is a total
        order: leaves tie-break on their symbol, internal nodes on the order
        in which they were created. The node itself is never compared.
        """
        if not table:
            raise EmptyAlphabetError("cannot build a Huffman tree from an empty frequency table")

        priority_queue = [(weight, _LEAF, symbol, Leaf(weight, symbol))
                          for symbol, weight in table.items()]
        heapq.heapify(priority_queue)

        created = 0
        while len(priority_queue) > 1:
            left = heapq.heappop(priority_queue)[3]
            right = heapq.heappop(priority_queue)[3]
            merged = merge(left, right)
            heapq.heappush(priority_queue, (merged.weight, _INTERNAL, created, merged))
            created += 1

        return priority_queue[0][3]

    def generate_codes(self, root):
        """Map every symbol in the tree to its root-to-leaf path of '0'/'1'.

        A tree made of a single leaf has no path to walk, so its symbol gets
        the one-bit code '0' and every occurrence still costs one bit.
        """
        if isinstance(root, Leaf):
            return {root.symbol: "0"}

        codes = {}
        stack = [(root, "")]
        while stack:
            node, code = stack.pop()
            if isinstance(node, Leaf):
                codes[node.symbol] = code
            else:
                stack.append((node.right, code + "1"))
                stack.append((node.left, code + "0"))
        return codes

    def encode_bits(self, data, codes):
        return "".join([codes[byte] for byte in data])

    def decode_bits(self, root, bits):
        """Walk the tree over a string of '0'/'1' and return the decoded bytes.

        Raises CorruptContainerError when the bits cannot have been produced
        by this tree.
        """
        if isinstance(root, Leaf):
            if "1" in bits:
                raise CorruptContainerError("bit stream for a single-symbol tree contains a 1 bit")
            return bytes([root.symbol]) * len(bits)

        decoded = bytearray()
        node = root
        for bit in bits:
            node = node.right if bit == "1" else node.left
            if isinstance(node, Leaf):
                decoded.append(node.symbol)
                node = root

        if node is not root:
            raise CorruptContainerError("bit stream ends in the middle of a code")
        return bytes(decoded)


def walk(root):
    """Yield every node of the tree in depth-first pre-order."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        if isinstance(node, Internal):
            stack.append(node.right)
            stack.append(node.left)
