# filename: container.py
#
# Container layout, all integers big-endian:
#
#   [8]  tree_byte_length
#   [n]  serialized tree (pre-order)
#          leaf:     [1 tag=0][8 weight][1 symbol]
#          internal: [1 tag=1][8 weight][left][right]
#   [8]  bitstream_bit_length
#   [m]  packed bits, MSB-first, zero padded to a byte boundary

import struct

from .errors import CorruptContainerError
from .huffman_core import Internal, Leaf

TAG_LEAF = 0
TAG_INTERNAL = 1

LENGTH = struct.Struct(">Q")
NODE_HEADER = struct.Struct(">Bq")
SYMBOL = struct.Struct(">B")

MAX_LEAVES = 256


def serialize_tree(root):
    out = bytearray()
    stack = [root]
    while stack:
        node = stack.pop()
        if isinstance(node, Leaf):
            out += NODE_HEADER.pack(TAG_LEAF, node.weight)
            out += SYMBOL.pack(node.symbol)
        else:
            out += NODE_HEADER.pack(TAG_INTERNAL, node.weight)
            stack.append(node.right)
            stack.append(node.left)
    return bytes(out)


def deserialize_tree(block):
    """Rebuild a tree from its pre-order serialization.

    The whole block must be consumed by exactly one tree. Weights are
    checked against the children they claim to sum.
    """
    offset = 0
    leaves = 0
    seen = set()
    # Each frame is [weight, children collected so far] for an open internal node.
    frames = []
    root = None

    while root is None:
        if offset + NODE_HEADER.size > len(block):
            raise CorruptContainerError(f"tree block truncated at offset {offset}")
        tag, weight = NODE_HEADER.unpack_from(block, offset)
        offset += NODE_HEADER.size

        if tag == TAG_INTERNAL:
            frames.append([weight, []])
            continue
        if tag != TAG_LEAF:
            raise CorruptContainerError(f"unknown tree tag {tag} at offset {offset - NODE_HEADER.size}")

        if offset + SYMBOL.size > len(block):
            raise CorruptContainerError(f"tree block truncated at offset {offset}")
        (symbol,) = SYMBOL.unpack_from(block, offset)
        offset += SYMBOL.size

        if weight < 1:
            raise CorruptContainerError(f"leaf for symbol {symbol} has weight {weight}")
        if symbol in seen:
            raise CorruptContainerError(f"symbol {symbol} appears more than once in the tree")
        seen.add(symbol)
        leaves += 1
        if leaves > MAX_LEAVES:
            raise CorruptContainerError(f"tree has more than {MAX_LEAVES} leaves")

        node = Leaf(weight, symbol)
        # Close every internal node whose second child just completed.
        while True:
            if not frames:
                root = node
                break
            frame = frames[-1]
            frame[1].append(node)
            if len(frame[1]) < 2:
                break
            frames.pop()
            left, right = frame[1]
            if frame[0] != left.weight + right.weight:
                raise CorruptContainerError(
                    f"internal node weight {frame[0]} is not the sum of its children "
                    f"({left.weight} + {right.weight})"
                )
            node = Internal(frame[0], left, right)

    if offset != len(block):
        raise CorruptContainerError(f"{len(block) - offset} unused bytes after the serialized tree")
    return root


def pack_bits(bits):
    """Pack a string of '0'/'1' into bytes, MSB-first, zero padded."""
    if not bits:
        return b""
    byte_count = (len(bits) + 7) // 8
    padded = bits.ljust(byte_count * 8, "0")
    return int(padded, 2).to_bytes(byte_count, "big")


def unpack_bits(packed, bit_length):
    if bit_length == 0:
        return ""
    bits = format(int.from_bytes(packed, "big"), f"0{len(packed) * 8}b")
    return bits[:bit_length]


def serialize(root, bits):
    tree_block = serialize_tree(root) if root is not None else b""
    return b"".join([
        LENGTH.pack(len(tree_block)),
        tree_block,
        LENGTH.pack(len(bits)),
        pack_bits(bits),
    ])


def read_length(data, offset, field):
    if offset + LENGTH.size > len(data):
        raise CorruptContainerError(
            f"container truncated: {field} needs {LENGTH.size} bytes at offset {offset}, "
            f"{max(len(data) - offset, 0)} available"
        )
    return LENGTH.unpack_from(data, offset)[0], offset + LENGTH.size


def deserialize(data):
    """Split a container into (root, bits).

    root is None for the container of an empty input.
    """
    data = bytes(data)

    tree_length, offset = read_length(data, 0, "tree_byte_length")
    if offset + tree_length > len(data):
        raise CorruptContainerError(
            f"container truncated: tree block declares {tree_length} bytes, "
            f"{len(data) - offset} available"
        )
    tree_block = data[offset:offset + tree_length]
    offset += tree_length

    bit_length, offset = read_length(data, offset, "bitstream_bit_length")
    byte_length = (bit_length + 7) // 8
    available = len(data) - offset
    if byte_length > available:
        raise CorruptContainerError(
            f"container truncated: {bit_length} bits need {byte_length} bytes, {available} available"
        )
    if byte_length < available:
        raise CorruptContainerError(f"{available - byte_length} unexpected bytes after the bit stream")

    if tree_length == 0:
        if bit_length != 0:
            raise CorruptContainerError(f"empty tree with a {bit_length}-bit stream")
        return None, ""

    root = deserialize_tree(tree_block)
    return root, unpack_bits(data[offset:], bit_length)
