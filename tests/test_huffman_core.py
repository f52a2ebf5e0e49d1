import random

import pytest

from huffman_compressor import EmptyAlphabetError, CorruptContainerError
from huffman_compressor.huffman_core import (
	HuffmanLogic,
	Internal,
	Leaf,
	count_frequencies,
	merge,
	walk,
)


def _sym(ch):
	return ord(ch)


def _table(**counts):
	return {_sym(k): v for k, v in counts.items()}


def test_count_frequencies():
	assert count_frequencies(b"abracadabra") == {
		_sym('a'): 5, _sym('b'): 2, _sym('r'): 2, _sym('c'): 1, _sym('d'): 1,
	}


def test_count_frequencies_empty():
	assert dict(count_frequencies(b"")) == {}


def test_count_frequencies_only_present_values():
	table = count_frequencies(bytes([0, 0, 255]))
	assert set(table) == {0, 255}
	assert all(v >= 1 for v in table.values())


def test_build_tree_small_example():
	# a and b merge first; the weight-3 leaf c then wins the tie against
	# the weight-3 internal node, so it is removed first and goes left.
	root = HuffmanLogic().build_tree(_table(a=1, b=2, c=3))
	expected = Internal(
		6,
		Leaf(3, _sym('c')),
		Internal(3, Leaf(1, _sym('a')), Leaf(2, _sym('b'))),
	)
	assert root == expected


def test_build_tree_larger_example_codes():
	logic = HuffmanLogic()
	root = logic.build_tree(_table(c=32, d=42, e=120, k=7, l=42, m=24, u=37, z=2))
	codes = {chr(k): v for k, v in logic.generate_codes(root).items()}
	assert codes == {
		'e': '0',
		'u': '100',
		'd': '101',
		'l': '110',
		'c': '1110',
		'z': '111100',
		'k': '111101',
		'm': '11111',
	}


def test_leaf_ties_break_on_symbol():
	root = HuffmanLogic().build_tree({9: 5, 3: 5})
	assert root == Internal(10, Leaf(5, 3), Leaf(5, 9))


def test_internal_ties_break_on_creation_order():
	root = HuffmanLogic().build_tree(_table(a=1, b=1, c=1, d=1))
	ab = Internal(2, Leaf(1, _sym('a')), Leaf(1, _sym('b')))
	cd = Internal(2, Leaf(1, _sym('c')), Leaf(1, _sym('d')))
	assert root == Internal(4, ab, cd)


def test_build_tree_independent_of_table_order():
	rng = random.Random(7)
	table = {s: rng.randint(1, 20) for s in range(60)}
	shuffled = list(table.items())
	rng.shuffle(shuffled)
	logic = HuffmanLogic()
	assert logic.build_tree(table) == logic.build_tree(dict(shuffled))


def test_build_tree_empty_table():
	with pytest.raises(EmptyAlphabetError):
		HuffmanLogic().build_tree({})


def test_single_symbol_tree_is_a_leaf():
	logic = HuffmanLogic()
	root = logic.build_tree({42: 1000})
	assert root == Leaf(1000, 42)
	assert logic.generate_codes(root) == {42: '0'}


def test_internal_weights_sum_children():
	rng = random.Random(1)
	data = bytes(rng.choice(b"aaaaabbbccdefghij\x00\xff") for _ in range(5000))
	root = HuffmanLogic().build_tree(count_frequencies(data))
	assert root.weight == len(data)
	for node in walk(root):
		if isinstance(node, Internal):
			assert node.weight == node.left.weight + node.right.weight


def test_every_internal_node_has_two_children():
	root = HuffmanLogic().build_tree(count_frequencies(bytes(range(256)) * 3 + b"zz"))
	leaves = [n for n in walk(root) if isinstance(n, Leaf)]
	internals = [n for n in walk(root) if isinstance(n, Internal)]
	assert len(leaves) == 256
	assert len(internals) == len(leaves) - 1


def test_codes_form_a_prefix_code():
	rng = random.Random(3)
	data = bytes(min(int(rng.expovariate(0.05)), 255) for _ in range(20000))
	logic = HuffmanLogic()
	codes = logic.generate_codes(logic.build_tree(count_frequencies(data)))
	values = sorted(codes.values())
	assert len(values) == len(set(values))
	# after sorting, a prefix would sort immediately before some extension of it
	for shorter, longer in zip(values, values[1:]):
		assert not longer.startswith(shorter)


def test_encode_bits_in_input_order():
	logic = HuffmanLogic()
	root = logic.build_tree(count_frequencies(b"aab"))
	codes = logic.generate_codes(root)
	assert codes == {_sym('b'): '0', _sym('a'): '1'}
	assert logic.encode_bits(b"aab", codes) == '110'


def test_decode_bits():
	logic = HuffmanLogic()
	root = logic.build_tree(_table(a=1, b=2, c=3))
	assert logic.decode_bits(root, '10' + '11' + '0' + '11') == b"abcb"


def test_decode_single_symbol_tree():
	logic = HuffmanLogic()
	assert logic.decode_bits(Leaf(3, 7), '000') == bytes([7, 7, 7])


def test_decode_rejects_one_bit_for_single_symbol_tree():
	with pytest.raises(CorruptContainerError):
		HuffmanLogic().decode_bits(Leaf(3, 7), '010')


def test_decode_rejects_partial_trailing_code():
	logic = HuffmanLogic()
	root = logic.build_tree(_table(a=1, b=2, c=3))
	with pytest.raises(CorruptContainerError):
		logic.decode_bits(root, '01')


def test_merge_sums_weights():
	node = merge(Leaf(4, 1), Leaf(6, 2))
	assert node == Internal(10, Leaf(4, 1), Leaf(6, 2))
