import numpy as np
import pytest

from word2vec.data_utils import Vocabulary
from word2vec.exceptions import NotFittedError
from word2vec.hierarchical_softmax import HierarchicalSoftmax
from word2vec.huffman_tree import HuffmanTree

# Unit tests: Huffman tree shape and the hierarchical softmax strategy.

COUNTS = [100, 80, 70, 60, 50, 40, 30, 25, 20, 15, 12, 10, 8, 6, 5]


def test_tree_has_one_less_internal_node_than_leaves():
    tree = HuffmanTree(COUNTS)
    assert tree.num_internal_nodes == len(COUNTS) - 1
    assert tree.nodes[tree.root].count == sum(COUNTS)

    for node in tree.nodes[len(COUNTS):]:
        assert node.left is not None and node.right is not None


def test_code_and_points_lengths_match():
    tree = HuffmanTree(COUNTS)
    for word_id in range(len(COUNTS)):
        code, points = tree.get_word_path(word_id)
        assert len(code) == len(points) > 0
        assert np.all((points >= 0) & (points <= len(COUNTS) - 2))
        # every path starts at the root
        assert points[0] == tree.root - len(COUNTS)


def test_codes_are_prefix_free():
    tree = HuffmanTree(COUNTS)
    codes = ["".join(map(str, tree.codes[i])) for i in range(len(COUNTS))]
    for i, a in enumerate(codes):
        for j, b in enumerate(codes):
            if i != j:
                assert not b.startswith(a), f"{a} is a prefix of {b}"


def test_frequent_words_are_not_deeper():
    tree = HuffmanTree(COUNTS)
    depths = [len(tree.codes[i]) for i in range(len(COUNTS))]
    assert depths == sorted(depths)


def test_small_tree_paths():
    tree = HuffmanTree([5, 3, 2])
    # merges: (2, 3) -> node 3, then (5, node 3) -> root node 4
    assert tree.get_word_path(0)[0].tolist() == [0]
    assert tree.get_word_path(0)[1].tolist() == [1]
    assert tree.get_word_path(1)[0].tolist() == [1, 1]
    assert tree.get_word_path(1)[1].tolist() == [1, 0]
    assert tree.get_word_path(2)[0].tolist() == [1, 0]
    assert tree.max_depth == 2


def test_single_word_tree_has_empty_path():
    tree = HuffmanTree([7])
    assert tree.num_internal_nodes == 0
    assert len(tree.codes[0]) == 0 and len(tree.points[0]) == 0


def _vocabulary(sentences):
    vocab = Vocabulary(min_count=1, sample=0)
    vocab.build_vocabulary(sentences)
    return vocab


def test_hierarchical_softmax_writes_paths_onto_entries():
    vocab = _vocabulary([["a", "a", "a", "b", "b", "c", "d"]])
    hs = HierarchicalSoftmax()
    hs.structure_sampling(vocab)

    assert hs.num_output_units == vocab.vocab_size - 1
    for entry in vocab:
        assert len(entry.code) == len(entry.points)
        np.testing.assert_array_equal(hs.output_indices(entry), entry.points)


def test_hierarchical_softmax_gradient_and_labels():
    vocab = _vocabulary([["a", "a", "b", "c"]])
    hs = HierarchicalSoftmax()
    hs.structure_sampling(vocab)

    entry = vocab["b"]
    activation = np.full(len(entry.code), 0.5)
    expected = (1 - entry.code - activation) * 0.1

    np.testing.assert_allclose(hs.gradient(activation, entry, 0.1), expected)
    np.testing.assert_array_equal(hs.labels(entry), 1 - entry.code)
    assert hs.loss(activation, entry) == pytest.approx(len(entry.code) * np.log(2), rel=1e-6)


def test_hierarchical_softmax_requires_structuring():
    vocab = _vocabulary([["a", "b"]])
    hs = HierarchicalSoftmax()

    with pytest.raises(NotFittedError):
        hs.output_indices(vocab["a"])

    hs.structure_sampling(vocab)
    with pytest.raises(RuntimeError):
        hs.structure_sampling(vocab)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
