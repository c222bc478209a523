import numpy as np
from typing import Optional

from .data_utils import VocabEntry, Vocabulary
from .huffman_tree import HuffmanTree
from .softmax_approximator import SoftmaxApproximator


class HierarchicalSoftmax(SoftmaxApproximator):
    """
    Hierarchical softmax using a Huffman tree.

    Every vocabulary word is a leaf; a training pair updates the output rows
    of the internal nodes on the path from the root to the target's leaf.
    """

    def __init__(self):
        super().__init__()
        self.huffman_tree: Optional[HuffmanTree] = None

    def _structure(self, vocabulary: Vocabulary) -> None:
        self.huffman_tree = HuffmanTree(vocabulary.counts())

        for entry in vocabulary.entries:
            entry.code, entry.points = self.huffman_tree.get_word_path(entry.index)

        self.num_output_units = self.huffman_tree.num_internal_nodes

    def output_indices(self, target: VocabEntry) -> np.ndarray:
        self._check_structured()
        return target.points

    def labels(self, target: VocabEntry) -> np.ndarray:
        return 1.0 - target.code

    def gradient(self, activation: np.ndarray, target: VocabEntry,
                 learning_rate: float) -> np.ndarray:
        return (1.0 - target.code - activation) * learning_rate
