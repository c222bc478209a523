import heapq
import logging
import numpy as np
from typing import List, Optional, Sequence, Tuple


logger = logging.getLogger(__name__)


class HuffmanNode:
    """Node in the Huffman tree for hierarchical softmax.

    Children are referenced by their index in the tree's node list.
    """

    __slots__ = ('index', 'count', 'left', 'right')

    def __init__(self, index: int, count: int,
                 left: Optional[int] = None, right: Optional[int] = None):
        self.index = index
        self.count = count
        self.left = left
        self.right = right

    def is_leaf(self) -> bool:
        """Check if this is a leaf node."""
        return self.left is None and self.right is None


class HuffmanTree:
    """Huffman tree for hierarchical softmax in Word2Vec.

    Nodes live in a flat list: leaves ``0..V-1`` are the vocabulary words (in
    vocabulary index order) and internal nodes ``V..2V-2`` are created by the
    merges, so internal node ``n`` owns row ``n - V`` of the output layer.
    """

    def __init__(self, counts: Sequence[int]):
        self.vocab_size = len(counts)
        self.nodes: List[HuffmanNode] = [HuffmanNode(i, int(c)) for i, c in enumerate(counts)]
        self.root: Optional[int] = None
        self.max_depth = 0

        self.codes: List[np.ndarray] = [np.zeros(0, dtype=np.int8)] * self.vocab_size
        self.points: List[np.ndarray] = [np.zeros(0, dtype=np.int64)] * self.vocab_size

        self._build_tree()
        self._assign_codes()

    @property
    def num_internal_nodes(self) -> int:
        return len(self.nodes) - self.vocab_size

    def _build_tree(self) -> None:
        """Build the Huffman tree from word counts."""
        if not self.nodes:
            return

        # Ties on count are broken by the lower node index
        heap = [(node.count, node.index) for node in self.nodes]
        heapq.heapify(heap)

        while len(heap) > 1:
            count1, left = heapq.heappop(heap)
            count2, right = heapq.heappop(heap)

            internal = HuffmanNode(len(self.nodes), count1 + count2, left=left, right=right)
            self.nodes.append(internal)

            heapq.heappush(heap, (internal.count, internal.index))

        self.root = heap[0][1]

    def _assign_codes(self) -> None:
        """Assign Huffman codes and points to every leaf by walking down from the root."""
        if self.root is None:
            return

        stack = [(self.root, [], [])]

        while stack:
            index, code, points = stack.pop()
            node = self.nodes[index]

            if node.is_leaf():
                self.codes[index] = np.array(code, dtype=np.int8)
                self.points[index] = np.array(points, dtype=np.int64)
                self.max_depth = max(len(code), self.max_depth)
            else:
                points = points + [node.index - self.vocab_size]
                stack.append((node.left, code + [0], points))
                stack.append((node.right, code + [1], points))

        logger.info("Built huffman tree with maximum node depth %d", self.max_depth)

    def get_word_path(self, word_id: int) -> Tuple[np.ndarray, np.ndarray]:
        """Get Huffman code and points for a word."""
        return self.codes[word_id], self.points[word_id]
