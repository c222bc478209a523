import numpy as np
from typing import List, Optional, Tuple

from .activations import sigmoid
from .data_utils import VocabEntry, Vocabulary
from .softmax_approximator import SoftmaxApproximator


class SkipGramModel:
    """
    Skip-gram model for Word2Vec.

    Owns the word vectors (syn0) and the output layer (syn1) and trains them
    one (target, context) pair at a time with plain SGD, predicting each
    target word from the vectors of the words around it.
    """

    def __init__(self, vocabulary: Vocabulary, approximator: SoftmaxApproximator,
                 embedding_dim: int, window_size: int = 2,
                 rng: Optional[np.random.Generator] = None):
        self.vocabulary = vocabulary
        self.approximator = approximator
        self.embedding_dim = embedding_dim
        self.window_size = window_size
        self.rng = rng if rng is not None else np.random.default_rng()

        self.vectors = np.zeros((0, embedding_dim))
        self.syn1 = np.zeros((0, embedding_dim))
        self.vectors_lockf = np.ones(0)

    def prepare_weights(self) -> None:
        """Initialize word vectors uniformly around zero and the output layer with zeros."""
        vocab_size = self.vocabulary.vocab_size
        dim = self.embedding_dim

        self.vectors = (self.rng.random((vocab_size, dim)) - 0.5) / dim
        self.syn1 = np.zeros((self.approximator.num_output_units, dim))
        self.vectors_lockf = np.ones(vocab_size)

    def filter_sentence(self, sentence: List[str]) -> List[VocabEntry]:
        """Filter sentence by vocabulary and subsampling."""
        return [
            self.vocabulary[word] for word in sentence
            if self.vocabulary.subsample_word(word, self.rng)
        ]

    def context_window(self, pos: int, length: int) -> Tuple[int, int]:
        """
        Randomly shrunk window around a position.

        Args:
            pos: Position of the center word
            length: Length of the retained sentence

        Returns:
            (start, end) slice bounds of the context, end exclusive
        """
        reduced_window = int(self.rng.integers(0, self.window_size))
        start = max(0, pos - self.window_size + reduced_window)
        end = min(length, pos + self.window_size + 1 - reduced_window)
        return start, end

    def train_sentence(self, sentence: List[str], learning_rate: float) -> Tuple[int, float]:
        """
        Train on every skip-gram pair of one sentence.

        Returns:
            Number of pairs trained and their summed loss
        """
        word_vocabs = self.filter_sentence(sentence)
        num_pairs = 0
        total_loss = 0.0

        for pos, word in enumerate(word_vocabs):
            start, end = self.context_window(pos, len(word_vocabs))

            for pos2 in range(start, end):
                if pos2 == pos:
                    continue

                total_loss += self.train_pair(word, word_vocabs[pos2].index, learning_rate)
                num_pairs += 1

        return num_pairs, total_loss

    def train_epoch(self, corpus: List[List[str]], learning_rate: float) -> Tuple[int, float]:
        """Train one pass over the corpus."""
        num_pairs = 0
        total_loss = 0.0

        for sentence in corpus:
            pairs, loss = self.train_sentence(sentence, learning_rate)
            num_pairs += pairs
            total_loss += loss

        return num_pairs, total_loss

    def train_pair(self, target: VocabEntry, context_index: int, learning_rate: float) -> float:
        """
        Update the output layer and the context word vector for one pair.

        Args:
            target: Word to predict
            context_index: Index of the word whose vector is updated
            learning_rate: Current learning rate

        Returns:
            Loss of this pair before the update
        """
        word_indices = self.approximator.output_indices(target)
        if len(word_indices) == 0:
            return 0.0

        l1 = self.vectors[context_index].copy()
        l2 = self.syn1[word_indices]  # fancy indexing copies the rows

        activation = sigmoid(l2 @ l1)
        gradient = self.approximator.gradient(activation, target, learning_rate)

        # Learn hidden layer; repeated rows accumulate
        np.add.at(self.syn1, word_indices, np.outer(gradient, l1))

        neu1e = gradient @ l2
        self.vectors[context_index] = l1 + neu1e * self.vectors_lockf[context_index]

        return self.approximator.loss(activation, target)

    def normalized_vectors(self) -> np.ndarray:
        """L2-normalized copy of the word vectors."""
        norms = np.linalg.norm(self.vectors, axis=1, keepdims=True)
        norms[norms == 0] = 1  # Avoid division by zero
        return self.vectors / norms
