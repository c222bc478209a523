import logging
import numpy as np
from typing import Optional

from .data_utils import VocabEntry, Vocabulary
from .exceptions import InvalidArgumentError
from .softmax_approximator import SoftmaxApproximator


logger = logging.getLogger(__name__)


class NegativeSampling(SoftmaxApproximator):
    """
    Negative sampling for skip-gram training.

    Each pair updates the target's output row with label 1 and
    ``num_negative_samples`` rows drawn from the unigram distribution raised
    to the power of 3/4 with label 0.
    """

    # Integer domain of the cumulative distribution table
    DOMAIN = 2 ** 31 - 1

    def __init__(self, num_negative_samples: int = 1, power: float = 0.75,
                 rng: Optional[np.random.Generator] = None):
        super().__init__()

        if num_negative_samples < 1:
            raise InvalidArgumentError(
                f"Number of negative samples must be greater than 0, {num_negative_samples} given."
            )

        self.num_negative_samples = num_negative_samples
        self.power = power
        self.rng = rng if rng is not None else np.random.default_rng()

        self.cum_table = np.zeros(0, dtype=np.int64)
        self.end_cum_digit = 0
        self.neg_labels = np.array([1.0] + [0.0] * num_negative_samples)

    def _structure(self, vocabulary: Vocabulary) -> None:
        if vocabulary.vocab_size < 2:
            raise InvalidArgumentError(
                "Negative sampling needs at least 2 vocabulary words, "
                f"{vocabulary.vocab_size} given."
            )

        self.cum_table = self._build_cum_table(vocabulary.counts())
        self.end_cum_digit = int(self.cum_table[-1])
        self.num_output_units = vocabulary.vocab_size

        logger.info("Built cumulative table over %d words", vocabulary.vocab_size)

    def _build_cum_table(self, counts: np.ndarray) -> np.ndarray:
        """
        Build the cumulative distribution table.
        Uses the unigram distribution raised to the power of 3/4.
        """
        weights = np.power(counts.astype(np.float64), self.power)
        cumulative = np.cumsum(weights)

        return np.round(cumulative / cumulative[-1] * self.DOMAIN).astype(np.int64)

    def draw(self) -> int:
        """Draw a single word index from the cumulative table."""
        rand_int = self.rng.integers(0, self.end_cum_digit, endpoint=True)
        return int(np.searchsorted(self.cum_table, rand_int, side='left'))

    def output_indices(self, target: VocabEntry) -> np.ndarray:
        """Target index first, then negatives that are never the target."""
        self._check_structured()

        word_indices = [target.index]

        while len(word_indices) < 1 + self.num_negative_samples:
            w = self.draw()
            if w != target.index:
                word_indices.append(w)

        return np.array(word_indices, dtype=np.int64)

    def labels(self, target: VocabEntry) -> np.ndarray:
        return self.neg_labels

    def gradient(self, activation: np.ndarray, target: VocabEntry,
                 learning_rate: float) -> np.ndarray:
        return (self.neg_labels - activation) * learning_rate
