import numpy as np
from abc import ABC, abstractmethod
from typing import Optional

from .config import HIERARCHICAL_SOFTMAX, NEGATIVE_SAMPLING, TRAINING_METHODS
from .data_utils import VocabEntry, Vocabulary
from .exceptions import InvalidArgumentError, NotFittedError


class SoftmaxApproximator(ABC):
    """
    Strategy approximating the full softmax over the vocabulary during training.

    The approximator is structured once against a finalized vocabulary and
    then tells the trainer which output-layer rows take part in a training
    pair and how much each of them should move.
    """

    def __init__(self):
        self.num_output_units = 0
        self._structured = False

    @property
    def structured(self) -> bool:
        return self._structured

    def structure_sampling(self, vocabulary: Vocabulary) -> None:
        """
        Build the sampling structure used in pair training.

        Args:
            vocabulary: Finalized (sorted) vocabulary
        """
        if self._structured:
            raise RuntimeError(f"{type(self).__name__} has already been structured.")

        self._structure(vocabulary)
        self._structured = True

    @abstractmethod
    def _structure(self, vocabulary: Vocabulary) -> None:
        """Build the variant specific structure and set num_output_units."""

    @abstractmethod
    def output_indices(self, target: VocabEntry) -> np.ndarray:
        """Return the output-layer rows to read and update for a target word."""

    @abstractmethod
    def labels(self, target: VocabEntry) -> np.ndarray:
        """Return the expected activation of each output unit for a target word."""

    @abstractmethod
    def gradient(self, activation: np.ndarray, target: VocabEntry,
                 learning_rate: float) -> np.ndarray:
        """
        Compute the scaled error of each output unit.

        Args:
            activation: Sigmoid activations of the output units
            target: Word being predicted
            learning_rate: Current learning rate

        Returns:
            One gradient factor per output unit
        """

    def loss(self, activation: np.ndarray, target: VocabEntry) -> float:
        """Binary cross-entropy of the activations against the labels."""
        labels = self.labels(target)
        eps = 1e-10
        return float(-np.sum(labels * np.log(activation + eps)
                             + (1 - labels) * np.log(1 - activation + eps)))

    def _check_structured(self) -> None:
        if not self._structured:
            raise NotFittedError(
                f"{type(self).__name__} must be structured against a vocabulary first."
            )


def create_approximator(training_method: str, num_negative_samples: int = 1,
                        rng: Optional[np.random.Generator] = None) -> SoftmaxApproximator:
    """
    Factory function to create the softmax approximator for a training method.

    Args:
        training_method: 'negative_sampling' or 'hierarchical_softmax' (or 'neg' / 'hs')
        num_negative_samples: Negative samples drawn per pair
        rng: Random generator used for negative draws

    Returns:
        Unstructured approximator instance
    """
    from .hierarchical_softmax import HierarchicalSoftmax
    from .negative_sampling import NegativeSampling

    method = TRAINING_METHODS.get(training_method)

    if method == NEGATIVE_SAMPLING:
        return NegativeSampling(num_negative_samples=num_negative_samples, rng=rng)
    elif method == HIERARCHICAL_SOFTMAX:
        return HierarchicalSoftmax()
    else:
        raise InvalidArgumentError(f"Unknown training method: {training_method}")
