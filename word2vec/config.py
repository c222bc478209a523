"""
Configuration for the skip-gram Word2Vec embedder
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

from .exceptions import InvalidArgumentError


NEGATIVE_SAMPLING = 'negative_sampling'
HIERARCHICAL_SOFTMAX = 'hierarchical_softmax'

TRAINING_METHODS = {
    'negative_sampling': NEGATIVE_SAMPLING,
    'neg': NEGATIVE_SAMPLING,
    'hierarchical_softmax': HIERARCHICAL_SOFTMAX,
    'hs': HIERARCHICAL_SOFTMAX,
}


@dataclass
class Word2VecConfig:
    """Hyper-parameters for Word2Vec training"""
    # Model parameters
    training_method: str = NEGATIVE_SAMPLING
    window_size: int = 2
    embedding_dim: int = 5
    sample: float = 1e-3  # Subsampling threshold
    min_count: int = 2

    # Training parameters
    learning_rate: float = 0.01
    min_learning_rate: float = 0.0001
    num_epochs: int = 10
    num_negative_samples: int = 1

    # Reproducibility
    seed: Optional[int] = None

    # Logging
    log_interval: int = 100  # Log progress every N epochs

    def __post_init__(self):
        """Validate configuration."""
        method = TRAINING_METHODS.get(self.training_method)
        if method is None:
            raise InvalidArgumentError(
                f"Training method must be one of {sorted(TRAINING_METHODS)}, "
                f"{self.training_method!r} given."
            )
        self.training_method = method

        if not 1 <= self.window_size <= 5:
            raise InvalidArgumentError(
                f"Window must be between 1 and 5, {self.window_size} given."
            )

        if self.embedding_dim < 5:
            raise InvalidArgumentError(
                f"Dimensions must be greater than 4, {self.embedding_dim} given."
            )

        if self.sample < 0.0:
            raise InvalidArgumentError(
                f"Sample rate must be 0 or greater, {self.sample} given."
            )

        if self.learning_rate <= 0.0:
            raise InvalidArgumentError(
                f"Learning rate must be greater than 0, {self.learning_rate} given."
            )

        if not 0.0 < self.min_learning_rate <= self.learning_rate:
            raise InvalidArgumentError(
                f"Minimum learning rate must be greater than 0 and at most the learning "
                f"rate {self.learning_rate}, {self.min_learning_rate} given."
            )

        if self.num_epochs < 1:
            raise InvalidArgumentError(
                f"Number of epochs must be greater than 0, {self.num_epochs} given."
            )

        if self.min_count < 1:
            raise InvalidArgumentError(
                f"Minimum word count must be greater than 0, {self.min_count} given."
            )

        if self.num_negative_samples < 1:
            raise InvalidArgumentError(
                f"Number of negative samples must be greater than 0, "
                f"{self.num_negative_samples} given."
            )

        if self.log_interval < 1:
            raise InvalidArgumentError(
                f"Log interval must be greater than 0, {self.log_interval} given."
            )

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'Word2VecConfig':
        """Create config from dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in config_dict.items() if k in known})
