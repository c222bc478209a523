"""
Word2Vec
Skip-gram word embeddings trained with negative sampling or hierarchical softmax
Based on Mikolov et al., 2013
"""

__version__ = "0.1.0"

from .config import Word2VecConfig
from .data_utils import Vocabulary, VocabEntry, preprocess_text
from .datasets import Dataset, DataType
from .exceptions import Word2VecError, InvalidArgumentError, NotFittedError
from .hierarchical_softmax import HierarchicalSoftmax
from .negative_sampling import NegativeSampling
from .softmax_approximator import SoftmaxApproximator, create_approximator
from .word_vectors import WordVectors
from .word2vec_trainer import Word2Vec

__all__ = [
    "Word2Vec",
    "Word2VecConfig",
    "WordVectors",
    "Vocabulary",
    "VocabEntry",
    "preprocess_text",
    "Dataset",
    "DataType",
    "SoftmaxApproximator",
    "NegativeSampling",
    "HierarchicalSoftmax",
    "create_approximator",
    "Word2VecError",
    "InvalidArgumentError",
    "NotFittedError",
]
