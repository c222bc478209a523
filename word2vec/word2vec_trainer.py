import time
import logging
import numpy as np
from typing import Any, Dict, Iterable, List, Optional, Union

from .config import Word2VecConfig
from .data_utils import VocabEntry, Vocabulary, preprocess_text
from .datasets import DataType, Dataset, check_compatibility, check_not_empty
from .exceptions import InvalidArgumentError, NotFittedError
from .skipgram_model import SkipGramModel
from .softmax_approximator import SoftmaxApproximator, create_approximator
from .word_vectors import WordVectors


class Word2Vec:
    """
    Skip-gram Word2Vec embedder.

    A shallow, two-layer neural network producing word embeddings, trained
    with either negative sampling or hierarchical softmax.

    References:
        Mikolov et al., Efficient Estimation of Word Representations in Vector Space
        Mikolov et al., Distributed Representations of Words and Phrases and their
        Compositionality
    """

    def __init__(self, training_method: str = 'negative_sampling', window_size: int = 2,
                 embedding_dim: int = 5, sample: float = 1e-3, learning_rate: float = 0.01,
                 min_learning_rate: float = 0.0001, num_epochs: int = 10, min_count: int = 2,
                 num_negative_samples: int = 1,
                 seed: Optional[int] = None, log_interval: int = 100,
                 logger: Optional[logging.Logger] = None):
        self.config = Word2VecConfig(
            training_method=training_method,
            window_size=window_size,
            embedding_dim=embedding_dim,
            sample=sample,
            learning_rate=learning_rate,
            min_learning_rate=min_learning_rate,
            num_epochs=num_epochs,
            min_count=min_count,
            num_negative_samples=num_negative_samples,
            seed=seed,
            log_interval=log_interval,
        )
        self.logger = logger if logger is not None else self._setup_logger()
        self.rng = np.random.default_rng(seed)

        # Initialize components
        self.corpus: List[List[str]] = []
        self.vocabulary: Optional[Vocabulary] = None
        self.approximator: Optional[SoftmaxApproximator] = None
        self.model: Optional[SkipGramModel] = None
        self.word_vectors: Optional[WordVectors] = None

        self.training_stats = self._empty_stats()

    @classmethod
    def from_config(cls, config: Word2VecConfig,
                    logger: Optional[logging.Logger] = None) -> 'Word2Vec':
        """Create an embedder from a configuration object."""
        return cls(logger=logger, **config.to_dict())

    def _setup_logger(self) -> logging.Logger:
        """Setup logging for training."""
        logger = logging.getLogger('word2vec.Word2Vec')
        logger.setLevel(logging.INFO)

        if not logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
            handler.setFormatter(formatter)
            logger.addHandler(handler)

        return logger

    def set_logger(self, logger: logging.Logger) -> None:
        self.logger = logger

    @staticmethod
    def _empty_stats() -> Dict[str, Any]:
        return {
            'total_pairs_processed': 0,
            'total_training_time': 0.0,
            'losses': [],
            'learning_rates': [],
        }

    @staticmethod
    def compatibility() -> List[DataType]:
        """Data types this embedder is compatible with."""
        return [DataType.CATEGORICAL]

    def params(self) -> Dict[str, Any]:
        """Hyper-parameter settings."""
        return {
            'training_method': self.config.training_method,
            'window_size': self.config.window_size,
            'embedding_dim': self.config.embedding_dim,
            'sample': self.config.sample,
            'learning_rate': self.config.learning_rate,
            'min_learning_rate': self.config.min_learning_rate,
            'num_epochs': self.config.num_epochs,
            'min_count': self.config.min_count,
            'num_negative_samples': self.config.num_negative_samples,
        }

    def fitted(self) -> bool:
        """Has the embedder been trained?"""
        return self.word_vectors is not None

    def fit(self, dataset: Union[Dataset, Iterable[Any]]) -> 'Word2Vec':
        """
        Train word vectors on a single column of raw sentences.

        Args:
            dataset: Dataset (or anything Dataset.build accepts) with one text column

        Returns:
            The fitted embedder
        """
        dataset = Dataset.build(dataset)

        check_not_empty(dataset)

        if dataset.num_columns != 1:
            raise InvalidArgumentError(
                f"Word2Vec trains on a single column of sentences, {dataset.num_columns} given."
            )

        check_compatibility(dataset, self)

        self.word_vectors = None
        self.training_stats = self._empty_stats()

        # Every fit starts from the configured seed
        self.rng = np.random.default_rng(self.config.seed)

        self.prepare_data(dataset.column(0))
        self.build_model()
        self.train()

        return self

    def prepare_data(self, sentences: List[str]) -> None:
        """Clean the sentences and build the vocabulary."""
        self.logger.info("Preparing data...")

        self.corpus = [preprocess_text(sentence) for sentence in sentences]

        vocabulary = Vocabulary(min_count=self.config.min_count, sample=self.config.sample)
        vocabulary.build_vocabulary(self.corpus)

        if vocabulary.vocab_size == 0:
            raise InvalidArgumentError(
                f"No word appears at least {self.config.min_count} times in the corpus."
            )

        self.vocabulary = vocabulary
        self.logger.info(f"Vocabulary size: {vocabulary.vocab_size}")

    def build_model(self) -> None:
        """Structure the softmax approximator and initialize the weights."""
        if self.vocabulary is None:
            raise NotFittedError("Vocabulary not initialized. Call prepare_data() first.")

        self.logger.info(f"Building skip-gram model with {self.config.training_method}")

        self.approximator = create_approximator(
            self.config.training_method,
            num_negative_samples=self.config.num_negative_samples,
            rng=self.rng,
        )
        self.approximator.structure_sampling(self.vocabulary)

        self.model = SkipGramModel(
            self.vocabulary,
            self.approximator,
            embedding_dim=self.config.embedding_dim,
            window_size=self.config.window_size,
            rng=self.rng,
        )
        self.model.prepare_weights()

        num_params = self.model.vectors.size + self.model.syn1.size
        self.logger.info(f"Model built with {num_params} parameters")

    def train(self) -> None:
        """Main training loop."""
        if self.model is None:
            raise NotFittedError("Model not built. Call build_model() first.")

        self.logger.info("Starting Word2Vec training...")

        start_alpha = self.config.learning_rate
        min_alpha = self.config.min_learning_rate
        num_epochs = self.config.num_epochs

        start_time = time.time()

        for epoch in range(num_epochs):
            alpha = start_alpha - (start_alpha - min_alpha) * epoch / num_epochs

            num_pairs, epoch_loss = self.model.train_epoch(self.corpus, alpha)
            avg_loss = epoch_loss / num_pairs if num_pairs else 0.0

            self.training_stats['total_pairs_processed'] += num_pairs
            self.training_stats['losses'].append(avg_loss)
            self.training_stats['learning_rates'].append(alpha)

            if (epoch + 1) % self.config.log_interval == 0 or epoch + 1 == num_epochs:
                self.logger.info(
                    f"Epoch {epoch + 1}/{num_epochs}, Pairs: {num_pairs}, "
                    f"Avg Loss: {avg_loss:.4f}, LR: {alpha:.6f}"
                )

        self.training_stats['total_training_time'] = time.time() - start_time
        self.logger.info(
            f"Training completed in {self.training_stats['total_training_time']:.2f} seconds"
        )

        self.word_vectors = WordVectors(
            self.vocabulary, self.model.vectors, self.model.normalized_vectors()
        )

    def transform(self, samples: List[list]) -> None:
        """
        Replace every sentence in the samples with its embedding, in place.

        Args:
            samples: Rows of sentences
        """
        self._check_fitted()

        for row in samples:
            for column, sentence in enumerate(row):
                if not isinstance(sentence, str):
                    raise InvalidArgumentError(
                        f"Word2Vec can only embed text, {type(sentence).__name__} given."
                    )
                row[column] = self.word_vectors.embed_sentence(sentence)

    def embed(self, dataset: Union[Dataset, Iterable[Any]]) -> np.ndarray:
        """
        Embed a dataset of sentences.

        Returns:
            Array of shape (rows, columns, embedding_dim)
        """
        self._check_fitted()

        dataset = Dataset.build(dataset)

        check_not_empty(dataset)
        check_compatibility(dataset, self)

        samples = dataset.samples
        self.transform(samples)

        return np.array(samples, dtype=np.float64)

    def word_vector(self, word: str, use_norm: bool = True) -> Optional[np.ndarray]:
        self._check_fitted()
        return self.word_vectors.word_vector(word, use_norm)

    def embed_word(self, word: str, use_norm: bool = True) -> np.ndarray:
        self._check_fitted()
        return self.word_vectors.embed_word(word, use_norm)

    def embed_sentence(self, sentence: str) -> np.ndarray:
        self._check_fitted()
        return self.word_vectors.embed_sentence(sentence)

    def most_similar(self, positive: Iterable[str], negative: Iterable[str] = (),
                     top_k: int = 20) -> Dict[str, float]:
        self._check_fitted()
        return self.word_vectors.most_similar(positive, negative, top_k)

    def similarity(self, word1: str, word2: str) -> float:
        self._check_fitted()
        return self.word_vectors.similarity(word1, word2)

    def vocab(self) -> Dict[str, VocabEntry]:
        self._check_vocabulary()
        return self.vocabulary.vocab

    def vocab_count(self) -> int:
        self._check_vocabulary()
        return self.vocabulary.vocab_size

    def index2word(self) -> List[str]:
        self._check_vocabulary()
        return self.vocabulary.index2word

    def lock_words(self, words: Iterable[str], factor: float = 0.0) -> None:
        """
        Scale future updates of the given word vectors, 0 freezes them.

        Only affects training runs that use the current model, e.g. a call to
        train() after build_model().
        """
        if self.model is None:
            raise NotFittedError("Model not built. Call build_model() first.")

        for word in words:
            word_id = self.vocabulary.get_word_id(word)
            if word_id is None:
                raise InvalidArgumentError(f"Word {word!r} is not in the vocabulary.")
            self.model.vectors_lockf[word_id] = factor

    def _check_fitted(self) -> None:
        if not self.fitted():
            raise NotFittedError("Word2Vec must be trained before it can be used.")

    def _check_vocabulary(self) -> None:
        if self.vocabulary is None:
            raise NotFittedError("Vocabulary not initialized. Call fit() first.")
