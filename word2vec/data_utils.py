import re
import math
import string
import logging
import numpy as np
from collections import Counter
from dataclasses import dataclass, field
from typing import List, Dict, Iterator, Optional


logger = logging.getLogger(__name__)

# Fixed-point scale for subsampling probabilities
RAND_MULTIPLIER = 2 ** 32

_PUNCTUATION = re.compile('[' + re.escape(string.punctuation) + ']')
_WHITESPACE = re.compile(r'\s+')


def preprocess_text(text: str) -> List[str]:
    """Preprocess text: lowercase, remove punctuation, collapse whitespace, tokenize."""
    text = _PUNCTUATION.sub('', text.lower())
    text = _WHITESPACE.sub(' ', text).strip()

    # Empty sentences give no tokens rather than a single empty token
    return [token for token in text.split(' ') if token]


@dataclass
class VocabEntry:
    """A retained vocabulary word.

    ``sample_int`` is the probability of keeping the word during subsampling,
    stored as fixed point (``round(p * 2**32)``) so it can be compared against
    a uniform draw scaled by the same factor. ``code`` and ``points`` are only
    filled in by hierarchical softmax.
    """

    word: str
    count: int
    index: int
    sample_int: int = RAND_MULTIPLIER
    code: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=np.int8), repr=False)
    points: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=np.int64), repr=False)

    @property
    def sample_probability(self) -> float:
        return self.sample_int / RAND_MULTIPLIER


class Vocabulary:
    """Vocabulary class for Word2Vec implementation."""

    def __init__(self, min_count: int = 5, sample: float = 1e-3):
        self.min_count = min_count
        self.sample = sample  # Subsampling threshold

        self.vocab: Dict[str, VocabEntry] = {}
        self.index2word: List[str] = []
        self.word_freq = Counter()
        self.word_count = 0
        self.retain_total = 0
        self.threshold_count = 0.0

        # Pruning statistics
        self.drop_unique = 0
        self.drop_total = 0

    @property
    def vocab_size(self) -> int:
        return len(self.index2word)

    def build_vocabulary(self, sentences: List[List[str]]) -> None:
        """Build vocabulary from tokenized sentences."""
        logger.info("Building vocabulary...")

        self._scan_vocab(sentences)
        retain_words = self._prune_vocab()

        self.threshold_count = self._threshold_count(self.retain_total)
        self._calculate_subsampling_probs(retain_words)
        self._sort_vocab()

        logger.info(
            "Vocabulary built: %d words from %d total words (%d unique words dropped)",
            self.vocab_size, self.word_count, self.drop_unique
        )

    def _scan_vocab(self, sentences: List[List[str]]) -> None:
        """Count raw word frequencies."""
        for sentence in sentences:
            self.word_freq.update(sentence)
            self.word_count += len(sentence)

    def _prune_vocab(self) -> List[str]:
        """Drop words below min_count and create the initial entries."""
        retain_words = []

        for word, count in self.word_freq.items():
            if count >= self.min_count:
                retain_words.append(word)
                self.retain_total += count
                self.vocab[word] = VocabEntry(word=word, count=count, index=len(retain_words) - 1)
            else:
                self.drop_unique += 1
                self.drop_total += count

        return retain_words

    def _threshold_count(self, retain_total: int) -> float:
        """Determine threshold word count based on the subsampling rate."""
        if not self.sample:
            return float(retain_total)
        if self.sample < 1:
            return self.sample * retain_total
        return self.sample * (3 + math.sqrt(5)) / 2

    def _calculate_subsampling_probs(self, retain_words: List[str]) -> None:
        """Calculate subsampling probabilities for frequent words."""
        threshold = self.threshold_count

        for word in retain_words:
            count = self.word_freq[word]
            keep_prob = (math.sqrt(count / threshold) + 1) * (threshold / count)
            keep_prob = min(keep_prob, 1.0)
            self.vocab[word].sample_int = int(round(keep_prob * RAND_MULTIPLIER))

    def _sort_vocab(self) -> None:
        """Sort by descending count and assign the final indices."""
        ordered = sorted(self.vocab.values(), key=lambda entry: entry.count, reverse=True)

        self.index2word = [entry.word for entry in ordered]
        for index, entry in enumerate(ordered):
            entry.index = index

    def subsample_word(self, word: str, rng: np.random.Generator) -> bool:
        """Determine if a word should be kept based on subsampling."""
        entry = self.vocab.get(word)
        if entry is None:
            return False
        return entry.sample_int > rng.random() * RAND_MULTIPLIER

    def get_word_id(self, word: str) -> Optional[int]:
        """Get word ID, return None if not in vocabulary."""
        entry = self.vocab.get(word)
        return entry.index if entry is not None else None

    def get_word(self, word_id: int) -> Optional[str]:
        """Get word from ID."""
        if 0 <= word_id < self.vocab_size:
            return self.index2word[word_id]
        return None

    @property
    def entries(self) -> List[VocabEntry]:
        """Entries in index order."""
        return [self.vocab[word] for word in self.index2word]

    def counts(self) -> np.ndarray:
        """Word counts in index order."""
        return np.array([self.vocab[word].count for word in self.index2word], dtype=np.int64)

    def __contains__(self, word: str) -> bool:
        return word in self.vocab

    def __getitem__(self, word: str) -> VocabEntry:
        return self.vocab[word]

    def __len__(self) -> int:
        return self.vocab_size

    def __iter__(self) -> Iterator[VocabEntry]:
        return iter(self.entries)


def read_corpus(file_path: str) -> List[str]:
    """Read a corpus file and return its non-empty lines as raw sentences."""
    sentences = []

    with open(file_path, 'r', encoding='utf-8') as f:
        for line in f:
            line = line.strip()
            if line:
                sentences.append(line)

    return sentences


def create_sample_corpus(filename: str = "sample_corpus.txt") -> None:
    """Create a sample corpus file for demonstration."""
    sample_texts = [
        "The quick brown fox jumps over the lazy dog",
        "Word embeddings are dense vector representations of words",
        "Machine learning algorithms can learn from data automatically",
        "Neural networks consist of interconnected nodes called neurons",
        "Natural language processing deals with human language understanding",
        "Deep learning models can capture complex patterns in data",
        "Word2Vec is an algorithm for learning word embeddings",
        "Skip-gram model predicts context words from target words",
        "Hierarchical softmax is used for efficient training",
        "Negative sampling is an alternative to hierarchical softmax",
        "Vector representations capture semantic relationships between words",
        "Similar words have similar vector representations in embedding space",
        "Word analogies can be solved using vector arithmetic",
        "King minus man plus woman equals queen in word embeddings",
        "Cosine similarity measures the angle between word vectors",
        "Semantic similarity between words can be computed using embeddings"
    ]

    with open(filename, 'w', encoding='utf-8') as f:
        for text in sample_texts:
            f.write(text + '\n')

    logger.info("Sample corpus created: %s", filename)
