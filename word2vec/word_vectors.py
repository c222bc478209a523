import numpy as np
from typing import Dict, Iterable, Optional

from .data_utils import Vocabulary, preprocess_text
from .exceptions import InvalidArgumentError


class WordVectors:
    """
    Trained word vectors and the queries run against them.

    Holds both the raw vectors and their L2-normalized copy; the normalized
    vectors are used by default.
    """

    def __init__(self, vocabulary: Vocabulary, vectors: np.ndarray,
                 vectors_norm: Optional[np.ndarray] = None):
        self.vocabulary = vocabulary
        self.vectors = np.array(vectors, dtype=np.float64)

        if vectors_norm is None:
            norms = np.linalg.norm(self.vectors, axis=1, keepdims=True)
            norms[norms == 0] = 1  # Avoid division by zero
            vectors_norm = self.vectors / norms

        self.vectors_norm = np.array(vectors_norm, dtype=np.float64)

        # Queries hand out views, so keep them read-only
        self.vectors.setflags(write=False)
        self.vectors_norm.setflags(write=False)

    @property
    def vocab_size(self) -> int:
        return self.vocabulary.vocab_size

    @property
    def embedding_dim(self) -> int:
        return self.vectors.shape[1]

    def word_vector(self, word: str, use_norm: bool = True) -> Optional[np.ndarray]:
        """Get the vector of a word, or None if the word is not in the vocabulary."""
        word_id = self.vocabulary.get_word_id(word)
        if word_id is None:
            return None

        if use_norm:
            return self.vectors_norm[word_id]
        return self.vectors[word_id]

    def embed_word(self, word: str, use_norm: bool = True) -> np.ndarray:
        """Get the vector of a word, or a vector of zeros if it is unknown."""
        vector = self.word_vector(word, use_norm)
        if vector is None:
            return np.zeros(self.embedding_dim)
        return vector

    def embed_sentence(self, sentence: str) -> np.ndarray:
        """Average of the word vectors of a sentence."""
        tokens = preprocess_text(sentence)
        if not tokens:
            return np.zeros(self.embedding_dim)

        return np.mean([self.embed_word(token) for token in tokens], axis=0)

    def most_similar(self, positive: Iterable[str], negative: Iterable[str] = (),
                     top_k: int = 20) -> Dict[str, float]:
        """
        Find the top-k words closest to the mean of positive and negative words.

        Args:
            positive: Words contributing positively
            negative: Words contributing negatively
            top_k: Number of similar words to return

        Returns:
            Mapping of word to similarity, most similar first
        """
        weights = {word: 1.0 for word in positive}
        weights.update({word: -1.0 for word in negative})

        means = []
        all_words = set()

        for word, weight in weights.items():
            vector = self.word_vector(word)
            if vector is not None:
                means.append(vector * weight)
                all_words.add(self.vocabulary.get_word_id(word))

        if not all_words:
            raise InvalidArgumentError('None of the given words were found in the vocabulary.')

        mean = np.mean(means, axis=0)
        dists = self.vectors_norm @ mean

        result = {}
        for index in np.argsort(-dists, kind='stable'):
            if len(result) >= top_k:
                break
            if index in all_words:
                continue
            result[self.vocabulary.index2word[index]] = float(dists[index])

        return result

    def similarity(self, word1: str, word2: str) -> float:
        """Cosine similarity between two words."""
        vec1 = self.word_vector(word1)
        vec2 = self.word_vector(word2)

        if vec1 is None or vec2 is None:
            missing = word1 if vec1 is None else word2
            raise InvalidArgumentError(f"Word {missing!r} is not in the vocabulary.")

        return float(np.dot(vec1, vec2))

    def __contains__(self, word: str) -> bool:
        return word in self.vocabulary

    def __len__(self) -> int:
        return self.vocab_size
