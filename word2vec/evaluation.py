import os
import logging
import numpy as np
import pandas as pd
from typing import List, Tuple, Dict, Optional, Any
from sklearn.cluster import KMeans
from scipy.stats import spearmanr

from .exceptions import InvalidArgumentError, NotFittedError
from .word_vectors import WordVectors


logger = logging.getLogger(__name__)


class Word2VecEvaluator:
    """
    Evaluation suite for trained Word2Vec embeddings.
    """

    def __init__(self, word_vectors: WordVectors):
        self.word_vectors = word_vectors
        self.vocab_size = word_vectors.vocab_size

    @classmethod
    def from_model(cls, model) -> 'Word2VecEvaluator':
        """Create an evaluator from a fitted Word2Vec embedder."""
        if not model.fitted():
            raise NotFittedError("Word2Vec must be trained before it can be evaluated.")
        return cls(model.word_vectors)

    def cosine_similarity(self, word1: str, word2: str) -> Optional[float]:
        """Compute cosine similarity between two words, None if either is unknown."""
        if word1 not in self.word_vectors or word2 not in self.word_vectors:
            return None
        return self.word_vectors.similarity(word1, word2)

    def find_similar_words(self, word: str, top_k: int = 10) -> List[Tuple[str, float]]:
        """Find most similar words to a given word."""
        if word not in self.word_vectors:
            return []
        return list(self.word_vectors.most_similar([word], top_k=top_k).items())

    def analogy_task(self, word_a: str, word_b: str, word_c: str,
                     top_k: int = 1) -> List[Tuple[str, float]]:
        """
        Solve analogy task: word_a is to word_b as word_c is to ?

        Args:
            word_a: First word in analogy
            word_b: Second word in analogy
            word_c: Third word in analogy
            top_k: Number of candidate answers to return

        Returns:
            List of (word, similarity) tuples, empty if any word is unknown
        """
        if any(w not in self.word_vectors for w in (word_a, word_b, word_c)):
            return []

        result = self.word_vectors.most_similar(
            positive=[word_b, word_c], negative=[word_a], top_k=top_k
        )
        return list(result.items())

    def evaluate_word_similarity(self, similarity_file: str) -> Dict[str, Any]:
        """
        Evaluate on word similarity datasets.

        Args:
            similarity_file: Path to a file of ``word1 word2 score`` rows,
                tab or comma separated

        Returns:
            Dictionary of evaluation metrics
        """
        if not os.path.exists(similarity_file):
            return {'error': f'Similarity file {similarity_file} not found'}

        data = pd.read_csv(similarity_file, sep=r'[\t,]', engine='python', header=None,
                           names=['word1', 'word2', 'similarity'])

        predicted_similarities = []
        actual_similarities = []

        for row in data.itertuples(index=False):
            predicted_sim = self.cosine_similarity(str(row.word1), str(row.word2))

            if predicted_sim is not None:
                predicted_similarities.append(predicted_sim)
                actual_similarities.append(float(row.similarity))

        if len(predicted_similarities) < 2:
            return {'error': 'Not enough word pairs found in the vocabulary'}

        correlation, p_value = spearmanr(actual_similarities, predicted_similarities)

        return {
            'spearman_correlation': float(correlation),
            'p_value': float(p_value),
            'num_pairs': len(predicted_similarities),
            'coverage': len(predicted_similarities) / len(data)
        }

    def evaluate_analogies(self, analogy_file: str) -> Dict[str, Any]:
        """
        Evaluate on analogy datasets.

        Args:
            analogy_file: Path to a file of ``a b c d`` lines, ``#`` starts a comment

        Returns:
            Dictionary of evaluation metrics
        """
        if not os.path.exists(analogy_file):
            return {'error': f'Analogy file {analogy_file} not found'}

        analogies = []
        with open(analogy_file, 'r', encoding='utf-8') as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith('#'):  # Skip comments
                    parts = line.lower().split()
                    if len(parts) >= 4:
                        analogies.append(parts[:4])

        if not analogies:
            return {'error': 'No analogies found'}

        correct = 0
        total = 0

        for word_a, word_b, word_c, expected_d in analogies:
            predictions = self.analogy_task(word_a, word_b, word_c, top_k=1)

            if predictions:
                if predictions[0][0] == expected_d:
                    correct += 1
                total += 1

        if total == 0:
            return {'error': 'No valid analogies found'}

        return {
            'accuracy': correct / total,
            'correct': correct,
            'total': total,
            'coverage': total / len(analogies)
        }

    def cluster_analysis(self, words: List[str], n_clusters: int = 5,
                         random_state: int = 42) -> Dict[str, Any]:
        """
        Perform clustering analysis on a set of words.

        Args:
            words: List of words to cluster
            n_clusters: Number of clusters
            random_state: Seed for KMeans

        Returns:
            Dictionary with clustering results
        """
        valid_words = [word for word in words if word in self.word_vectors]

        if len(valid_words) < n_clusters:
            raise InvalidArgumentError(
                f'Not enough valid words for clustering (need at least {n_clusters}, '
                f'{len(valid_words)} found)'
            )

        word_embeddings = np.array([self.word_vectors.word_vector(w) for w in valid_words])

        kmeans = KMeans(n_clusters=n_clusters, random_state=random_state, n_init=10)
        cluster_labels = kmeans.fit_predict(word_embeddings)

        clusters: Dict[int, List[str]] = {}
        for word, cluster_id in zip(valid_words, cluster_labels):
            clusters.setdefault(int(cluster_id), []).append(word)

        return {
            'clusters': clusters,
            'cluster_labels': cluster_labels.tolist(),
            'valid_words': valid_words,
            'n_clusters': n_clusters,
            'inertia': float(kmeans.inertia_)
        }


def create_sample_similarity_dataset(filename: str = 'sample_similarity.txt') -> None:
    """Create a sample word similarity dataset for testing."""
    sample_pairs = [
        ('king', 'queen', 8.5),
        ('man', 'woman', 7.3),
        ('computer', 'machine', 6.8),
        ('car', 'automobile', 9.2),
        ('happy', 'sad', 2.1),
        ('good', 'bad', 1.8),
        ('big', 'large', 8.7),
        ('small', 'tiny', 7.9),
        ('fast', 'quick', 8.3),
        ('slow', 'sluggish', 7.2)
    ]

    with open(filename, 'w', encoding='utf-8') as f:
        for word1, word2, similarity in sample_pairs:
            f.write(f"{word1}\t{word2}\t{similarity}\n")

    logger.info("Sample similarity dataset created: %s", filename)


def create_sample_analogy_dataset(filename: str = 'sample_analogies.txt') -> None:
    """Create a sample analogy dataset for testing."""
    sample_analogies = [
        ('king', 'queen', 'man', 'woman'),
        ('good', 'better', 'bad', 'worse'),
        ('big', 'bigger', 'small', 'smaller'),
        ('fast', 'faster', 'slow', 'slower'),
        ('strong', 'stronger', 'weak', 'weaker'),
        ('hot', 'hotter', 'cold', 'colder')
    ]

    with open(filename, 'w', encoding='utf-8') as f:
        f.write("# Sample analogy dataset\n")
        f.write("# Format: word1 word2 word3 word4\n")
        f.write("# Represents: word1 is to word2 as word3 is to word4\n\n")

        for word1, word2, word3, word4 in sample_analogies:
            f.write(f"{word1} {word2} {word3} {word4}\n")

    logger.info("Sample analogy dataset created: %s", filename)
