import numpy as np
import pytest

from word2vec import Word2Vec
from word2vec.data_utils import Vocabulary
from word2vec.evaluation import (
    Word2VecEvaluator, create_sample_analogy_dataset, create_sample_similarity_dataset,
)
from word2vec.exceptions import InvalidArgumentError, NotFittedError
from word2vec.word_vectors import WordVectors

# Unit tests: evaluation suite on hand-built vectors.

WORDS = ["king", "queen", "man", "woman", "fast", "quick", "slow"]

VECTORS = np.array([
    [1.0, 1.0, 0.0, 0.0, 0.0],
    [1.0, 0.0, 1.0, 0.0, 0.0],
    [0.0, 1.0, 0.0, 0.0, 0.0],
    [0.0, 0.0, 1.0, 0.0, 0.0],
    [0.0, 0.0, 0.0, 1.0, 0.0],
    [0.0, 0.0, 0.0, 1.0, 0.2],
    [0.0, 0.0, 0.0, -1.0, 0.0],
])


@pytest.fixture
def evaluator():
    vocab = Vocabulary(min_count=1, sample=0)
    vocab.build_vocabulary([WORDS])
    assert vocab.index2word == WORDS
    return Word2VecEvaluator(WordVectors(vocab, VECTORS))


def test_cosine_similarity(evaluator):
    assert evaluator.cosine_similarity("king", "queen") == pytest.approx(0.5)
    assert evaluator.cosine_similarity("fast", "slow") == pytest.approx(-1.0)
    assert evaluator.cosine_similarity("fast", "unicorn") is None


def test_find_similar_words(evaluator):
    similar = evaluator.find_similar_words("fast", top_k=2)
    assert [w for w, _ in similar] == ["quick", "king"]
    assert evaluator.find_similar_words("unicorn") == []


def test_analogy_task(evaluator):
    # man is to woman as king is to queen
    assert evaluator.analogy_task("man", "woman", "king")[0][0] == "queen"
    assert evaluator.analogy_task("man", "woman", "dragon") == []


def test_evaluate_word_similarity(evaluator, tmp_path):
    path = tmp_path / "similarity.txt"
    path.write_text(
        "king\tqueen\t8\n"
        "man\twoman\t7\n"
        "fast,quick,9\n"
        "fast\tslow\t1\n"
        "dragon\tunicorn\t5\n",
        encoding="utf-8",
    )

    results = evaluator.evaluate_word_similarity(str(path))
    assert results["num_pairs"] == 4
    assert results["coverage"] == pytest.approx(0.8)
    assert results["spearman_correlation"] == pytest.approx(1.0)


def test_evaluate_word_similarity_errors(evaluator, tmp_path):
    assert "error" in evaluator.evaluate_word_similarity(str(tmp_path / "missing.txt"))

    path = tmp_path / "similarity.txt"
    path.write_text("king\tqueen\t8\ndragon\tunicorn\t5\n", encoding="utf-8")
    assert "error" in evaluator.evaluate_word_similarity(str(path))


def test_evaluate_analogies(evaluator, tmp_path):
    path = tmp_path / "analogies.txt"
    path.write_text(
        "# comment line\n"
        "\n"
        "Man Woman King Queen\n"
        "man woman dragon queen\n"
        "too short\n",
        encoding="utf-8",
    )

    results = evaluator.evaluate_analogies(str(path))
    assert results == {"accuracy": 1.0, "correct": 1, "total": 1, "coverage": 0.5}


def test_evaluate_analogies_errors(evaluator, tmp_path):
    assert "error" in evaluator.evaluate_analogies(str(tmp_path / "missing.txt"))

    path = tmp_path / "analogies.txt"
    path.write_text("# only comments\n", encoding="utf-8")
    assert evaluator.evaluate_analogies(str(path)) == {"error": "No analogies found"}

    path.write_text("dragon unicorn griffin phoenix\n", encoding="utf-8")
    assert evaluator.evaluate_analogies(str(path)) == {"error": "No valid analogies found"}


def test_cluster_analysis(evaluator):
    results = evaluator.cluster_analysis(["fast", "quick", "slow", "king", "queen", "dragon"],
                                         n_clusters=2)

    assert results["valid_words"] == ["fast", "quick", "slow", "king", "queen"]
    assert len(results["cluster_labels"]) == 5
    assert sum(len(words) for words in results["clusters"].values()) == 5
    assert results["inertia"] >= 0.0

    with pytest.raises(InvalidArgumentError):
        evaluator.cluster_analysis(["fast", "dragon"], n_clusters=2)


def test_from_model_requires_fitted_model():
    with pytest.raises(NotFittedError):
        Word2VecEvaluator.from_model(Word2Vec())

    model = Word2Vec(min_count=1, num_epochs=2, seed=0).fit(["the quick dog", "the lazy dog"])
    evaluator = Word2VecEvaluator.from_model(model)
    assert evaluator.vocab_size == 4
    assert evaluator.cosine_similarity("dog", "dog") == pytest.approx(1.0)


def test_sample_datasets_are_readable(evaluator, tmp_path):
    similarity = tmp_path / "sample_similarity.txt"
    analogies = tmp_path / "sample_analogies.txt"
    create_sample_similarity_dataset(str(similarity))
    create_sample_analogy_dataset(str(analogies))

    results = evaluator.evaluate_analogies(str(analogies))
    assert results["total"] == 1
    assert results["correct"] == 1

    # only king/queen, man/woman and fast/quick are known
    results = evaluator.evaluate_word_similarity(str(similarity))
    assert results["num_pairs"] == 3


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
