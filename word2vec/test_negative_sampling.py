import numpy as np
import pytest

from word2vec.data_utils import Vocabulary
from word2vec.exceptions import InvalidArgumentError, NotFittedError
from word2vec.negative_sampling import NegativeSampling
from word2vec.softmax_approximator import create_approximator
from word2vec.hierarchical_softmax import HierarchicalSoftmax

# Unit tests: cumulative table, negative draws, gradients, strategy factory.


def _vocabulary(sentences):
    vocab = Vocabulary(min_count=1, sample=0)
    vocab.build_vocabulary(sentences)
    return vocab


@pytest.fixture
def vocab():
    return _vocabulary([["the"] * 10 + ["quick"] * 5 + ["brown", "fox", "fox"]])


def test_cum_table_is_monotonic_and_ends_at_domain(vocab):
    ns = NegativeSampling(rng=np.random.default_rng(0))
    ns.structure_sampling(vocab)

    assert len(ns.cum_table) == vocab.vocab_size
    assert np.all(np.diff(ns.cum_table) >= 0)
    assert ns.end_cum_digit == NegativeSampling.DOMAIN
    assert ns.num_output_units == vocab.vocab_size


def test_draws_follow_smoothed_unigram_distribution(vocab):
    ns = NegativeSampling(rng=np.random.default_rng(1))
    ns.structure_sampling(vocab)

    draws = np.array([ns.draw() for _ in range(5000)])
    assert draws.min() >= 0 and draws.max() < vocab.vocab_size

    freq = np.bincount(draws, minlength=vocab.vocab_size) / len(draws)
    weights = vocab.counts() ** 0.75
    np.testing.assert_allclose(freq, weights / weights.sum(), atol=0.03)


def test_output_indices_start_with_target_and_exclude_it(vocab):
    ns = NegativeSampling(num_negative_samples=3, rng=np.random.default_rng(2))
    ns.structure_sampling(vocab)

    for entry in vocab:
        for _ in range(50):
            indices = ns.output_indices(entry)
            assert len(indices) == 4
            assert indices[0] == entry.index
            assert entry.index not in indices[1:]


def test_gradient_uses_positive_then_negative_labels(vocab):
    ns = NegativeSampling(rng=np.random.default_rng(0))
    ns.structure_sampling(vocab)

    activation = np.array([0.25, 0.75])
    np.testing.assert_allclose(ns.gradient(activation, vocab["the"], 0.1), [0.075, -0.075])
    np.testing.assert_array_equal(ns.labels(vocab["the"]), [1.0, 0.0])


def test_loss_is_small_for_confident_correct_activations(vocab):
    ns = NegativeSampling(rng=np.random.default_rng(0))
    ns.structure_sampling(vocab)

    good = ns.loss(np.array([0.99, 0.01]), vocab["the"])
    bad = ns.loss(np.array([0.01, 0.99]), vocab["the"])
    assert 0 < good < bad


def test_single_word_vocabulary_is_rejected():
    ns = NegativeSampling()
    with pytest.raises(InvalidArgumentError):
        ns.structure_sampling(_vocabulary([["only", "only"]]))


def test_bad_negative_sample_count():
    with pytest.raises(InvalidArgumentError):
        NegativeSampling(num_negative_samples=0)


def test_unstructured_sampler_cannot_draw_indices(vocab):
    ns = NegativeSampling()
    with pytest.raises(NotFittedError):
        ns.output_indices(vocab["the"])


def test_create_approximator():
    assert isinstance(create_approximator("neg", num_negative_samples=2), NegativeSampling)
    assert create_approximator("negative_sampling", 3).num_negative_samples == 3
    assert isinstance(create_approximator("hs"), HierarchicalSoftmax)
    assert isinstance(create_approximator("hierarchical_softmax"), HierarchicalSoftmax)

    with pytest.raises(InvalidArgumentError):
        create_approximator("full")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
