"""Custom exceptions for the Word2Vec embedder."""


class Word2VecError(Exception):
    """Base exception for Word2Vec errors."""
    pass


class InvalidArgumentError(Word2VecError, ValueError):
    """Exception for bad hyper-parameters, datasets or queries."""
    pass


class NotFittedError(Word2VecError, RuntimeError):
    """Exception for operations that need a trained model."""
    pass
