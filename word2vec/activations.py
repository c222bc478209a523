import numpy as np


def sigmoid(x: np.ndarray) -> np.ndarray:
    """Sigmoid activation with numerical stability."""
    x = np.clip(x, -500, 500)  # Prevent overflow
    return 1.0 / (1.0 + np.exp(-x))
