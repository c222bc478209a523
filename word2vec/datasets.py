"""Dataset container and dataset checks used by the embedder.

A dataset is a table of samples (rows) and features (columns) backed by a
pandas DataFrame. Word2Vec trains on a single column of raw sentences.
"""

from enum import Enum
from typing import Any, List, Sequence, Union

import pandas as pd

from .exceptions import InvalidArgumentError


class DataType(Enum):
    """High level type of a feature column."""

    CATEGORICAL = 'categorical'
    CONTINUOUS = 'continuous'
    OTHER = 'other'

    @classmethod
    def from_column(cls, column: pd.Series) -> 'DataType':
        """Infer the data type of a pandas column."""
        inferred = pd.api.types.infer_dtype(column, skipna=False)

        if inferred == 'string':
            return cls.CATEGORICAL
        if inferred in ('integer', 'floating', 'mixed-integer-float', 'decimal'):
            return cls.CONTINUOUS
        return cls.OTHER


class Dataset:
    """Unlabeled dataset of samples."""

    def __init__(self, samples: Union[pd.DataFrame, Sequence[Any]] = ()):
        if isinstance(samples, pd.DataFrame):
            frame = samples.copy()
        else:
            samples = list(samples)
            # A flat list of strings is a single column of sentences
            if samples and all(isinstance(s, str) for s in samples):
                samples = [[s] for s in samples]
            frame = pd.DataFrame(samples)

        frame.columns = range(frame.shape[1])
        self._frame = frame.reset_index(drop=True)

    @classmethod
    def build(cls, data: Union['Dataset', pd.DataFrame, Sequence[Any]]) -> 'Dataset':
        """Return data as a Dataset, wrapping it if necessary."""
        if isinstance(data, cls):
            return data
        return cls(data)

    @property
    def num_rows(self) -> int:
        return self._frame.shape[0]

    @property
    def num_columns(self) -> int:
        return self._frame.shape[1]

    @property
    def empty(self) -> bool:
        return self.num_rows == 0 or self.num_columns == 0

    @property
    def samples(self) -> List[List[Any]]:
        """A fresh list of rows."""
        return self._frame.values.tolist()

    @property
    def frame(self) -> pd.DataFrame:
        return self._frame

    def column(self, offset: int) -> List[Any]:
        """Return the values of the column at offset."""
        return self._frame.iloc[:, offset].tolist()

    def column_type(self, offset: int) -> DataType:
        return DataType.from_column(self._frame.iloc[:, offset])

    def __len__(self) -> int:
        return self.num_rows


def check_not_empty(dataset: Dataset) -> None:
    """Raise if the dataset has no samples."""
    if dataset.empty:
        raise InvalidArgumentError('Dataset must contain at least 1 sample.')


def check_compatibility(dataset: Dataset, estimator) -> None:
    """Raise if any column of the dataset has a type the estimator cannot handle."""
    compatibility = estimator.compatibility()

    for offset in range(dataset.num_columns):
        column_type = dataset.column_type(offset)

        if column_type not in compatibility:
            raise InvalidArgumentError(
                f"{type(estimator).__name__} is only compatible with "
                f"{[t.value for t in compatibility]} data types, "
                f"column {offset} is {column_type.value}."
            )
