import logging
import numbers
from collections.abc import Mapping

from ..utils.backend import xp

logger = logging.getLogger(__name__)


class Tensor:
    """Rectangular 2-D grid of float64 values.

    Every constructor and accessor copies, so two tensors never share a
    buffer. Layers rely on that when they cache an input across the
    forward/backward boundary.
    """

    def __init__(self, data):
        self._data = self._validate(data)

    @staticmethod
    def _validate(data):
        if data is None:
            raise ValueError("Tensor data cannot be None")
        if isinstance(data, Tensor):
            return data._data.copy()

        if not isinstance(data, xp.ndarray):
            try:
                rows = list(data)
            except TypeError:
                raise ValueError(f"Tensor data must be a sequence of rows, got {type(data).__name__}")
            if len(rows) == 0:
                raise ValueError("Tensor data cannot be empty")
            try:
                row_lengths = [len(row) for row in rows]
            except TypeError:
                raise ValueError("Tensor data must be two-dimensional")
            if any(n != row_lengths[0] for n in row_lengths):
                logger.debug("Rejected ragged tensor data with row lengths %s", row_lengths)
                raise ValueError("All rows of a tensor must have the same length")
            data = rows

        try:
            arr = xp.array(data, dtype=xp.float64, copy=True)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Tensor data must be numeric: {e}")

        if arr.ndim != 2:
            raise ValueError(f"Tensor data must be two-dimensional, got {arr.ndim} dimension(s)")
        if arr.shape[0] == 0 or arr.shape[1] == 0:
            raise ValueError("Tensor data cannot be empty")
        return arr

    @staticmethod
    def _check_shape(rows, cols):
        for value in (rows, cols):
            if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value <= 0:
                raise ValueError(f"Tensor shape must be positive integers, got ({rows!r}, {cols!r})")

    @classmethod
    def zeros(cls, rows, cols):
        cls._check_shape(rows, cols)
        return cls(xp.zeros((rows, cols)))

    @classmethod
    def ones(cls, rows, cols):
        cls._check_shape(rows, cols)
        return cls(xp.ones((rows, cols)))

    @property
    def data(self):
        return self._data.copy()

    @property
    def shape(self):
        return self._data.shape

    @property
    def rows(self):
        return self._data.shape[0]

    @property
    def cols(self):
        return self._data.shape[1]

    @property
    def size(self):
        return self._data.size

    @property
    def dtype(self):
        return self._data.dtype

    def __len__(self):
        return self.rows

    def _check_operand(self, other, op):
        if other is None:
            raise ValueError(f"Cannot {op} a None tensor")
        if not isinstance(other, Tensor):
            raise ValueError(f"Cannot {op} a {type(other).__name__}, expected Tensor")
        if other.shape != self.shape:
            logger.debug("Shape mismatch in %s: %s vs %s", op, self.shape, other.shape)
            raise ValueError(f"Tensor shapes must match to {op}: {self.shape} vs {other.shape}")

    def add(self, other):
        """Element-wise in-place addition. Shapes must match exactly."""
        self._check_operand(other, "add")
        self._data += other._data

    def multiply(self, other):
        """Element-wise in-place (Hadamard) product. Shapes must match exactly."""
        self._check_operand(other, "multiply")
        self._data *= other._data

    def copy(self):
        return Tensor(self._data)

    def tolist(self):
        return self._data.tolist()

    def allclose(self, other, atol=1e-8):
        if not isinstance(other, Tensor) or other.shape != self.shape:
            return False
        return bool(xp.allclose(self._data, other._data, atol=atol))

    def __eq__(self, other):
        if not isinstance(other, Tensor):
            return NotImplemented
        return self.shape == other.shape and bool(xp.array_equal(self._data, other._data))

    __hash__ = None

    def __repr__(self):
        return f"Tensor(shape={self.shape}, data={self._data.tolist()})"

    # Persistence -------------------------------------------------------------
    def to_dict(self):
        return {"data": self._data.tolist()}

    @classmethod
    def from_dict(cls, record):
        if not isinstance(record, Mapping) or "data" not in record:
            raise ValueError("Tensor record must be a mapping with a 'data' entry")
        return cls(record["data"])
