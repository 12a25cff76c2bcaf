import logging
import numbers
from collections.abc import Mapping

from ..nn.tensor import Tensor
from ..nn.layer import Layer
from ..utils.backend import xp

logger = logging.getLogger(__name__)


class DenseLayer(Layer):
    """
    Fully-connected layer: output = input @ weights + biases.

    weights has shape (input_size, output_size), biases (1, output_size).
    Gradients computed by backward() are kept until the next backward() so
    that update_parameters() can hand them to the optimizer.
    """
    layer_type = "DenseLayer"

    def __init__(self, input_size, output_size):
        super().__init__()
        for name, value in (("input_size", input_size), ("output_size", output_size)):
            if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value <= 0:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")

        # Xavier-style init: N(0, 1) / sqrt(fan_in)
        scale = 1.0 / xp.sqrt(input_size)
        self._weights = Tensor(xp.random.randn(input_size, output_size) * scale)
        self._biases = Tensor(xp.random.randn(1, output_size) * scale)

        self._weight_gradients = None
        self._bias_gradients = None

    @classmethod
    def from_tensors(cls, weights: Tensor, biases: Tensor):
        """Builds a layer around explicit parameters, e.g. when loading a saved network."""
        cls._require_tensor(weights, "Weights")
        cls._require_tensor(biases, "Biases")
        if biases.shape != (1, weights.cols):
            raise ValueError(f"Biases must have shape (1, {weights.cols}), got {biases.shape}")

        layer = cls.__new__(cls)
        Layer.__init__(layer)
        layer._weights = weights.copy()
        layer._biases = biases.copy()
        layer._weight_gradients = None
        layer._bias_gradients = None
        return layer

    @property
    def input_size(self):
        return self._weights.rows

    @property
    def output_size(self):
        return self._weights.cols

    @property
    def description(self):
        return f"{self.layer_type} ({self.input_size} -> {self.output_size})"

    @property
    def weights(self):
        return self._weights.copy()

    @weights.setter
    def weights(self, value):
        self._require_tensor(value, "Weights")
        if value.shape != self._weights.shape:
            raise ValueError(f"Weights must have shape {self._weights.shape}, got {value.shape}")
        self._weights = value.copy()

    @property
    def biases(self):
        return self._biases.copy()

    @biases.setter
    def biases(self, value):
        self._require_tensor(value, "Biases")
        if value.shape != self._biases.shape:
            raise ValueError(f"Biases must have shape {self._biases.shape}, got {value.shape}")
        self._biases = value.copy()

    @property
    def weight_gradients(self):
        return None if self._weight_gradients is None else self._weight_gradients.copy()

    @property
    def bias_gradients(self):
        return None if self._bias_gradients is None else self._bias_gradients.copy()

    def forward(self, x):
        self._require_tensor(x, "Input")
        if x.cols != self.input_size:
            logger.debug("Rejected input of shape %s for %s", x.shape, self.description)
            raise ValueError(f"Input has {x.cols} columns, expected {self.input_size}")

        self._cache_input(x)
        out = x.data @ self._weights.data + self._biases.data
        return Tensor(out)

    def backward(self, gradient):
        self._require_tensor(gradient, "Gradient")
        cached = self._cached_input()
        expected = (cached.rows, self.output_size)
        if gradient.shape != expected:
            raise ValueError(f"Gradient must have shape {expected}, got {gradient.shape}")

        x = cached.data
        grad = gradient.data

        # dL/db: sum over the batch, shape (1, output_size)
        self._bias_gradients = Tensor(xp.sum(grad, axis=0, keepdims=True))
        # dL/dW = X^T @ dL/dO, shape (input_size, output_size)
        self._weight_gradients = Tensor(x.T @ grad)
        # dL/dX = dL/dO @ W^T, shape (batch, input_size)
        grad_input = Tensor(grad @ self._weights.data.T)

        self._clear_cache()
        return grad_input

    def update_parameters(self, optimizer):
        if optimizer is None:
            raise ValueError("Optimizer cannot be None")
        optimizer.update_parameters(self)

    # Capability surface used by optimizers -----------------------------------
    def parameters(self):
        return {"weights": self.weights, "biases": self.biases}

    def gradients(self):
        return {"weights": self.weight_gradients, "biases": self.bias_gradients}

    def set_parameter(self, name, value):
        if name == "weights":
            self.weights = value
        elif name == "biases":
            self.biases = value
        else:
            super().set_parameter(name, value)

    # Persistence -------------------------------------------------------------
    def to_dict(self):
        return {
            "type": self.layer_type,
            "weights": self._weights.to_dict(),
            "biases": self._biases.to_dict(),
        }

    @classmethod
    def from_dict(cls, record):
        if not isinstance(record, Mapping) or "weights" not in record or "biases" not in record:
            raise ValueError("DenseLayer record must contain 'weights' and 'biases'")
        return cls.from_tensors(Tensor.from_dict(record["weights"]), Tensor.from_dict(record["biases"]))
