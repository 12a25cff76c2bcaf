import logging
from collections.abc import Mapping

from ..nn.tensor import Tensor
from ..nn.layer import Layer
from ..utils.backend import xp

logger = logging.getLogger(__name__)


def _sigmoid(x):
    # exp overflows to inf for large negative x, which still yields 0.0
    with xp.errstate(over="ignore"):
        return 1.0 / (1.0 + xp.exp(-x))


class ActivationLayer(Layer):
    """
    Element-wise nonlinearity with no trainable parameters.

    Supported functions:
        relu:    f(x) = max(0, x),          f'(x) = 1 if x > 0 else 0
        sigmoid: f(x) = 1 / (1 + exp(-x)),  f'(x) = f(x) * (1 - f(x))
    """
    layer_type = "ActivationLayer"
    SUPPORTED_FUNCTIONS = ("relu", "sigmoid")

    def __init__(self, activation_function):
        super().__init__()
        if activation_function is None:
            raise ValueError("Activation function cannot be None")
        if not isinstance(activation_function, str):
            raise ValueError(f"Activation function must be a string, got {type(activation_function).__name__}")
        name = activation_function.lower()
        if name not in self.SUPPORTED_FUNCTIONS:
            logger.debug("Rejected activation function %r", activation_function)
            raise ValueError(
                f"Unsupported activation function {activation_function!r}, "
                f"expected one of {', '.join(self.SUPPORTED_FUNCTIONS)}"
            )
        self._activation_function = name

    @property
    def activation_function(self):
        return self._activation_function

    @property
    def description(self):
        return f"{self.layer_type} ({self._activation_function})"

    def _apply(self, x):
        if self._activation_function == "relu":
            return xp.maximum(0.0, x)
        return _sigmoid(x)

    def _derivative(self, x):
        if self._activation_function == "relu":
            return (x > 0).astype(x.dtype)
        s = _sigmoid(x)
        return s * (1.0 - s)

    def forward(self, x):
        self._require_tensor(x, "Input")
        self._cache_input(x)
        return Tensor(self._apply(x.data))

    def backward(self, gradient):
        self._require_tensor(gradient, "Gradient")
        cached = self._cached_input()
        if gradient.shape != cached.shape:
            raise ValueError(
                f"Gradient shape {gradient.shape} does not match the cached input shape {cached.shape}"
            )
        out = Tensor(self._derivative(cached.data))
        out.multiply(gradient)
        self._clear_cache()
        return out

    def update_parameters(self, optimizer):
        # Nothing to train; only the argument is checked
        if optimizer is None:
            raise ValueError("Optimizer cannot be None")

    # Persistence -------------------------------------------------------------
    def to_dict(self):
        return {"type": self.layer_type, "activationFunction": self._activation_function}

    @classmethod
    def from_dict(cls, record):
        if not isinstance(record, Mapping) or "activationFunction" not in record:
            raise ValueError("ActivationLayer record must contain 'activationFunction'")
        return cls(record["activationFunction"])
