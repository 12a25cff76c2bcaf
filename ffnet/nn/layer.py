from abc import ABC, abstractmethod

from .tensor import Tensor


class Layer(ABC):
    """
    Abstract Base Class for all network layers.
    Establishes the contract for Forward, Backward and Parameter handling.

    A layer moves between two states:
        Ready    -- no cached input; backward() is not allowed.
        HasCache -- forward() cached its input; backward() consumes it.
    """

    # Serialization tag written as the "type" entry of the layer record
    layer_type = None

    def __init__(self):
        self._input_cache = None

    @property
    def has_cache(self):
        return self._input_cache is not None

    def _cache_input(self, x: Tensor):
        self._input_cache = x.copy()

    def _cached_input(self) -> Tensor:
        if self._input_cache is None:
            raise RuntimeError(f"{self.layer_type}.backward() called without a preceding forward()")
        return self._input_cache

    def _clear_cache(self):
        self._input_cache = None

    @staticmethod
    def _require_tensor(value, name):
        if value is None:
            raise ValueError(f"{name} cannot be None")
        if not isinstance(value, Tensor):
            raise ValueError(f"{name} must be a Tensor, got {type(value).__name__}")

    @abstractmethod
    def forward(self, x: Tensor) -> Tensor:
        """
        Computes the output of the layer and caches the input for backward().
        """

    @abstractmethod
    def backward(self, gradient: Tensor) -> Tensor:
        """
        Computes the gradient w.r.t the input of this layer.

        Args:
            gradient: Gradient of the loss w.r.t the output of this layer.

        Returns:
            Gradient of the loss w.r.t the input of this layer.
        """

    @abstractmethod
    def update_parameters(self, optimizer):
        """Applies the optimizer to the gradients cached by the last backward()."""

    @abstractmethod
    def to_dict(self) -> dict:
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        pass

    # Capability surface used by optimizers -----------------------------------
    def parameters(self):
        """Trainable tensors keyed by name. Empty for parameter-free layers."""
        return {}

    def gradients(self):
        """Gradient caches keyed like parameters(); values are None before backward()."""
        return {}

    def set_parameter(self, name, value: Tensor):
        raise ValueError(f"{self.layer_type} has no parameter named {name!r}")

    @property
    def trainable(self):
        return len(self.parameters()) > 0

    def __call__(self, x):
        return self.forward(x)

    def __repr__(self):
        return f"<{self.description}>"
