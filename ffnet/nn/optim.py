import logging
import numbers
from abc import ABC, abstractmethod
from collections.abc import Mapping

from .tensor import Tensor

logger = logging.getLogger(__name__)


class Optimizer(ABC):
    """
    Strategy that turns the gradients cached on a layer into parameter updates.
    Optimizers only see a layer through parameters() / gradients() /
    set_parameter(), so layers without parameters are skipped naturally.
    """
    # Serialization tag written as the "type" entry of the optimizer record
    optimizer_type = None

    @abstractmethod
    def update_parameters(self, layer):
        pass

    @abstractmethod
    def to_dict(self) -> dict:
        pass


class SGD(Optimizer):
    optimizer_type = "SgdOptimizer"

    def __init__(self, learning_rate=1e-3):
        self.learning_rate = learning_rate

    @property
    def learning_rate(self):
        return self._learning_rate

    @learning_rate.setter
    def learning_rate(self, value):
        if isinstance(value, bool) or not isinstance(value, numbers.Real) or not value > 0:
            raise ValueError(f"Learning rate must be positive, got {value!r}")
        self._learning_rate = float(value)

    def update_parameters(self, layer):
        """Plain gradient descent: param = param - lr * grad, per parameter."""
        if layer is None:
            raise ValueError("Layer cannot be None")

        grads = layer.gradients()
        for name, param in layer.parameters().items():
            grad = grads.get(name)
            if grad is None:
                logger.debug("Skipping %s of %s: no gradient cached", name, layer.layer_type)
                continue

            updated = param.data - self._learning_rate * grad.data
            layer.set_parameter(name, Tensor(updated))

    def to_dict(self):
        return {"type": self.optimizer_type, "learningRate": self._learning_rate}

    @classmethod
    def from_dict(cls, record):
        if not isinstance(record, Mapping) or "learningRate" not in record:
            raise ValueError("SgdOptimizer record must contain 'learningRate'")
        return cls(record["learningRate"])

    def __repr__(self):
        return f"SGD(learning_rate={self._learning_rate})"


OPTIMIZER_TYPES = {
    SGD.optimizer_type: SGD,
}


def optimizer_from_dict(record):
    if not isinstance(record, Mapping) or "type" not in record:
        raise ValueError("Optimizer record must be a mapping with a 'type' entry")
    optimizer_cls = OPTIMIZER_TYPES.get(record["type"])
    if optimizer_cls is None:
        raise ValueError(f"Unknown optimizer type {record['type']!r}")
    return optimizer_cls.from_dict(record)
