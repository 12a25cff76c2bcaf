import logging

from .tensor import Tensor
from ..utils.backend import xp

logger = logging.getLogger(__name__)


class Metric:
    """
    Mean Squared Error loss, its gradient and a thresholded accuracy.
    Holds no state, so one instance can be shared freely.

    Formula: L = sum((output - target)^2) / N, N = number of elements
    """
    threshold = 0.5

    @staticmethod
    def _check_operands(output, target, op):
        if output is None or target is None:
            raise ValueError("Output and target cannot be None")
        if not isinstance(output, Tensor) or not isinstance(target, Tensor):
            raise ValueError("Output and target must be Tensors")
        if output.shape != target.shape:
            logger.debug("Shape mismatch in %s: output %s, target %s", op, output.shape, target.shape)
            raise ValueError(f"Output and target must have the same shape: {output.shape} vs {target.shape}")

    def calculate_loss(self, output, target):
        self._check_operands(output, target, "calculate_loss")
        diff = output.data - target.data
        return float(xp.mean(diff ** 2))

    def calculate_accuracy(self, output, target):
        """Fraction of elements where (output >= 0.5) matches the target exactly."""
        self._check_operands(output, target, "calculate_accuracy")
        predicted = (output.data >= self.threshold).astype(xp.float64)
        return float(xp.mean(predicted == target.data))

    def loss_gradient(self, output, target):
        """dL/d(output) = 2 * (output - target) / N"""
        self._check_operands(output, target, "loss_gradient")
        diff = output.data - target.data
        return Tensor(2.0 * diff / diff.size)
