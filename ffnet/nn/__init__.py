"""
Core building blocks for ffnet.

This module contains the tensor value type, the layer contract, the MSE
metric and the optimizers.
"""

from .tensor import Tensor
from .layer import Layer
from .losses import Metric
from .optim import Optimizer, SGD, optimizer_from_dict

__all__ = [
    "Tensor",
    "Layer",
    "Metric",
    "Optimizer",
    "SGD",
    "optimizer_from_dict",
]
