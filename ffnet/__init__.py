"""
ffnet - Feed-Forward NETworks

A small neural-network training engine: tensors, dense and activation layers,
an MSE metric, SGD and a network that runs forward inference,
backpropagation and parameter updates.
"""

__version__ = "0.1.0"
__author__ = "ffnet Team"

# Import main components for easy access
from .nn.tensor import Tensor
from .nn.layer import Layer
from .nn.losses import Metric
from .nn.optim import Optimizer, SGD
from .modules.dense import DenseLayer
from .modules.activation import ActivationLayer
from .models.network import NeuralNetwork
from .utils.backend import xp, set_seed

__all__ = [
    "Tensor",
    "Layer",
    "Metric",
    "Optimizer",
    "SGD",
    "DenseLayer",
    "ActivationLayer",
    "NeuralNetwork",
    "xp",
    "set_seed",
]
