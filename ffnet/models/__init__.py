"""
Network models for ffnet.
"""

from .network import NeuralNetwork, TrainingListener

__all__ = ["NeuralNetwork", "TrainingListener"]
