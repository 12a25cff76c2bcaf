import logging
import numbers
from collections.abc import Mapping, Sequence
from typing import List, Optional, Protocol

from ..nn.tensor import Tensor
from ..nn.layer import Layer
from ..nn.losses import Metric
from ..modules import layer_from_dict
from ..utils.logger import train_logger

logger = logging.getLogger(__name__)


class TrainingListener(Protocol):
    def on_epoch_end(self, epoch: int, total_epochs: int, loss: float) -> None:
        ...


class NeuralNetwork:
    """
    Ordered stack of layers trained example by example with backpropagation.

    Layers run in insertion order on the forward pass and in reverse order on
    the backward pass. A network is not reentrant: one caller at a time may
    predict or train with it.
    """
    def __init__(self, layers=None, metric: Optional[Metric] = None,
                 listener: Optional[TrainingListener] = None, event_log=None):
        self._layers: List[Layer] = []
        self.metric = metric if metric is not None else Metric()
        self.listener = listener
        self.event_log = event_log
        for layer in layers or []:
            self.add_layer(layer)

    def _log_event(self, description):
        logger.debug(description)
        if self.event_log is not None:
            self.event_log.log_event(description)

    @staticmethod
    def _check_layer(layer):
        if layer is None:
            raise ValueError("Layer cannot be None")
        if not isinstance(layer, Layer):
            raise ValueError(f"Expected a Layer, got {type(layer).__name__}")

    def _check_index(self, index):
        if isinstance(index, bool) or not isinstance(index, numbers.Integral):
            raise ValueError(f"Layer index must be an integer, got {index!r}")
        if not 0 <= index < len(self._layers):
            raise ValueError(f"Layer index {index} out of range for {len(self._layers)} layer(s)")

    # Layer management -------------------------------------------------------
    @property
    def layers(self):
        return list(self._layers)

    def __len__(self):
        return len(self._layers)

    def add_layer(self, layer):
        self._check_layer(layer)
        self._layers.append(layer)
        self._log_event(f"Added {layer.description} at index {len(self._layers) - 1}")

    def update_layer_at(self, index, layer):
        self._check_layer(layer)
        self._check_index(index)
        old = self._layers[index]
        self._layers[index] = layer
        self._log_event(f"Replaced {old.description} with {layer.description} at index {index}")

    def remove_layer_at(self, index):
        self._check_index(index)
        removed = self._layers.pop(index)
        self._log_event(f"Removed {removed.description} from index {index}")
        return removed

    def set_training_listener(self, listener):
        self.listener = listener

    # Forward / backward ------------------------------------------------------
    def _forward(self, x):
        """
        Passes input x through all layers sequentially.
        """
        out = x.copy()
        for layer in self._layers:
            out = layer.forward(out)
        return out

    def _backward(self, loss_grad):
        """
        Passes gradient backward through all layers.
        """
        grad = loss_grad
        for layer in reversed(self._layers):
            grad = layer.backward(grad)
        return grad

    def _update_parameters(self, optimizer):
        for layer in self._layers:
            layer.update_parameters(optimizer)

    def predict(self, x):
        if x is None:
            raise ValueError("Input cannot be None")
        if not isinstance(x, Tensor):
            raise ValueError(f"Input must be a Tensor, got {type(x).__name__}")
        return self._forward(x)

    # Training ----------------------------------------------------------------
    def _check_dataset(self, inputs, targets):
        if inputs is None or targets is None:
            raise ValueError("Inputs and targets cannot be None")
        if not isinstance(inputs, Sequence) or not isinstance(targets, Sequence):
            raise ValueError("Inputs and targets must be sequences of Tensors")
        if len(inputs) != len(targets):
            raise ValueError(f"Got {len(inputs)} inputs but {len(targets)} targets")
        if len(inputs) == 0:
            raise ValueError("Dataset cannot be empty")

    def train(self, inputs, targets, epochs, optimizer, listener=None):
        """
        Main Training Loop.

        Every epoch visits each (input, target) pair in order and runs
        forward -> loss -> backward -> update_parameters on all layers.
        There is no early stopping: exactly ``epochs`` passes are made.

        Args:
            inputs, targets: Equal-length, non-empty sequences of Tensors.
            epochs: Number of passes over the data (> 0).
            optimizer: Optimizer applied to every layer after each example.
            listener: Receives on_epoch_end(epoch, total_epochs, avg_loss).
                      Falls back to the listener set on the network.

        Returns:
            list: Average loss of every epoch.
        """
        self._check_dataset(inputs, targets)
        if isinstance(epochs, bool) or not isinstance(epochs, numbers.Integral) or epochs <= 0:
            raise ValueError(f"Epochs must be a positive integer, got {epochs!r}")
        if optimizer is None:
            raise ValueError("Optimizer cannot be None")

        listener = listener if listener is not None else self.listener
        n_samples = len(inputs)
        history = []

        train_logger.info(f"Starting Training | Epochs: {epochs} | Samples: {n_samples} | Optimizer: {optimizer!r}")

        for epoch in range(1, epochs + 1):
            epoch_loss = 0.0

            for xi, yi in zip(inputs, targets):
                # 1. Forward
                y_pred = self.predict(xi)

                # 2. Loss
                epoch_loss += self.metric.calculate_loss(y_pred, yi)
                grad_loss = self.metric.loss_gradient(y_pred, yi)

                # 3. Backward & Update
                self._backward(grad_loss)
                self._update_parameters(optimizer)

            avg_loss = epoch_loss / n_samples
            history.append(avg_loss)
            train_logger.debug(f"Epoch {epoch}/{epochs} finished. Train Loss: {avg_loss:.6f}")

            if listener is not None:
                listener.on_epoch_end(epoch, epochs, avg_loss)

        train_logger.info(f"Training Complete. Final Loss: {history[-1]:.6f}")
        self._log_event(f"Trained network for {epochs} epoch(s) on {n_samples} example(s)")
        return history

    def evaluate(self, inputs, targets):
        """Average loss and accuracy over a dataset, without updating parameters."""
        self._check_dataset(inputs, targets)

        total_loss = 0.0
        total_accuracy = 0.0
        for xi, yi in zip(inputs, targets):
            y_pred = self.predict(xi)
            total_loss += self.metric.calculate_loss(y_pred, yi)
            total_accuracy += self.metric.calculate_accuracy(y_pred, yi)
        return total_loss / len(inputs), total_accuracy / len(inputs)

    # Diagnostics -------------------------------------------------------------
    def get_architecture(self):
        if not self._layers:
            return "No layers"
        return "\n".join(f"Layer {i}: {layer.description}" for i, layer in enumerate(self._layers, start=1))

    def __str__(self):
        return self.get_architecture()

    # Persistence -------------------------------------------------------------
    def to_dict(self):
        return {"layers": [layer.to_dict() for layer in self._layers]}

    @classmethod
    def from_dict(cls, record, **kwargs):
        if not isinstance(record, Mapping) or "layers" not in record:
            raise ValueError("NeuralNetwork record must contain 'layers'")
        layers = record["layers"]
        if not isinstance(layers, Sequence) or isinstance(layers, str):
            raise ValueError("'layers' must be a list of layer records")
        return cls([layer_from_dict(layer) for layer in layers], **kwargs)
