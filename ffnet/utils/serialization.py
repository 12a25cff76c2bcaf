"""
serialization.py
~~~~~~~~~~~~~~~~

JSON file persistence for tensors, layers, optimizers and networks.
Every object only has to provide ``to_dict()``; loading goes through the
matching ``from_dict`` / tag-dispatch function.
"""

import json
import logging
import os
from typing import Any, Dict

import numpy as np

logger = logging.getLogger(__name__)


class RecordEncoder(json.JSONEncoder):
    """JSON encoder that also accepts numpy arrays and scalars."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        if isinstance(obj, np.generic):
            return obj.item()
        return super().default(obj)


def save_json(obj: Any, path: str, indent: int = 4) -> None:
    """
    Write ``obj.to_dict()`` (or a plain dict) to *path* as JSON.

    Args:
        obj: Object exposing to_dict(), or a dict record
        path: Destination file; parent directories are created
        indent: JSON indentation
    """
    record = obj if isinstance(obj, dict) else obj.to_dict()
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(record, f, cls=RecordEncoder, indent=indent)
    logger.info("Saved %s record to %s", record.get("type", type(obj).__name__), path)


def load_json(path: str) -> Dict[str, Any]:
    """
    Read a JSON record from *path*.

    Raises:
        FileNotFoundError: if the file does not exist
        ValueError: if the file does not hold a JSON object
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            record = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"{path} is not valid JSON: {e}")
    if not isinstance(record, dict):
        raise ValueError(f"{path} does not contain a JSON object")
    logger.info("Loaded record from %s", path)
    return record


def save_tensor(tensor, path: str) -> None:
    save_json(tensor, path)


def load_tensor(path: str):
    from ..nn.tensor import Tensor
    return Tensor.from_dict(load_json(path))


def save_layer(layer, path: str) -> None:
    save_json(layer, path)


def load_layer(path: str):
    from ..modules import layer_from_dict
    return layer_from_dict(load_json(path))


def save_optimizer(optimizer, path: str) -> None:
    save_json(optimizer, path)


def load_optimizer(path: str):
    from ..nn.optim import optimizer_from_dict
    return optimizer_from_dict(load_json(path))


def save_network(network, path: str) -> None:
    save_json(network, path)


def load_network(path: str):
    from ..models.network import NeuralNetwork
    return NeuralNetwork.from_dict(load_json(path))
