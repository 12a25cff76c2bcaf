"""
Network layers for ffnet.

This module contains the concrete layer implementations and the tag-based
lookup used to rebuild layers from their serialized records.
"""

from collections.abc import Mapping

from .dense import DenseLayer
from .activation import ActivationLayer

LAYER_TYPES = {
    DenseLayer.layer_type: DenseLayer,
    ActivationLayer.layer_type: ActivationLayer,
}


def layer_from_dict(record):
    """Rebuilds a layer from a record produced by ``Layer.to_dict()``."""
    if not isinstance(record, Mapping) or "type" not in record:
        raise ValueError("Layer record must be a mapping with a 'type' entry")
    layer_cls = LAYER_TYPES.get(record["type"])
    if layer_cls is None:
        raise ValueError(f"Unknown layer type {record['type']!r}")
    return layer_cls.from_dict(record)


__all__ = [
    "DenseLayer",
    "ActivationLayer",
    "LAYER_TYPES",
    "layer_from_dict",
]
