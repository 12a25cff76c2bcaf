"""
Utility functions and helpers for ffnet.

This module contains backend and seeding helpers, logging, the event log,
the loss-history listener and JSON persistence.
"""

from .backend import xp, set_seed
from .logger import setup_logger, train_logger
from .events import Event, EventLog
from .history import LossHistory
from .serialization import (
    save_json,
    load_json,
    save_tensor,
    load_tensor,
    save_layer,
    load_layer,
    save_optimizer,
    load_optimizer,
    save_network,
    load_network,
)

__all__ = [
    "xp",
    "set_seed",
    "setup_logger",
    "train_logger",
    "Event",
    "EventLog",
    "LossHistory",
    "save_json",
    "load_json",
    "save_tensor",
    "load_tensor",
    "save_layer",
    "load_layer",
    "save_optimizer",
    "load_optimizer",
    "save_network",
    "load_network",
]
