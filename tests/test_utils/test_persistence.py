import os
import json
import logging
import shutil
import tempfile
import unittest

import matplotlib
matplotlib.use("Agg")

from ffnet.nn.tensor import Tensor
from ffnet.nn.optim import SGD
from ffnet.modules import DenseLayer, ActivationLayer
from ffnet.models.network import NeuralNetwork
from ffnet.utils.backend import xp, set_seed
from ffnet.utils.events import Event, EventLog
from ffnet.utils.history import LossHistory
from ffnet.utils.logger import setup_logger
from ffnet.utils.serialization import (
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


class TestSerialization(unittest.TestCase):
    def setUp(self):
        self.test_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def path(self, name):
        return os.path.join(self.test_dir, name)

    def test_tensor_file(self):
        tensor = Tensor([[1.5, -2.0], [0.0, 3.25]])
        save_tensor(tensor, self.path("tensor.json"))
        with open(self.path("tensor.json")) as f:
            self.assertEqual(json.load(f), {"data": [[1.5, -2.0], [0.0, 3.25]]})
        self.assertEqual(load_tensor(self.path("tensor.json")), tensor)

    def test_layer_files(self):
        set_seed(5)
        dense = DenseLayer(3, 2)
        save_layer(dense, self.path("dense.json"))
        save_layer(ActivationLayer("sigmoid"), self.path("act.json"))

        restored = load_layer(self.path("dense.json"))
        self.assertIsInstance(restored, DenseLayer)
        self.assertTrue(restored.weights.allclose(dense.weights))
        self.assertEqual(load_layer(self.path("act.json")).activation_function, "sigmoid")

    def test_optimizer_file(self):
        save_optimizer(SGD(0.02), self.path("opt.json"))
        restored = load_optimizer(self.path("opt.json"))
        self.assertIsInstance(restored, SGD)
        self.assertEqual(restored.learning_rate, 0.02)

    def test_network_file_creates_directories(self):
        set_seed(9)
        network = NeuralNetwork([DenseLayer(2, 3), ActivationLayer("relu"), DenseLayer(3, 1)])
        path = self.path(os.path.join("nested", "dir", "network.json"))
        save_network(network, path)
        restored = load_network(path)

        x = Tensor(xp.random.randn(4, 2))
        self.assertTrue(restored.predict(x).allclose(network.predict(x)))
        self.assertEqual(restored.get_architecture(), network.get_architecture())

    def test_save_json_accepts_numpy_values(self):
        save_json({"value": xp.float64(0.5), "array": xp.ones((1, 2))}, self.path("raw.json"))
        self.assertEqual(load_json(self.path("raw.json")), {"value": 0.5, "array": [[1.0, 1.0]]})

    def test_load_json_errors(self):
        with self.assertRaises(FileNotFoundError):
            load_json(self.path("missing.json"))

        with open(self.path("broken.json"), "w") as f:
            f.write("{not json")
        with self.assertRaises(ValueError):
            load_json(self.path("broken.json"))

        with open(self.path("list.json"), "w") as f:
            f.write("[1, 2, 3]")
        with self.assertRaises(ValueError):
            load_json(self.path("list.json"))


class TestLossHistory(unittest.TestCase):
    def test_records_epochs(self):
        history = LossHistory()
        self.assertIsNone(history.last_loss)
        history.on_epoch_end(1, 2, 0.5)
        history.on_epoch_end(2, 2, 0.25)
        self.assertEqual(history.epochs, [1, 2])
        self.assertEqual(history.losses, [0.5, 0.25])
        self.assertEqual(history.last_loss, 0.25)
        history.clear()
        self.assertEqual(history.losses, [])

    def test_plot_to_file(self):
        test_dir = tempfile.mkdtemp()
        try:
            history = LossHistory()
            for epoch, loss in enumerate([1.0, 0.6, 0.3], start=1):
                history.on_epoch_end(epoch, 3, loss)
            path = os.path.join(test_dir, "loss.png")
            history.plot(path)
            self.assertTrue(os.path.exists(path))
        finally:
            shutil.rmtree(test_dir)


class TestEventLog(unittest.TestCase):
    def test_log_event(self):
        log = EventLog()
        event = log.log_event("Layer x added to network")
        self.assertIsInstance(event, Event)
        self.assertEqual(len(log), 1)
        self.assertEqual([e.description for e in log], ["Layer x added to network"])
        self.assertIn("Layer x added to network", str(event))

    def test_logs_are_independent(self):
        a, b = EventLog(), EventLog()
        a.log_event("only in a")
        self.assertEqual(len(b), 0)
        a.clear()
        self.assertEqual(len(a), 0)

    def test_event_equality(self):
        e = Event("Layer x added to network")
        self.assertEqual(e, e)
        self.assertEqual(hash(e), hash(e))
        self.assertNotEqual(e, Event("Layer y added to network"))


class TestLogger(unittest.TestCase):
    def test_setup_logger_writes_file(self):
        test_dir = tempfile.mkdtemp()
        try:
            log_file = os.path.join(test_dir, "unit.log")
            logger = setup_logger("ffnet.test_unit", log_file=log_file, level=logging.INFO)
            logger.info("hello from the test")
            for handler in logger.handlers:
                handler.flush()
            with open(log_file) as f:
                self.assertIn("INFO - hello from the test", f.read())

            # handlers are only attached once
            self.assertIs(setup_logger("ffnet.test_unit", log_file=log_file), logger)
            self.assertEqual(len(logger.handlers), 2)
        finally:
            logger = logging.getLogger("ffnet.test_unit")
            for handler in list(logger.handlers):
                handler.close()
                logger.removeHandler(handler)
            shutil.rmtree(test_dir)


if __name__ == "__main__":
    unittest.main()
