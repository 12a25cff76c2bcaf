import unittest
import numpy as np

import torch

from ffnet.nn.tensor import Tensor
from ffnet.nn.losses import Metric
from ffnet.utils.backend import xp, set_seed


class TestMetric(unittest.TestCase):
    def assert_close(self, a, b, atol=1e-8):
        self.assertTrue(np.allclose(a, b, atol=atol))

    def setUp(self):
        self.metric = Metric()

    def test_mse_loss_2d(self):
        a = np.array([[1., 2., 3.], [4., 5., 6.]])
        b = np.array([[7., 8., 9.], [10., 11., 12.]])

        a_pt = torch.tensor(a, requires_grad=True)
        b_pt = torch.tensor(b)
        loss_pt = torch.nn.MSELoss()(a_pt, b_pt)
        loss_pt.backward()

        loss_my = self.metric.calculate_loss(Tensor(a), Tensor(b))
        grad_my = self.metric.loss_gradient(Tensor(a), Tensor(b))

        self.assertAlmostEqual(loss_my, 36.0)
        self.assert_close(loss_my, loss_pt.item())
        self.assert_close(grad_my.data, a_pt.grad.numpy())

    def test_mse_loss_random(self):
        set_seed(3)
        a = xp.random.randn(5, 4)
        b = xp.random.randn(5, 4)

        a_pt = torch.tensor(a, requires_grad=True)
        loss_pt = torch.nn.MSELoss()(a_pt, torch.tensor(b))
        loss_pt.backward()

        self.assert_close(self.metric.calculate_loss(Tensor(a), Tensor(b)), loss_pt.item())
        self.assert_close(self.metric.loss_gradient(Tensor(a), Tensor(b)).data, a_pt.grad.numpy())

    def test_loss_is_zero_iff_equal(self):
        t = Tensor([[0.3, -0.7]])
        self.assertEqual(self.metric.calculate_loss(t, t.copy()), 0.0)
        self.assertGreater(self.metric.calculate_loss(t, Tensor([[0.3, -0.6]])), 0.0)

    def test_loss_is_non_negative(self):
        set_seed(11)
        for _ in range(20):
            a = Tensor(xp.random.randn(2, 3) * 10)
            b = Tensor(xp.random.randn(2, 3) * 10)
            self.assertGreaterEqual(self.metric.calculate_loss(a, b), 0.0)

    def test_gradient_of_equal_tensors_is_zero(self):
        t = Tensor([[1.0, 2.0]])
        self.assertEqual(self.metric.loss_gradient(t, t.copy()).tolist(), [[0.0, 0.0]])

    def test_accuracy(self):
        output = Tensor([[0.9, 0.2, 0.5, 0.49]])
        target = Tensor([[1.0, 0.0, 0.0, 0.0]])
        self.assertAlmostEqual(self.metric.calculate_accuracy(output, target), 0.75)

    def test_accuracy_perfect_and_zero(self):
        target = Tensor([[1.0], [0.0]])
        self.assertEqual(self.metric.calculate_accuracy(Tensor([[0.7], [0.1]]), target), 1.0)
        self.assertEqual(self.metric.calculate_accuracy(Tensor([[0.1], [0.7]]), target), 0.0)

    def test_rejects_invalid_operands(self):
        a = Tensor([[1.0, 2.0]])
        cases = [(None, a), (a, None), (a, Tensor([[1.0], [2.0]])), (a, [[1.0, 2.0]])]
        for output, target in cases:
            with self.subTest(output=output, target=target):
                with self.assertRaises(ValueError):
                    self.metric.calculate_loss(output, target)
                with self.assertRaises(ValueError):
                    self.metric.calculate_accuracy(output, target)
                with self.assertRaises(ValueError):
                    self.metric.loss_gradient(output, target)


if __name__ == "__main__":
    unittest.main()
