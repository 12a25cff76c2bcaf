#!/usr/bin/env python3
"""
Example usage of the ffnet package.

This script demonstrates how to use the core components of the ffnet package
including tensors, layers, the metric, the optimizer and persistence.
"""

from ffnet import Tensor, NeuralNetwork, DenseLayer, ActivationLayer, SGD, set_seed
from ffnet.utils import LossHistory, save_network, load_network

def main():
    print("ffnet Package Example")
    print("=" * 50)
    set_seed(0)

    # Create some sample data (XOR)
    print("1. Creating tensors...")
    inputs = [Tensor([[0.0, 0.0]]), Tensor([[0.0, 1.0]]), Tensor([[1.0, 0.0]]), Tensor([[1.0, 1.0]])]
    targets = [Tensor([[0.0]]), Tensor([[1.0]]), Tensor([[1.0]]), Tensor([[0.0]])]

    print(f"Input tensor shape: {inputs[0].shape}")
    print(f"Target tensor shape: {targets[0].shape}")

    # Create a small network
    print("\n2. Creating a network...")
    network = NeuralNetwork()
    network.add_layer(DenseLayer(2, 8))
    network.add_layer(ActivationLayer("relu"))
    network.add_layer(DenseLayer(8, 1))
    network.add_layer(ActivationLayer("sigmoid"))
    print(network.get_architecture())

    # Train
    print("\n3. Training...")
    history = LossHistory()
    network.train(inputs, targets, epochs=2000, optimizer=SGD(learning_rate=0.1), listener=history)
    print(f"Final loss: {history.last_loss:.6f}")

    # Evaluate
    print("\n4. Evaluating...")
    loss, accuracy = network.evaluate(inputs, targets)
    print(f"Loss: {loss:.6f} | Accuracy: {accuracy:.2f}")

    # Save and reload
    print("\n5. Saving and loading...")
    save_network(network, "models/xor.json")
    restored = load_network("models/xor.json")
    print(f"Restored prediction for [1, 0]: {restored.predict(inputs[2]).tolist()}")

    print("\nExample completed successfully!")

if __name__ == "__main__":
    main()
