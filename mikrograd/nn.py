"""
Neural network building blocks for mikrograd.

Every block is plain arithmetic over scalar Values, so its output can be fed
into a loss and differentiated with backward() like any other expression.
"""

import logging
from itertools import chain

import numpy as np
from mikrograd.engine import Value

logger = logging.getLogger(__name__)

# Weights are drawn from Uniform(-WEIGHT_INIT_RANGE, WEIGHT_INIT_RANGE)
WEIGHT_INIT_RANGE = 1.0


class Module:
    """
    Base class for all neural network modules.

    Provides common functionality for managing parameters and gradients.
    """

    def zero_grad(self):
        """
        Reset all gradients to zero.

        Call this before each backward pass: backward() accumulates into the
        parameters' gradients, it never overwrites them.
        """
        for p in self.parameters():
            p.zero_grad()

    def parameters(self):
        """
        Yield all trainable parameters (weights and biases).

        Override this in subclasses to yield actual parameters. Every call
        returns a fresh generator with the same order.
        """
        yield from ()


class Neuron(Module):
    """
    A single unit: activation(w . x + b)

    Args:
        nin: Number of inputs
        nonlin: If True, apply ReLU activation (default: True)
        weights: Optional initial weights, one number per input
        bias: Optional initial bias (default: 0.0)
        rng: Seed or numpy Generator used to draw the weights

    Example:
        >>> n = Neuron(2, nonlin=False, weights=[10.0, 100.0], bias=3.0)
        >>> n([1.2, 1.3]).data
        145.0
    """

    def __init__(self, nin, nonlin=True, weights=None, bias=None, rng=None):
        if weights is None:
            rng = np.random.default_rng(rng)
            weights = rng.uniform(-WEIGHT_INIT_RANGE, WEIGHT_INIT_RANGE, nin)
        elif len(weights) != nin:
            raise ValueError(f"expected {nin} weights, got {len(weights)}")

        self.w = [Value(wi) for wi in weights]
        self.b = Value(0.0 if bias is None else bias)
        self.nonlin = nonlin

    def __call__(self, x):
        """
        Forward pass: build the sub-graph for this neuron's output.

        Args:
            x: Sequence of Values (or numbers), one per weight

        Returns:
            A single output Value
        """
        if len(x) != len(self.w):
            raise ValueError(f"{self!r} expects {len(self.w)} inputs, got {len(x)}")

        act = sum((wi * xi for wi, xi in zip(self.w, x)), Value(0.0)) + self.b
        return act.relu() if self.nonlin else act

    def parameters(self):
        yield from self.w
        yield self.b

    def __repr__(self):
        return f"{'ReLU' if self.nonlin else 'Linear'}Neuron({len(self.w)})"


class Layer(Module):
    """
    A row of neurons that all read the same input.

    Args:
        nin: Number of inputs per neuron
        nout: Number of neurons (outputs)
        nonlin: If True, every neuron applies ReLU (default: True)
        weights: Optional initial weights, one list per neuron
        biases: Optional initial biases, one per neuron
        rng: Seed or numpy Generator used to draw the weights

    Example:
        >>> layer = Layer(3, 5)  # 3 inputs, 5 ReLU outputs
        >>> y = layer([1.0, 2.0, 3.0])  # list of 5 Values
    """

    def __init__(self, nin, nout, nonlin=True, weights=None, biases=None, rng=None):
        if weights is not None and len(weights) != nout:
            raise ValueError(f"expected weights for {nout} neurons, got {len(weights)}")
        if biases is not None and len(biases) != nout:
            raise ValueError(f"expected {nout} biases, got {len(biases)}")

        rng = np.random.default_rng(rng)
        self.neurons = [
            Neuron(
                nin,
                nonlin=nonlin,
                weights=weights[i] if weights is not None else None,
                bias=biases[i] if biases is not None else None,
                rng=rng,
            )
            for i in range(nout)
        ]

    def __call__(self, x):
        """Forward pass: each neuron's output on the same input, in order."""
        return [n(x) for n in self.neurons]

    def parameters(self):
        return chain.from_iterable(n.parameters() for n in self.neurons)

    def __repr__(self):
        return f"Layer of [{', '.join(str(n) for n in self.neurons)}]"


class MLP(Module):
    """
    Multi-Layer Perceptron: a sequence of fully-connected layers.

    Hidden layers use ReLU. The output layer is linear unless nonlin_output
    is set, which suits regression and margin losses on raw scores.

    Args:
        nin: Number of input features
        nouts: List of output sizes for each layer
               Example: [16, 16, 1] creates 3 layers: input→16→16→1
        weights: Optional list of per-layer weights (see Layer)
        biases: Optional list of per-layer biases (see Layer)
        rng: Seed or numpy Generator shared by all layers
        nonlin_output: Apply ReLU on the output layer too (default: False)

    Example:
        >>> model = MLP(2, [16, 16, 1], rng=0)
        >>> score = model([0.5, -1.0])[0]
        >>> loss = (score - 1.0) ** 2
        >>> model.zero_grad()  # Reset gradients
        >>> loss.backward()  # Compute gradients
        >>> # Update parameters (SGD)
        >>> for p in model.parameters():
        ...     p.data -= learning_rate * p.grad
    """

    def __init__(self, nin, nouts, weights=None, biases=None, rng=None, nonlin_output=False):
        if not nouts:
            raise ValueError("an MLP needs at least one layer")
        if weights is not None and len(weights) != len(nouts):
            raise ValueError(f"expected weights for {len(nouts)} layers, got {len(weights)}")
        if biases is not None and len(biases) != len(nouts):
            raise ValueError(f"expected biases for {len(nouts)} layers, got {len(biases)}")

        rng = np.random.default_rng(rng)
        layer_sizes = [nin] + list(nouts)

        self.layers = []
        for i in range(len(nouts)):
            is_output_layer = (i == len(nouts) - 1)

            layer = Layer(
                layer_sizes[i],
                layer_sizes[i + 1],
                nonlin=nonlin_output if is_output_layer else True,
                weights=weights[i] if weights is not None else None,
                biases=biases[i] if biases is not None else None,
                rng=rng,
            )
            self.layers.append(layer)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("built %r with %d parameters", self, sum(1 for _ in self.parameters()))

    def __call__(self, x):
        """
        Forward pass: pass input through all layers sequentially.

        Args:
            x: Sequence of nin Values (or numbers)

        Returns:
            List of nouts[-1] output Values
        """
        for layer in self.layers:
            x = layer(x)
        return x

    def parameters(self):
        """Yield all trainable parameters, layer by layer."""
        return chain.from_iterable(layer.parameters() for layer in self.layers)

    def __repr__(self):
        return f"MLP of [{', '.join(str(layer) for layer in self.layers)}]"
