"""
Simple Neural Network (SNN) trained on XOR
==========================================

• 2 inputs -> 2 hidden sigmoid units -> 1 sigmoid output
• Weights and biases seeded from uniform [0, 1)
• Plain stochastic gradient descent: one example at a time, squared-error cost
• The corpus is reshuffled before every epoch and before testing

Per training example:
1. Forward pass input -> hidden -> output
2. Report input / expected / actual / cost
3. Backpropagate output and hidden deltas
4. Update output weights and bias, then hidden weights and bias
"""

from dataclasses import dataclass
from typing import Callable, Optional, Tuple, Union

import numpy as np

from xor_snn.activations import cost, dcost, dsigmoid, sigmoid
from xor_snn.config import TRAIN_INPUT, TRAIN_OUTPUT, NetworkConfig


@dataclass(frozen=True)
class TrainRecord:
    epoch: int
    input: Tuple[float, ...]
    expected: float
    actual: float
    cost: float


@dataclass(frozen=True)
class TestRecord:
    __test__ = False  # keep pytest from collecting this as a test class

    input: Tuple[float, ...]
    expected: float
    actual_rounded: int


Record = Union[TrainRecord, TestRecord]
Reporter = Callable[[Record], None]


class SNN:
    def __init__(self, config: Optional[NetworkConfig] = None, reporter: Optional[Reporter] = None):
        self.config = (config or NetworkConfig()).validate()
        self.lr = float(self.config.learning_rate)
        self.reporter = reporter
        self.rng = np.random.default_rng(self.config.seed)

        n_in = self.config.input_size
        n_hidden = self.config.hidden_size
        n_out = self.config.output_size

        # Activation scratch state, overwritten on every forward pass
        self.hidden_nodes = np.zeros(n_hidden)
        self.activation_hidden_nodes = np.zeros(n_hidden)
        self.output_nodes = np.zeros(n_out)
        self.activation_output_nodes = np.zeros(n_out)

        self.hidden_weights = np.zeros((n_in, n_hidden))
        self.output_weights = np.zeros((n_hidden, n_out))
        self.hidden_bias = np.zeros(n_hidden)
        self.output_bias = np.zeros(n_out)

        self.train_input = TRAIN_INPUT.copy()
        self.train_output = TRAIN_OUTPUT.copy()

        # Epochs completed so far, across all train() calls
        self.epochs_trained = 0

        self.init_weights_and_biases()

    @property
    def num_training_sets(self):
        return len(self.train_input)

    def init_weights_and_biases(self):
        """Draw every weight and bias independently from uniform [0, 1)."""
        self.hidden_weights = self.rng.random(self.hidden_weights.shape)
        self.output_weights = self.rng.random(self.output_weights.shape)
        self.hidden_bias = self.rng.random(self.hidden_bias.shape)
        self.output_bias = self.rng.random(self.output_bias.shape)

    def parameters(self):
        """Copies of all weights and biases, keyed by name."""
        return {
            "hidden_weights": self.hidden_weights.copy(),
            "output_weights": self.output_weights.copy(),
            "hidden_bias": self.hidden_bias.copy(),
            "output_bias": self.output_bias.copy(),
        }

    def shuffle(self):
        """Reorder the corpus with a single permutation shared by inputs and outputs."""
        order = self.rng.permutation(self.num_training_sets)
        self.train_input = self.train_input[order]
        self.train_output = self.train_output[order]

    def forward(self, inputs):
        x = self._as_input(inputs)

        # forward pass input --> hidden
        self.hidden_nodes = self.hidden_bias + np.dot(x, self.hidden_weights)
        self.activation_hidden_nodes = sigmoid(self.hidden_nodes)

        # forward pass hidden --> output
        self.output_nodes = self.output_bias + np.dot(self.activation_hidden_nodes, self.output_weights)
        self.activation_output_nodes = sigmoid(self.output_nodes)

        return self.activation_output_nodes

    def backpropagate(self, expected):
        """Output and hidden deltas for the example of the last forward pass."""
        expected = np.asarray(expected, dtype=float).reshape(self.output_nodes.shape)

        delta_output = dcost(self.activation_output_nodes, expected) * dsigmoid(self.output_nodes)
        delta_hidden = np.dot(self.output_weights, delta_output) * dsigmoid(self.hidden_nodes)

        return delta_output, delta_hidden

    def update(self, inputs, delta_output, delta_hidden):
        x = self._as_input(inputs)

        # update output weights and bias
        self.output_bias -= self.lr * delta_output
        self.output_weights -= self.lr * np.outer(self.activation_hidden_nodes, delta_output)

        # update hidden weights and bias
        self.hidden_bias -= self.lr * delta_hidden
        self.hidden_weights -= self.lr * np.outer(x, delta_hidden)

    def train_step(self, inputs, expected, epoch=0, reporter=None):
        """One forward / backward / update cycle. Returns the TrainRecord."""
        x = self._as_input(inputs)
        expected = np.asarray(expected, dtype=float).reshape(-1)

        actual = self.forward(x)
        record = TrainRecord(
            epoch=epoch,
            input=tuple(float(v) for v in x),
            expected=float(expected[0]),
            actual=float(actual[0]),
            cost=float(cost(actual[0], expected[0])),
        )
        self._emit(record, reporter)

        delta_output, delta_hidden = self.backpropagate(expected)
        self.update(x, delta_output, delta_hidden)
        return record

    def train(self, num_epochs, reporter=None):
        if isinstance(num_epochs, bool) or not isinstance(num_epochs, (int, np.integer)):
            raise ValueError(f"num_epochs must be an integer, got {num_epochs!r}")
        if num_epochs < 0:
            raise ValueError(f"num_epochs must be >= 0, got {num_epochs}")

        for _ in range(num_epochs):
            self.shuffle()

            for set_no in range(self.num_training_sets):
                self.train_step(self.train_input[set_no], self.train_output[set_no],
                                epoch=self.epochs_trained, reporter=reporter)

            self.epochs_trained += 1

    def test(self, reporter=None):
        self.shuffle()

        for set_no in range(self.num_training_sets):
            x = self.train_input[set_no]
            actual = self.forward(x)
            self._emit(
                TestRecord(
                    input=tuple(float(v) for v in x),
                    expected=float(self.train_output[set_no][0]),
                    actual_rounded=int(round(float(actual[0]))),
                ),
                reporter,
            )

    def predict(self, inputs):
        """Output activation for one input pattern, as a float."""
        return float(self.forward(inputs)[0])

    def _as_input(self, inputs):
        x = np.asarray(inputs, dtype=float).reshape(-1)
        if x.shape[0] != self.hidden_weights.shape[0]:
            raise ValueError(f"Expected {self.hidden_weights.shape[0]} inputs, got {x.shape[0]}")
        return x

    def _emit(self, record, reporter):
        sink = reporter if reporter is not None else self.reporter
        if sink is not None:
            sink(record)
