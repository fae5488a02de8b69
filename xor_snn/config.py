import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

# --- Network Architecture ---
NUM_INPUT_NODES = 2
NUM_HIDDEN_NODES = 2
NUM_OUTPUT_NODES = 1
NUM_TRAINING_SETS = 4

# --- Training Settings ---
LEARNING_RATE = 5.0
NUM_EPOCHS = 10000

# --- XOR Dataset ---
TRAIN_INPUT = np.array([[0.0, 0.0],
                        [1.0, 0.0],
                        [0.0, 1.0],
                        [1.0, 1.0]])
TRAIN_OUTPUT = np.array([[0.0], [1.0], [1.0], [0.0]])


class ConfigError(ValueError):
    """Raised when a NetworkConfig holds values the network cannot run with."""


@dataclass(frozen=True)
class NetworkConfig:
    """Topology and training settings for one SNN.

    input_size and output_size are pinned by the XOR corpus (2 and 1);
    hidden_size and learning_rate are free. seed=None draws fresh entropy.
    """

    input_size: int = NUM_INPUT_NODES
    hidden_size: int = NUM_HIDDEN_NODES
    output_size: int = NUM_OUTPUT_NODES
    learning_rate: float = LEARNING_RATE
    seed: Optional[int] = None

    def validate(self) -> "NetworkConfig":
        for name in ("input_size", "hidden_size", "output_size"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value < 1:
                raise ConfigError(f"{name} must be an integer >= 1, got {value!r}")

        if self.input_size != TRAIN_INPUT.shape[1]:
            raise ConfigError(
                f"input_size must be {TRAIN_INPUT.shape[1]} for the XOR corpus, got {self.input_size}"
            )
        if self.output_size != TRAIN_OUTPUT.shape[1]:
            raise ConfigError(
                f"output_size must be {TRAIN_OUTPUT.shape[1]} for the XOR corpus, got {self.output_size}"
            )

        lr = self.learning_rate
        if isinstance(lr, bool) or not isinstance(lr, (int, float, np.floating, np.integer)):
            raise ConfigError(f"learning_rate must be a number, got {lr!r}")
        if not math.isfinite(lr) or lr <= 0:
            raise ConfigError(f"learning_rate must be finite and positive, got {lr!r}")

        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, (int, np.integer))):
            raise ConfigError(f"seed must be an integer or None, got {self.seed!r}")
        if self.seed is not None and self.seed < 0:
            raise ConfigError(f"seed must be non-negative, got {self.seed}")
        return self
