"""Two-layer sigmoid network that learns XOR with per-example backpropagation."""

from xor_snn.config import ConfigError, NetworkConfig
from xor_snn.network import SNN, TestRecord, TrainRecord

__all__ = ["SNN", "NetworkConfig", "ConfigError", "TrainRecord", "TestRecord"]
__version__ = "0.1.0"
