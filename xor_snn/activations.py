import numpy as np


# --- Sigmoid Functions ---
def sigmoid(x):
    # clipped so np.exp never overflows for large negative inputs
    return 1 / (1 + np.exp(-np.clip(x, -500, 500)))

def dsigmoid(x):
    """Derivative of the sigmoid, taken at the pre-activation value x."""
    activation = sigmoid(x)
    return activation * (1 - activation)


# --- Cost Functions ---
def cost(actual_output, expected_output):
    """Squared error. Only used for reporting."""
    return (actual_output - expected_output) ** 2

def dcost(actual_output, expected_output):
    return 2 * (actual_output - expected_output)
