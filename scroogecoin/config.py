"""
config.py - ScroogeCoin ledger constants.
"""

# Absolute tolerance for the input/output value comparison (float values)
VALUE_TOLERANCE = 1e-9

# Ed25519 detached signature length in bytes
SIGNATURE_SIZE = 64

# Maximum candidate transactions held for one epoch
MEMPOOL_MAX_SIZE = 1000
