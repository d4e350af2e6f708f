# Core modules
from .transaction import Transaction, Input, Output
from .utxo import UTXO, UTXOPool
from .handler import TxHandler

# Crypto
from .crypto import generate_keypair, sign_message, verify_signature

# Node
from .mempool import Mempool
from .ledger import Ledger

__all__ = [
    # Core
    "Transaction",
    "Input",
    "Output",
    "UTXO",
    "UTXOPool",
    "TxHandler",
    # Crypto
    "generate_keypair",
    "sign_message",
    "verify_signature",
    # Node
    "Mempool",
    "Ledger",
]
