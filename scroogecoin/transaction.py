import json
import hashlib
from typing import List, Optional

from nacl.signing import SigningKey

from scroogecoin.crypto import sign_message


def _encode(payload) -> bytes:
    return json.dumps(payload, sort_keys=True).encode("utf-8")


class Input:
    def __init__(self, prev_tx_hash: bytes, output_index: int, signature: Optional[bytes] = None):
        self.prev_tx_hash = prev_tx_hash    # Hash of the transaction that created the spent output
        self.output_index = output_index    # Position of that output in its transaction
        self.signature = signature          # Raw Ed25519 signature bytes

    def add_signature(self, signature: bytes):
        self.signature = bytes(signature) if signature is not None else None

    def outpoint_dict(self):
        return {
            "prev_tx_hash": self.prev_tx_hash.hex(),
            "output_index": self.output_index,
        }

    def to_dict(self):
        return {
            **self.outpoint_dict(),
            "signature": self.signature.hex() if self.signature else None,
        }

    @staticmethod
    def from_dict(data: dict) -> "Input":
        signature = data.get("signature")
        return Input(
            prev_tx_hash=bytes.fromhex(data["prev_tx_hash"]),
            output_index=data["output_index"],
            signature=bytes.fromhex(signature) if signature else None,
        )

    def __repr__(self):
        return f"Input({self.prev_tx_hash.hex()[:8]}:{self.output_index})"


class Output:
    def __init__(self, value, address: bytes):
        self.value = value          # int or float
        self.address = address      # Raw verify key bytes of the recipient

    def to_dict(self):
        return {
            "value": self.value,
            "address": self.address.hex(),
        }

    @staticmethod
    def from_dict(data: dict) -> "Output":
        return Output(value=data["value"], address=bytes.fromhex(data["address"]))

    def __eq__(self, other):
        if not isinstance(other, Output):
            return NotImplemented
        return self.value == other.value and self.address == other.address

    def __hash__(self):
        return hash((self.value, self.address))

    def __repr__(self):
        return f"Output({self.value}→{self.address.hex()[:8]})"


class Transaction:
    """
    Ordered inputs and outputs plus a content hash.

    The hash is assigned by finalize() once the transaction is fully built
    and signed; it covers the raw encoding including signatures.
    """

    def __init__(self, inputs: Optional[List[Input]] = None, outputs: Optional[List[Output]] = None):
        self.inputs: List[Input] = list(inputs or [])
        self.outputs: List[Output] = list(outputs or [])
        self._hash: Optional[bytes] = None

    @classmethod
    def coinbase(cls, value, address: bytes) -> "Transaction":
        """Create a finalized transaction with no inputs paying value to address."""
        tx = cls()
        tx.add_output(value, address)
        tx.finalize()
        return tx

    # -------------------------
    # CONSTRUCTION
    # -------------------------
    def add_input(self, prev_tx_hash: bytes, output_index: int):
        self._check_mutable()
        self.inputs.append(Input(prev_tx_hash, output_index))

    def add_output(self, value, address: bytes):
        self._check_mutable()
        self.outputs.append(Output(value, address))

    def remove_input(self, index_or_utxo):
        """Remove an input by position, or the input spending the given UTXO."""
        self._check_mutable()
        if isinstance(index_or_utxo, int):
            del self.inputs[index_or_utxo]
            return

        for i, tx_input in enumerate(self.inputs):
            if (tx_input.prev_tx_hash, tx_input.output_index) == (index_or_utxo.tx_hash, index_or_utxo.index):
                del self.inputs[i]
                return

    def add_signature(self, signature: bytes, index: int):
        self._check_mutable()
        self.inputs[index].add_signature(signature)

    def sign_input(self, signing_key: SigningKey, index: int):
        message = self.get_raw_data_to_sign(index)
        if message is None:
            raise ValueError(f"No input at index {index}")
        self.add_signature(sign_message(signing_key, message), index)

    def finalize(self):
        if self._hash is not None:
            raise ValueError("Transaction already finalized")
        self._hash = hashlib.sha256(self.get_raw_tx()).digest()

    def _check_mutable(self):
        if self._hash is not None:
            raise ValueError("Transaction is finalized")

    # -------------------------
    # ENCODING
    # -------------------------
    def get_raw_data_to_sign(self, index: int) -> Optional[bytes]:
        """
        Bytes signed by input `index`: that input's outpoint and every output.
        Signatures are never part of the message.
        """
        if index < 0 or index >= len(self.inputs):
            return None
        payload = {
            "input": self.inputs[index].outpoint_dict(),
            "outputs": [output.to_dict() for output in self.outputs],
        }
        return _encode(payload)

    def get_raw_tx(self) -> bytes:
        payload = {
            "inputs": [tx_input.to_dict() for tx_input in self.inputs],
            "outputs": [output.to_dict() for output in self.outputs],
        }
        return _encode(payload)

    # -------------------------
    # ACCESSORS
    # -------------------------
    @property
    def hash(self) -> bytes:
        if self._hash is None:
            raise ValueError("Transaction has not been finalized")
        return self._hash

    @property
    def is_finalized(self) -> bool:
        return self._hash is not None

    def get_input(self, index: int) -> Optional[Input]:
        if 0 <= index < len(self.inputs):
            return self.inputs[index]
        return None

    def get_output(self, index: int) -> Optional[Output]:
        if 0 <= index < len(self.outputs):
            return self.outputs[index]
        return None

    def num_inputs(self) -> int:
        return len(self.inputs)

    def num_outputs(self) -> int:
        return len(self.outputs)

    def is_coinbase(self) -> bool:
        return not self.inputs

    def to_dict(self):
        return {
            "inputs": [tx_input.to_dict() for tx_input in self.inputs],
            "outputs": [output.to_dict() for output in self.outputs],
            "hash": self._hash.hex() if self._hash else None,
        }

    @staticmethod
    def from_dict(data: dict) -> "Transaction":
        """Rebuild a transaction; it is finalized again and the hash checked if one is given."""
        tx = Transaction(
            inputs=[Input.from_dict(i) for i in data.get("inputs", [])],
            outputs=[Output.from_dict(o) for o in data.get("outputs", [])],
        )
        expected = data.get("hash")
        if expected is not None:
            tx.finalize()
            if tx.hash.hex() != expected:
                raise ValueError(f"Hash mismatch: expected {expected}, got {tx.hash.hex()}")
        return tx

    def __repr__(self):
        tag = self._hash.hex()[:8] if self._hash else "unfinalized"
        return f"Tx({tag}, in={len(self.inputs)}, out={len(self.outputs)})"
