import copy
from typing import Dict, List, Optional

from scroogecoin.transaction import Output


class UTXO:
    """Identifier of one spendable output: (creating transaction hash, output index)."""

    __slots__ = ("_tx_hash", "_index")

    def __init__(self, tx_hash: bytes, index: int):
        self._tx_hash = bytes(tx_hash)
        self._index = index

    @property
    def tx_hash(self) -> bytes:
        return self._tx_hash

    @property
    def index(self) -> int:
        return self._index

    def __eq__(self, other):
        if not isinstance(other, UTXO):
            return NotImplemented
        return self._tx_hash == other._tx_hash and self._index == other._index

    def __hash__(self):
        return hash((self._tx_hash, self._index))

    def __lt__(self, other):
        if not isinstance(other, UTXO):
            return NotImplemented
        return (self._tx_hash, self._index) < (other._tx_hash, other._index)

    def __repr__(self):
        return f"UTXO({self._tx_hash.hex()[:8]}:{self._index})"


class UTXOPool:
    """
    Unspent outputs keyed by UTXO.

    Not synchronized: a pool has a single owner at a time.
    """

    def __init__(self, other: Optional["UTXOPool"] = None):
        # { UTXO: Output }
        self._entries: Dict[UTXO, Output] = {}
        if other is not None:
            self._entries = copy.deepcopy(other._entries)

    def copy(self) -> "UTXOPool":
        """Return an independent copy of the pool."""
        return UTXOPool(self)

    def add_utxo(self, utxo: UTXO, output: Output):
        self._entries[utxo] = output

    def remove_utxo(self, utxo: UTXO):
        self._entries.pop(utxo, None)

    def get_tx_output(self, utxo: UTXO) -> Optional[Output]:
        return self._entries.get(utxo)

    def contains(self, utxo: UTXO) -> bool:
        return utxo in self._entries

    def get_all_utxo(self) -> List[UTXO]:
        return sorted(self._entries)

    def total_value(self):
        return sum(output.value for output in self._entries.values())

    def __contains__(self, utxo):
        return self.contains(utxo)

    def __len__(self):
        return len(self._entries)

    def __repr__(self):
        return f"UTXOPool(size={len(self._entries)})"
