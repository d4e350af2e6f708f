import logging
import threading

from scroogecoin.config import MEMPOOL_MAX_SIZE

logger = logging.getLogger(__name__)


class Mempool:
    """
    Candidate transactions waiting for the next epoch.

    No validation against the UTXO pool happens here and no ordering beyond
    arrival order is applied; that is left to the TxHandler.
    """

    def __init__(self, max_size=MEMPOOL_MAX_SIZE):
        self._pending_txs = []
        self._seen_tx_hashes = set()  # Dedup tracking
        self._lock = threading.Lock()
        self.max_size = max_size

    def add_transaction(self, tx):
        """
        Adds a transaction to the pool if:
        - It has been finalized (its hash is fixed)
        - It is not a duplicate
        - The pool is not full
        """
        if not tx.is_finalized:
            logger.warning("Mempool: Unfinalized transaction rejected")
            return False

        tx_hash = tx.hash

        with self._lock:
            if tx_hash in self._seen_tx_hashes:
                logger.warning("Mempool: Duplicate transaction rejected %s", tx_hash.hex())
                return False

            if len(self._pending_txs) >= self.max_size:
                logger.warning("Mempool: Full, rejecting transaction")
                return False

            self._pending_txs.append(tx)
            self._seen_tx_hashes.add(tx_hash)

            return True

    def get_transactions_for_epoch(self):
        """
        Returns pending transactions in arrival order and clears the pool.
        """
        with self._lock:
            txs = self._pending_txs
            self._pending_txs = []
            self._seen_tx_hashes = set()
            return txs

    def remove_transaction(self, tx):
        """
        Remove a specific transaction from the pool.
        """
        tx_hash = tx.hash

        with self._lock:
            self._seen_tx_hashes.discard(tx_hash)
            self._pending_txs = [
                t for t in self._pending_txs
                if t.hash != tx_hash
            ]

    def __len__(self):
        with self._lock:
            return len(self._pending_txs)
