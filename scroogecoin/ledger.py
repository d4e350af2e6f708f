import logging
import threading
from typing import Iterable, List, Optional

from .handler import TxHandler
from .mempool import Mempool
from .transaction import Transaction
from .utxo import UTXOPool

logger = logging.getLogger(__name__)


class Ledger:
    """
    Thread-safe front for a TxHandler.

    TxHandler and UTXOPool carry no locking of their own; the ledger holds
    one exclusive lock for every validation and for each whole epoch.
    """

    def __init__(self, utxo_pool: UTXOPool, mempool: Optional[Mempool] = None):
        self.handler = TxHandler(utxo_pool)
        self.mempool = mempool if mempool is not None else Mempool()
        self.epoch = 0
        self._lock = threading.RLock()

    @property
    def utxo_pool(self) -> UTXOPool:
        """
        Returns a snapshot of the current pool.
        """
        with self._lock:
            return self.handler.utxo_pool.copy()

    def submit(self, tx: Transaction) -> bool:
        return self.mempool.add_transaction(tx)

    def is_valid_tx(self, tx: Transaction) -> bool:
        with self._lock:
            return self.handler.is_valid_tx(tx)

    def process_epoch(self, candidates: Optional[Iterable[Transaction]] = None) -> List[Transaction]:
        """
        Runs one epoch over the given candidates, or over the drained mempool
        when none are given. Returns the accepted transactions.
        """
        with self._lock:
            if candidates is None:
                candidates = self.mempool.get_transactions_for_epoch()
            candidates = list(candidates)

            accepted = self.handler.handle_txs(candidates)
            self.epoch += 1

            logger.info(
                "Epoch %d: accepted %d of %d transaction(s), pool size %d, pool value %s",
                self.epoch,
                len(accepted),
                len(candidates),
                len(self.handler.utxo_pool),
                self.handler.utxo_pool.total_value(),
            )
            return accepted
