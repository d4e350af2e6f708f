import logging
from typing import Iterable, List, Set

from scroogecoin.config import VALUE_TOLERANCE
from scroogecoin.crypto import verify_signature
from scroogecoin.transaction import Input, Output, Transaction
from scroogecoin.utxo import UTXO, UTXOPool

logger = logging.getLogger(__name__)


def _claimed_utxo(tx_input: Input) -> UTXO:
    return UTXO(tx_input.prev_tx_hash, tx_input.output_index)


class TxHandler:
    """
    Validates transactions against a UTXO pool and accepts them in epochs.

    The handler owns its pool: the pool passed in is copied, and only
    handle_txs() mutates the copy.
    """

    def __init__(self, utxo_pool: UTXOPool):
        self._utxo_pool = UTXOPool(utxo_pool)

    @property
    def utxo_pool(self) -> UTXOPool:
        return self._utxo_pool

    # =========================================================================
    # VALIDATION
    # =========================================================================

    def is_valid_tx(self, tx: Transaction) -> bool:
        """
        True if:
        (1) every output claimed by tx is in the current pool,
        (2) every input signature verifies under the claimed output's address,
        (3) no UTXO is claimed more than once by tx,
        (4) every output value is non-negative,
        (5) the sum of input values is at least the sum of output values.
        Never mutates the pool. A transaction without a hash is never valid,
        since its outputs could not be keyed.
        """
        if not tx.is_finalized:
            logger.debug("Rejecting %r: not finalized", tx)
            return False

        seen: Set[UTXO] = set()
        input_sum = 0
        output_sum = 0

        for index, tx_input in enumerate(tx.inputs):
            utxo = _claimed_utxo(tx_input)

            spent_output = self._utxo_pool.get_tx_output(utxo)
            if spent_output is None:
                logger.debug("Rejecting %r: input %d claims unknown or spent %r", tx, index, utxo)
                return False

            message = tx.get_raw_data_to_sign(index)
            if not verify_signature(spent_output.address, message, tx_input.signature):
                logger.debug("Rejecting %r: bad signature on input %d", tx, index)
                return False

            if utxo in seen:
                logger.debug("Rejecting %r: %r claimed twice", tx, utxo)
                return False
            seen.add(utxo)

            input_sum += spent_output.value

        for index, output in enumerate(tx.outputs):
            if output.value < 0:
                logger.debug("Rejecting %r: output %d has negative value %s", tx, index, output.value)
                return False
            output_sum += output.value

        if input_sum < output_sum - VALUE_TOLERANCE:
            logger.debug("Rejecting %r: outputs %s exceed inputs %s", tx, output_sum, input_sum)
            return False

        return True

    # =========================================================================
    # EPOCH PROCESSING
    # =========================================================================

    def handle_txs(self, possible_txs: Iterable[Transaction]) -> List[Transaction]:
        """
        Accept transactions in the order given, one pass, no retries.

        Each candidate is checked against the pool as left by the candidates
        accepted before it, so of two transactions spending the same output
        only the first survives, and a transaction may spend outputs created
        earlier in the same batch.
        """
        accepted = []

        for tx in possible_txs:
            if not self.is_valid_tx(tx):
                continue

            accepted.append(tx)
            self._apply(tx)

        return accepted

    def _apply(self, tx: Transaction):
        tx_hash = tx.hash

        for tx_input in tx.inputs:
            self._utxo_pool.remove_utxo(_claimed_utxo(tx_input))

        for index, output in enumerate(tx.outputs):
            self._utxo_pool.add_utxo(UTXO(tx_hash, index), Output(output.value, output.address))
