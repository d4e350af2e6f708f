import argparse
import logging

from scroogecoin import Ledger, Transaction, UTXO, UTXOPool, generate_keypair


logger = logging.getLogger(__name__)


def build_payment(signing_key, utxo, outputs):
    """Spend one UTXO owned by signing_key into the given (value, address) outputs."""
    tx = Transaction()
    tx.add_input(utxo.tx_hash, utxo.index)
    for value, address in outputs:
        tx.add_output(value, address)
    tx.sign_input(signing_key, 0)
    tx.finalize()
    return tx


def run_demo(seed_value):
    alice_sk, alice_pk = generate_keypair()
    _, bob_pk = generate_keypair()
    _, carol_pk = generate_keypair()

    logger.info("Alice Address: %s...", alice_pk.hex()[:10])
    logger.info("Bob Address: %s...", bob_pk.hex()[:10])
    logger.info("Carol Address: %s...", carol_pk.hex()[:10])

    # -------------------------------
    # Seed pool
    # -------------------------------

    logger.info("[1] Genesis: Alice owns one output worth %s", seed_value)

    genesis = Transaction.coinbase(seed_value, alice_pk)
    pool = UTXOPool()
    seed = UTXO(genesis.hash, 0)
    pool.add_utxo(seed, genesis.get_output(0))

    ledger = Ledger(pool)

    # -------------------------------
    # Competing spends
    # -------------------------------

    logger.info("[2] Alice pays Bob %s and, with the same output, Carol %s", seed_value, seed_value / 2)

    to_bob = build_payment(alice_sk, seed, [(seed_value, bob_pk)])
    to_carol = build_payment(alice_sk, seed, [(seed_value / 2, carol_pk)])

    ledger.submit(to_bob)
    ledger.submit(to_carol)

    # -------------------------------
    # Epoch
    # -------------------------------

    logger.info("[3] Processing epoch")

    accepted = ledger.process_epoch()
    for tx in accepted:
        logger.info("Accepted %r", tx)

    # -------------------------------
    # Final pool
    # -------------------------------

    logger.info("[4] Final pool")

    final_pool = ledger.utxo_pool
    for utxo in final_pool.get_all_utxo():
        output = final_pool.get_tx_output(utxo)
        logger.info("%r -> %s to %s...", utxo, output.value, output.address.hex()[:10])

    return accepted, final_pool


def main(argv=None):
    parser = argparse.ArgumentParser(description="ScroogeCoin double-spend demo")
    parser.add_argument("--seed-value", type=float, default=10.0, help="Value of Alice's starting output")
    parser.add_argument("--log-level", default="INFO", help="Logging level (DEBUG shows rejection reasons)")
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))
    run_demo(args.seed_value)


if __name__ == "__main__":
    main()
