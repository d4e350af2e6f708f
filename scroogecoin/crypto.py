from nacl.signing import SigningKey, VerifyKey
from nacl.exceptions import BadSignatureError

from scroogecoin.config import SIGNATURE_SIZE


def generate_keypair():
    """Returns (signing_key, address) where address is the raw verify key bytes."""
    sk = SigningKey.generate()
    return sk, sk.verify_key.encode()


def sign_message(signing_key: SigningKey, message: bytes) -> bytes:
    return signing_key.sign(message).signature


def verify_signature(address: bytes, message: bytes, signature: bytes) -> bool:
    """
    Check an Ed25519 signature over message under the given address.

    A missing, truncated or non-matching signature returns False.
    A malformed address is not a signature failure: PyNaCl's ValueError or
    TypeError is left to the caller.
    """
    if not signature or len(signature) != SIGNATURE_SIZE:
        return False

    verify_key = VerifyKey(bytes(address))

    try:
        verify_key.verify(message, bytes(signature))
        return True
    except BadSignatureError:
        return False
