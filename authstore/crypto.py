"""
authstore.crypto
----------------
Key generation for fresh session credentials:

- Curve25519 (X25519) key pairs for noise, identity and pre-keys
- Signal-style public keys (0x05 type byte + 32 raw bytes)
- Pre-key signatures and registration ids

Signatures use Ed25519 keyed by the identity private bytes. They are
verifiable with ed25519_verify() but are not XEdDSA signatures.
"""

from __future__ import annotations
from typing import Tuple
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric import ed25519, x25519
import secrets

KEY_BUNDLE_TYPE = b"\x05"


# --------- X25519 ----------
def x25519_generate() -> Tuple[bytes, bytes]:
    """Return (private_raw, public_raw)."""
    sk = x25519.X25519PrivateKey.generate()
    return sk.private_bytes_raw(), sk.public_key().public_bytes_raw()

def signal_pubkey(pub_raw: bytes) -> bytes:
    return pub_raw if len(pub_raw) == 33 else KEY_BUNDLE_TYPE + pub_raw


# --------- Ed25519 (sign/verify) ----------
def ed25519_sign(priv_raw: bytes, data: bytes) -> bytes:
    sk = ed25519.Ed25519PrivateKey.from_private_bytes(priv_raw)
    return sk.sign(data)

def ed25519_public(priv_raw: bytes) -> bytes:
    return ed25519.Ed25519PrivateKey.from_private_bytes(priv_raw).public_key().public_bytes_raw()

def ed25519_verify(pub_raw: bytes, sig: bytes, data: bytes) -> bool:
    try:
        ed25519.Ed25519PublicKey.from_public_bytes(pub_raw).verify(sig, data)
        return True
    except (InvalidSignature, ValueError):
        return False


# --------- Registration ----------
def generate_registration_id() -> int:
    # 14-bit id, as the protocol expects
    return int.from_bytes(secrets.token_bytes(2), "big") & 16383
