"""
authstore
=========
Persistent authentication state for messaging sessions.

Provides:
- Buffer-aware JSON codec shared with the multi-file on-disk layout
- Keyed object store with per-object-key locking
- Object storage backends (S3, local files, memory)
- Auth state adapter exposing creds + signal key store
"""

from .auth_state import (
    AuthenticationState,
    AuthStateHandle,
    SignalKeyStore,
    use_multi_file_auth_state,
    use_object_auth_state,
    use_s3_auth_state,
)
from .creds import AppStateSyncKeyData, AuthenticationCreds, KeyPair, SignedKeyPair, init_auth_creds
from .storage import KeyedObjectStore, S3Config

__all__ = [
    "AppStateSyncKeyData",
    "AuthStateHandle",
    "AuthenticationCreds",
    "AuthenticationState",
    "KeyPair",
    "KeyedObjectStore",
    "S3Config",
    "SignalKeyStore",
    "SignedKeyPair",
    "init_auth_creds",
    "use_multi_file_auth_state",
    "use_object_auth_state",
    "use_s3_auth_state",
]
