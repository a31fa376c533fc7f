"""
authstore.creds
---------------
Credential and key-material records persisted by the auth state.

Every record round-trips through ``to_dict()`` / ``from_dict()`` using the
camelCase field names of the shared on-bucket format. Binary fields stay
``bytes`` in Python; the codec turns them into Buffer objects.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from .crypto import ed25519_sign, generate_registration_id, signal_pubkey, x25519_generate
from .utils import b64d, b64e, random_bytes


@dataclass
class KeyPair:
    public: bytes
    private: bytes

    def to_dict(self) -> Dict[str, Any]:
        return {"private": self.private, "public": self.public}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "KeyPair":
        return cls(public=bytes(data["public"]), private=bytes(data["private"]))

    @classmethod
    def generate(cls) -> "KeyPair":
        priv, pub = x25519_generate()
        return cls(public=pub, private=priv)


@dataclass
class SignedKeyPair:
    key_pair: KeyPair
    signature: bytes
    key_id: int

    def to_dict(self) -> Dict[str, Any]:
        return {"keyPair": self.key_pair, "signature": self.signature, "keyId": self.key_id}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SignedKeyPair":
        return cls(
            key_pair=KeyPair.from_dict(data["keyPair"]),
            signature=bytes(data["signature"]),
            key_id=int(data["keyId"]),
        )


def signed_key_pair(identity: KeyPair, key_id: int) -> SignedKeyPair:
    """New pre-key signed by the identity key over its 0x05-prefixed public key."""
    pre_key = KeyPair.generate()
    signature = ed25519_sign(identity.private, signal_pubkey(pre_key.public))
    return SignedKeyPair(key_pair=pre_key, signature=signature, key_id=key_id)


# wire name -> attribute name
_CREDS_FIELDS = {
    "noiseKey": "noise_key",
    "pairingEphemeralKeyPair": "pairing_ephemeral_key_pair",
    "signedIdentityKey": "signed_identity_key",
    "signedPreKey": "signed_pre_key",
    "registrationId": "registration_id",
    "advSecretKey": "adv_secret_key",
    "processedHistoryMessages": "processed_history_messages",
    "nextPreKeyId": "next_pre_key_id",
    "firstUnuploadedPreKeyId": "first_unuploaded_pre_key_id",
    "accountSyncCounter": "account_sync_counter",
    "accountSettings": "account_settings",
    "registered": "registered",
}
_KEY_PAIR_FIELDS = ("noiseKey", "pairingEphemeralKeyPair", "signedIdentityKey")


@dataclass
class AuthenticationCreds:
    """
    Long-term credentials of one linked device.

    Fields outside the fixed set (``me``, ``account``, ``platform``,
    ``routingInfo``, ...) are kept verbatim in ``extra`` so that a
    load/save cycle never drops data written by another client.
    """
    noise_key: KeyPair
    pairing_ephemeral_key_pair: KeyPair
    signed_identity_key: KeyPair
    signed_pre_key: SignedKeyPair
    registration_id: int
    adv_secret_key: str
    processed_history_messages: List[Any] = field(default_factory=list)
    next_pre_key_id: int = 1
    first_unuploaded_pre_key_id: int = 1
    account_sync_counter: int = 0
    account_settings: Dict[str, Any] = field(default_factory=lambda: {"unarchiveChats": False})
    registered: bool = False
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        d = {wire: getattr(self, attr) for wire, attr in _CREDS_FIELDS.items()}
        d.update(self.extra)
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AuthenticationCreds":
        kwargs: Dict[str, Any] = {}
        extra: Dict[str, Any] = {}
        for wire, value in data.items():
            attr = _CREDS_FIELDS.get(wire)
            if attr is None:
                extra[wire] = value
            elif wire in _KEY_PAIR_FIELDS:
                kwargs[attr] = KeyPair.from_dict(value)
            elif wire == "signedPreKey":
                kwargs[attr] = SignedKeyPair.from_dict(value)
            else:
                kwargs[attr] = value
        return cls(extra=extra, **kwargs)


def init_auth_creds() -> AuthenticationCreds:
    """Fresh credentials for a device that has never paired."""
    identity = KeyPair.generate()
    return AuthenticationCreds(
        noise_key=KeyPair.generate(),
        pairing_ephemeral_key_pair=KeyPair.generate(),
        signed_identity_key=identity,
        signed_pre_key=signed_key_pair(identity, 1),
        registration_id=generate_registration_id(),
        adv_secret_key=b64e(random_bytes(32)),
    )


# --------- app state sync keys ----------

def _to_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, dict):
        # 64-bit values serialized as {"low", "high", "unsigned"}
        return (int(value.get("high", 0)) << 32) | (int(value.get("low", 0)) & 0xFFFFFFFF)
    return int(value)


def _to_bytes(value: Any) -> Optional[bytes]:
    if value is None:
        return None
    if isinstance(value, str):
        return b64d(value)
    return bytes(value)


@dataclass
class AppStateSyncKeyFingerprint:
    raw_id: Optional[int] = None
    current_index: Optional[int] = None
    device_indexes: List[int] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"deviceIndexes": list(self.device_indexes)}
        if self.raw_id is not None:
            d["rawId"] = self.raw_id
        if self.current_index is not None:
            d["currentIndex"] = self.current_index
        return d

    @classmethod
    def from_object(cls, obj: Any) -> "AppStateSyncKeyFingerprint":
        if isinstance(obj, cls):
            return obj
        return cls(
            raw_id=_to_int(obj.get("rawId")),
            current_index=_to_int(obj.get("currentIndex")),
            device_indexes=[int(i) for i in obj.get("deviceIndexes") or []],
        )


@dataclass
class AppStateSyncKeyData:
    """Decoded ``app-state-sync-key`` record."""
    key_data: Optional[bytes] = None
    fingerprint: Optional[AppStateSyncKeyFingerprint] = None
    timestamp: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {}
        if self.key_data is not None:
            d["keyData"] = self.key_data
        if self.fingerprint is not None:
            d["fingerprint"] = self.fingerprint
        if self.timestamp is not None:
            d["timestamp"] = self.timestamp
        return d

    @classmethod
    def from_object(cls, obj: Any) -> "AppStateSyncKeyData":
        if isinstance(obj, cls):
            return obj
        if not isinstance(obj, dict):
            raise TypeError(f"AppStateSyncKeyData expects an object, got {type(obj).__name__}")
        fingerprint = obj.get("fingerprint")
        return cls(
            key_data=_to_bytes(obj.get("keyData")),
            fingerprint=AppStateSyncKeyFingerprint.from_object(fingerprint) if fingerprint is not None else None,
            timestamp=_to_int(obj.get("timestamp")),
        )
