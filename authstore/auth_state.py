"""
authstore.auth_state
--------------------
Auth state for a messaging session, persisted through a KeyedObjectStore.

    handle = await use_s3_auth_state(S3Config(bucket="sessions", prefix="bot-1/"))
    handle.state.creds            # AuthenticationCreds, held in memory
    await handle.state.keys.get("pre-key", ["1", "2"])
    await handle.state.keys.set({"pre-key": {"1": record, "2": None}})
    await handle.save_creds()     # the caller decides when creds are persisted

Layout: ``creds.json`` for credentials, ``<category>-<id>.json`` per signal key.
Signal keys are not cached; every get/set goes to the store.
"""

from __future__ import annotations
import asyncio
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Optional, Union
from .creds import AppStateSyncKeyData, AuthenticationCreds, init_auth_creds
from .logger import get_logger
from .storage import FileObjectBackend, KeyedLock, KeyedObjectStore, S3Config
from .storage.keys import creds_key, signal_key

log = get_logger("authstore.auth_state")

APP_STATE_SYNC_KEY = "app-state-sync-key"


class SignalKeyStore:
    def __init__(self, store: KeyedObjectStore):
        self.store = store

    async def get(self, key_type: str, ids: Iterable[Any]) -> Dict[Any, Any]:
        """Read all ``ids`` of one category concurrently; missing ones map to None."""

        async def _read(key_id):
            value = await self.store.read(signal_key(key_type, key_id))
            if key_type == APP_STATE_SYNC_KEY and value is not None:
                value = AppStateSyncKeyData.from_object(value)
            return key_id, value

        pairs = await asyncio.gather(*(_read(key_id) for key_id in ids))
        return dict(pairs)

    async def set(self, data: Mapping[str, Mapping[Any, Any]]) -> None:
        """Write present values and delete None ones, all at once.

        Waits for every operation, then re-raises the first write failure.
        """
        tasks = []
        for category, entries in data.items():
            for key_id, value in entries.items():
                key = signal_key(category, key_id)
                if value is not None:
                    tasks.append(self.store.write(value, key))
                else:
                    tasks.append(self.store.remove(key))

        results = await asyncio.gather(*tasks, return_exceptions=True)
        errors = [r for r in results if isinstance(r, BaseException)]
        if errors:
            log.error(f"{len(errors)} of {len(tasks)} key operations failed")
            raise errors[0]


@dataclass
class AuthenticationState:
    creds: AuthenticationCreds
    keys: SignalKeyStore


@dataclass
class AuthStateHandle:
    state: AuthenticationState
    store: KeyedObjectStore

    async def save_creds(self) -> None:
        await self.store.write(self.state.creds, creds_key())

    async def close(self) -> None:
        await self.store.close()


async def use_object_auth_state(store: KeyedObjectStore) -> AuthStateHandle:
    stored = await store.read(creds_key())
    if stored is None:
        log.info(f"no credentials at {store.object_key(creds_key())}, initializing new ones")
        creds = init_auth_creds()
    else:
        creds = AuthenticationCreds.from_dict(stored)

    return AuthStateHandle(
        state=AuthenticationState(creds=creds, keys=SignalKeyStore(store)),
        store=store,
    )


async def use_s3_auth_state(
    config: Union[S3Config, Dict[str, Any]],
    session: Optional[Any] = None,
    lock: Optional[KeyedLock] = None,
) -> AuthStateHandle:
    """Auth state stored as JSON objects in an S3 bucket under ``config.prefix``."""
    from .storage.providers.s3_provider import S3ObjectBackend

    if not isinstance(config, S3Config):
        config = S3Config.from_dict(config)
    backend = S3ObjectBackend(config, session=session)
    store = KeyedObjectStore(backend, prefix=config.prefix, key_encoding=config.key_encoding, lock=lock)
    return await use_object_auth_state(store)


async def use_multi_file_auth_state(folder: str, lock: Optional[KeyedLock] = None) -> AuthStateHandle:
    """Auth state stored as one JSON file per key inside ``folder``."""
    store = KeyedObjectStore(FileObjectBackend(folder), lock=lock)
    return await use_object_auth_state(store)
