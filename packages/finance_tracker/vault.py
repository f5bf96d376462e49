"""Local account vault: saved account names and numbers.

The vault keeps a list of :class:`~finance_tracker.models.Account` records
behind a narrow byte-storage adapter (``get``/``set``). The stored blob is
base64 over JSON. That encoding is obfuscation only and offers no protection
against anyone who can read the storage.

Storage adapters:

- :class:`MemoryStorage`: in-process, for tests and short-lived sessions.
- :class:`FileStorage`: a single file, written atomically (``.tmp`` then
  ``os.replace``). Default location ``~/.finance_tracker/accounts.dat``,
  overridable with ``FINANCE_TRACKER_VAULT_PATH``.
"""

from __future__ import annotations

import base64
import binascii
import contextlib
import os
import time
from collections.abc import Callable
from os import PathLike
from pathlib import Path
from typing import Protocol

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from .logging_setup import get_logger
from .models import Account

_logger = get_logger("finance_tracker.vault")

MASK = "••••"


class StorageAdapter(Protocol):
    def get(self) -> bytes | None: ...

    def set(self, data: bytes) -> None: ...


class MemoryStorage:
    def __init__(self, data: bytes | None = None) -> None:
        self._data = data

    def get(self) -> bytes | None:
        return self._data

    def set(self, data: bytes) -> None:
        self._data = data


def default_vault_path() -> Path:
    """Return the vault file path, honoring ``FINANCE_TRACKER_VAULT_PATH``."""

    env = os.getenv("FINANCE_TRACKER_VAULT_PATH")
    if env and env.strip():
        return Path(env.strip()).expanduser().resolve()
    return Path.home() / ".finance_tracker" / "accounts.dat"


class FileStorage:
    def __init__(self, path: str | PathLike[str] | None = None) -> None:
        self.path = Path(path) if path is not None else default_vault_path()

    def get(self) -> bytes | None:
        try:
            return self.path.read_bytes()
        except FileNotFoundError:
            return None

    def set(self, data: bytes) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            tmp.write_bytes(data)
            os.replace(tmp, self.path)
        except Exception:
            with contextlib.suppress(FileNotFoundError):
                tmp.unlink()
            raise


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------


class _StoredAccount(BaseModel):
    model_config = ConfigDict(strict=True, extra="ignore")

    id: int
    name: str
    number: str


_STORED_LIST = TypeAdapter(list[_StoredAccount])


def encode_accounts(accounts: list[Account]) -> bytes:
    payload = _STORED_LIST.dump_json(
        [_StoredAccount(id=a.id, name=a.name, number=a.number) for a in accounts]
    )
    return base64.b64encode(payload)


def decode_accounts(blob: bytes) -> list[Account]:
    """Decode a stored blob. Raises ``ValueError`` when it is not a valid vault."""

    try:
        payload = base64.b64decode(blob, validate=True)
        stored = _STORED_LIST.validate_json(payload)
    except (binascii.Error, ValidationError) as exc:
        raise ValueError(f"invalid vault data: {exc}") from exc
    return [Account(id=s.id, name=s.name, number=s.number) for s in stored]


def mask_account_number(number: str) -> str:
    """Hide all but the last four characters of ``number``."""

    if len(number) <= 4:
        return number
    return MASK + number[-4:]


# ---------------------------------------------------------------------------
# Vault
# ---------------------------------------------------------------------------


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class AccountVault:
    """List, add and remove saved accounts.

    A blob that cannot be decoded is logged and treated as an empty vault; the
    next write replaces it.
    """

    def __init__(
        self,
        storage: StorageAdapter | None = None,
        *,
        clock: Callable[[], int] = _now_ms,
    ) -> None:
        self._storage = storage if storage is not None else FileStorage()
        self._clock = clock

    def _load(self) -> list[Account]:
        blob = self._storage.get()
        if not blob:
            return []
        try:
            return decode_accounts(blob)
        except ValueError:
            _logger.warning("vault data could not be decoded; starting empty", exc_info=True)
            return []

    def _save(self, accounts: list[Account]) -> None:
        self._storage.set(encode_accounts(accounts))

    def list(self) -> list[Account]:
        return self._load()

    def add(self, name: str, number: str) -> Account | None:
        """Save a new account. Blank names or numbers are ignored (returns ``None``)."""

        name = name.strip()
        number = number.strip()
        if not name or not number:
            return None
        accounts = self._load()
        new_id = self._clock()
        if accounts:
            # Ids are millisecond timestamps; keep them unique within the vault.
            new_id = max(new_id, max(a.id for a in accounts) + 1)
        account = Account(id=new_id, name=name, number=number)
        self._save([*accounts, account])
        _logger.info("added account id=%d", account.id)
        return account

    def remove(self, account_id: int) -> None:
        accounts = self._load()
        kept = [a for a in accounts if a.id != account_id]
        if len(kept) == len(accounts):
            _logger.debug("remove: no account with id=%d", account_id)
            return
        self._save(kept)
        _logger.info("removed account id=%d", account_id)


__all__ = [
    "AccountVault",
    "FileStorage",
    "MemoryStorage",
    "StorageAdapter",
    "decode_accounts",
    "default_vault_path",
    "encode_accounts",
    "mask_account_number",
]
