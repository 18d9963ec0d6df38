from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from fastapi import Request

from hashcash.core.config import Config
from hashcash.core.ledger import Ledger, open_ledger
from hashcash.core.models import HashcashConfig


@lru_cache
def _repo_root() -> Path:
    # Assume running from repo root (uvicorn started there). Fallback to parent of this file.
    here = Path(__file__).resolve()
    for p in [Path.cwd(), here.parent.parent]:
        if (p / "config" / "default.yaml").exists():
            return p
    return Path.cwd()


@lru_cache
def _load_config() -> Config:
    root = _repo_root()
    if (root / "config" / "default.yaml").exists():
        return Config.from_repo_defaults(root)
    return Config()


def get_config(request: Request) -> Config:
    cfg = getattr(request.app.state, "config", None)
    return cfg or _load_config()


def get_ledger(request: Request) -> Ledger:
    ledger = getattr(request.app.state, "ledger", None)
    if ledger is None:
        ledger = open_ledger(get_config(request).ledger)
        request.app.state.ledger = ledger
    return ledger


def get_hashcash_config(request: Request) -> HashcashConfig:
    return get_config(request).hashcash_config(get_ledger(request))
