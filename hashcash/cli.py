"""hashcash.cli

Command line interface entry point for hashcash.

Design constraints:
- argparse-based.
- Lazy imports: do not import heavy dependencies at parse time.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hashcash.core.config import Config

EXIT_OK = 0
EXIT_REJECTED = 1
EXIT_USAGE = 2
EXIT_LEDGER = 3


@dataclass(frozen=True)
class CliContext:
    repo_root: Path
    config_path: Path | None = None


def _repo_root_from_cwd() -> Path:
    return Path.cwd()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hashcash",
        description="Mint and verify hashcash proof-of-work stamps.",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print version and exit.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML settings file (default: config/default.yaml).",
    )

    sub = parser.add_subparsers(dest="command")

    p_mint = sub.add_parser("mint", help="Mint a stamp for a resource")
    p_mint.add_argument("resource")
    p_mint.add_argument("--bits", type=int, default=None, help="Override configured difficulty.")
    p_mint.add_argument(
        "--max-attempts",
        type=int,
        default=None,
        help="Give up after this many hashes (default: unbounded).",
    )

    p_verify = sub.add_parser("verify", help="Verify a stamp and mark it spent")
    p_verify.add_argument("stamp")
    p_verify.add_argument("--resource", default=None, help="Only accept stamps for this resource.")
    p_verify.add_argument("--bits", type=int, default=None, help="Override configured difficulty.")

    p_score = sub.add_parser("score", help="Print the leading zero bits of a stamp")
    p_score.add_argument("stamp")

    sub.add_parser("purge", help="Drop spent fingerprints older than the expiry horizon")

    p_api = sub.add_parser("api", help="Start FastAPI server")
    p_api.add_argument("--host", default=None)
    p_api.add_argument("--port", type=int, default=None)

    return parser


def _print_version() -> None:
    from hashcash import __version__

    print(f"hashcash v{__version__}")


def _load_config(ctx: CliContext) -> Config:
    from hashcash.core.config import Config

    if ctx.config_path is not None:
        return Config.from_yaml(ctx.config_path)
    cfg_path = ctx.repo_root / "config" / "default.yaml"
    return Config.from_yaml(cfg_path) if cfg_path.exists() else Config()


def _cmd_mint(ctx: CliContext, args: argparse.Namespace) -> int:
    from hashcash.core.exceptions import InvalidConfigError, SolutionFail
    from hashcash.core.ledger import MemoryLedger
    from hashcash.core.minter import Minter

    config = _load_config(ctx)
    if args.bits is not None:
        config.stamp.bits = args.bits

    try:
        # Minting never touches the ledger.
        minter = Minter(args.resource, config.hashcash_config(MemoryLedger()))
    except InvalidConfigError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_USAGE

    try:
        if args.max_attempts is None:
            while True:
                try:
                    stamp = minter.attempt()
                    break
                except SolutionFail:
                    continue
        else:
            stamp = minter.solve(args.max_attempts)
    except SolutionFail:
        print(f"no stamp after {minter.attempts} attempts", file=sys.stderr)
        return EXIT_REJECTED

    print(stamp)
    return EXIT_OK


def _cmd_verify(ctx: CliContext, args: argparse.Namespace) -> int:
    from hashcash.core.exceptions import InvalidConfigError, LedgerError, StampError
    from hashcash.core.ledger import open_ledger
    from hashcash.core.policy import ExactResource
    from hashcash.core.verifier import Verifier

    config = _load_config(ctx)
    if args.bits is not None:
        config.stamp.bits = args.bits

    policy = ExactResource(args.resource) if args.resource is not None else None
    ledger = open_ledger(config.ledger)
    try:
        verifier = Verifier(config.hashcash_config(ledger), policy)
        verifier.verify(args.stamp)
    except InvalidConfigError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_USAGE
    except StampError as e:
        print(f"rejected: {e.code}")
        return EXIT_REJECTED
    except LedgerError as e:
        print(f"ledger error: {e}", file=sys.stderr)
        return EXIT_LEDGER
    finally:
        close = getattr(ledger, "close", None)
        if close is not None:
            close()

    print("accepted")
    return EXIT_OK


def _cmd_score(ctx: CliContext, args: argparse.Namespace) -> int:
    from hashcash.core.difficulty import fingerprint, score

    print(f"{score(args.stamp)} {fingerprint(args.stamp)}")
    return EXIT_OK


def _cmd_purge(ctx: CliContext, args: argparse.Namespace) -> int:
    from hashcash.core.ledger import open_ledger
    from hashcash.core.time import utc_now

    config = _load_config(ctx)
    ledger = open_ledger(config.ledger)
    purge = getattr(ledger, "purge", None)
    if purge is None:
        print(f"ledger backend {config.ledger.backend!r} cannot purge", file=sys.stderr)
        return EXIT_USAGE

    try:
        removed = purge(utc_now() - config.stamp.expiry)
    finally:
        close = getattr(ledger, "close", None)
        if close is not None:
            close()

    print(f"purged {removed}")
    return EXIT_OK


def _cmd_api(ctx: CliContext, args: argparse.Namespace) -> int:
    config = _load_config(ctx)

    host = args.host or config.api.host
    port = args.port or config.api.port

    import uvicorn

    uvicorn.run("api.main:app", host=host, port=port, reload=False)
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        _print_version()
        return EXIT_OK

    if not args.command:
        parser.print_help()
        return EXIT_USAGE

    ctx = CliContext(repo_root=_repo_root_from_cwd(), config_path=args.config)

    from hashcash.core.exceptions import ConfigError
    from hashcash.core.logs import configure_logging

    try:
        configure_logging(_load_config(ctx).logging)
    except ConfigError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_USAGE

    dispatch: dict[str, Callable[[CliContext, argparse.Namespace], int]] = {
        "mint": _cmd_mint,
        "verify": _cmd_verify,
        "score": _cmd_score,
        "purge": _cmd_purge,
        "api": _cmd_api,
    }

    fn = dispatch.get(str(args.command))
    if fn is None:
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return EXIT_USAGE

    return int(fn(ctx, args))


if __name__ == "__main__":
    raise SystemExit(main())
