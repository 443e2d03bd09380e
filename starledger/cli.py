import argparse
import json
import os
import sys

from . import crypto
from .chain import Chain, challenge_message
from .config import configure_logging
from .errors import ClaimRejected
from .wallet import Wallet


def _load_wallet(path: str) -> Wallet:
    try:
        return Wallet.load(path)
    except FileNotFoundError as exc:
        raise SystemExit(f"Wallet not found: {path}") from exc
    except (ValueError, KeyError) as exc:
        raise SystemExit(f"Invalid wallet file {path}: {exc}") from exc


def _load_json_dict(value: str) -> dict:
    try:
        if os.path.exists(value):
            with open(value, "r", encoding="utf-8") as f:
                data = json.load(f)
        else:
            data = json.loads(value)
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise SystemExit("Expected JSON object")
    return data


def cmd_create_wallet(args: argparse.Namespace) -> None:
    wallet = Wallet.create()
    path = args.wallet
    dir_name = os.path.dirname(path)
    if dir_name:
        os.makedirs(dir_name, exist_ok=True)
    wallet.save(path)
    print("Wallet created")
    print("Address:", wallet.address)


def cmd_address(args: argparse.Namespace) -> None:
    wallet = _load_wallet(args.wallet)
    print(wallet.address)


def cmd_challenge(args: argparse.Namespace) -> None:
    print(challenge_message(args.address))


def cmd_sign(args: argparse.Namespace) -> None:
    wallet = _load_wallet(args.wallet)
    print(wallet.sign_message(args.message))


def cmd_verify(args: argparse.Namespace) -> None:
    ok = crypto.verify_message(args.message, args.address, args.signature)
    print("valid" if ok else "invalid")


def cmd_demo(args: argparse.Namespace) -> None:
    chain = Chain()
    wallet = _load_wallet(args.wallet) if args.wallet else Wallet.create()
    star = _load_json_dict(args.star) if args.star else {"story": args.story}

    message = chain.request_challenge(wallet.address)
    signature = wallet.sign_message(message)
    try:
        block = chain.submit_claim(wallet.address, message, signature, star)
    except ClaimRejected as exc:
        raise SystemExit(f"Claim rejected: {exc}") from exc

    print("Address:", wallet.address)
    print("Challenge:", message)
    print("Block hash:", block.hash)
    print(json.dumps(chain.dump_chain(), indent=2))
    print("Stars:", json.dumps(chain.get_payloads_by_address(wallet.address)))
    errors = chain.validate_chain()
    print("Validation:", "ok" if not errors else "; ".join(errors))


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="starledger")
    p.add_argument("--log-level", help="overrides STARLEDGER_LOG_LEVEL")
    sub = p.add_subparsers(dest="cmd", required=True)

    s = sub.add_parser("create-wallet")
    s.add_argument("--wallet", required=True)
    s.set_defaults(func=cmd_create_wallet)

    s = sub.add_parser("address")
    s.add_argument("--wallet", required=True)
    s.set_defaults(func=cmd_address)

    s = sub.add_parser("challenge", help="print an ownership challenge for offline signing with `sign`")
    s.add_argument("--address", required=True)
    s.set_defaults(func=cmd_challenge)

    s = sub.add_parser("sign", help="sign a challenge with a wallet")
    s.add_argument("--wallet", required=True)
    s.add_argument("--message", required=True)
    s.set_defaults(func=cmd_sign)

    s = sub.add_parser("verify")
    s.add_argument("--address", required=True)
    s.add_argument("--message", required=True)
    s.add_argument("--signature", required=True)
    s.set_defaults(func=cmd_verify)

    s = sub.add_parser("demo", help="register a star on a fresh in-memory chain")
    s.add_argument("--wallet")
    s.add_argument("--story", default="Found star using https://www.google.com/sky/")
    s.add_argument("--star", help="JSON object or file path, overrides --story")
    s.set_defaults(func=cmd_demo)

    return p


def main(argv=None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv if argv is not None else sys.argv[1:])
    configure_logging(args.log_level)
    args.func(args)


if __name__ == "__main__":
    main()
