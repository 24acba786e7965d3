from __future__ import annotations

import argparse
import json
import logging
import pathlib
import sys
from collections.abc import Sequence

from .cid import compute_cid
from .encode import encode_to_bytes, encode_to_text
from .exceptions import EncodeError
from .signers import FileSigner
from .value import CanonicalValue
from .verify import build_jwks_for_signers, sign_value, verify_value

logger = logging.getLogger(__name__)


def _load_document(path: str) -> CanonicalValue:
    raw = pathlib.Path(path).read_bytes()
    logger.debug("read %d bytes from %s", len(raw), path)
    return CanonicalValue.from_json(raw)


def _cmd_encode(args: argparse.Namespace) -> int:
    doc = _load_document(args.input)
    # Encode fully before touching the output.
    data = encode_to_bytes(doc)
    if args.output:
        pathlib.Path(args.output).write_bytes(data)
        logger.info("wrote %d canonical bytes to %s", len(data), args.output)
    else:
        # Raw bytes: no locale encoding or newline translation.
        sys.stdout.buffer.write(data)
        sys.stdout.buffer.flush()
    return 0


def _cmd_cid(args: argparse.Namespace) -> int:
    print(compute_cid(_load_document(args.input)))
    return 0


def _cmd_sign(args: argparse.Namespace) -> int:
    doc = _load_document(args.input)
    signer = FileSigner(args.seed)
    out: dict[str, object] = {}
    if args.emit_jwks:
        out["jwks"] = build_jwks_for_signers([signer])
    out["kid"] = signer.kid
    out["signature"] = sign_value(doc, signer)
    print(encode_to_text(out))
    return 0


def _cmd_verify(args: argparse.Namespace) -> int:
    doc = _load_document(args.input)
    jwks = json.loads(pathlib.Path(args.jwks).read_text("utf-8"))
    ok, reason = verify_value(doc, args.signature, jwks, args.kid)
    if args.json:
        print(encode_to_text({"ok": ok, "reason": reason}))
    else:
        print("OK" if ok else f"FAIL: {reason}")
    return 0 if ok else 1


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="canonjson", description="Canonical JSON encoder")
    ap.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = ap.add_subparsers(dest="command", required=True)

    p = sub.add_parser("encode", help="Write the canonical form of a JSON file")
    p.add_argument("input")
    p.add_argument("-o", "--output", help="Output file (defaults to stdout)")
    p.set_defaults(func=_cmd_encode)

    p = sub.add_parser("cid", help="Print the sha256 content identifier of a JSON file")
    p.add_argument("input")
    p.set_defaults(func=_cmd_cid)

    p = sub.add_parser("sign", help="Sign the canonical form of a JSON file")
    p.add_argument("input")
    p.add_argument("--seed", required=True, help="32-byte Ed25519 seed, base64url")
    p.add_argument("--emit-jwks", action="store_true")
    p.set_defaults(func=_cmd_sign)

    p = sub.add_parser("verify", help="Verify a signature over a JSON file")
    p.add_argument("input")
    p.add_argument("--jwks", required=True)
    p.add_argument("--kid", required=True)
    p.add_argument("--signature", required=True)
    p.add_argument("--json", action="store_true", help="Emit the result as JSON")
    p.set_defaults(func=_cmd_verify)
    return ap


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.func(args)
    except EncodeError as e:
        print(f"error: {e.reason.value}: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
