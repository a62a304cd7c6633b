#!/usr/bin/env python3
"""
Command-line surface for the eID Easy signing client.

    eideasy-sign upload a.pdf b.pdf --client-id ID --secret SECRET
    eideasy-sign download --client-id ID --secret SECRET --doc-id DOC --output-path out.asice
    eideasy-sign queue create --client-id ID --secret SECRET --doc-id DOC --email owner@example.com
    eideasy-sign queue push -i QUEUE -s QUEUE_SECRET --name "Jane Doe" --email jane@example.com
    eideasy-sign queue run -i QUEUE -s QUEUE_SECRET
"""
import argparse
import json
import logging
import os
import sys
from typing import List, Optional, Tuple

from .errors import EIDEasyError, UsageError
from .esign_eideasy import EIDEasyClient, get_eideasy_client
from .models import Signer
from .settings import settings

logger = logging.getLogger(__name__)


def _print_json(obj: object) -> None:
    """Print JSON to stdout."""
    print(json.dumps(obj, indent=2, sort_keys=True, default=str))


def _client(args: argparse.Namespace) -> EIDEasyClient:
    return get_eideasy_client(base_url=getattr(args, "base_url", None))


def _credentials(args: argparse.Namespace) -> Tuple[str, str]:
    """Resolve client id/secret from flags, falling back to the environment."""
    client_id, secret = args.client_id, args.secret
    if not (client_id and secret) and settings.has_client_credentials():
        client_id = client_id or settings.EIDEASY_CLIENT_ID
        secret = secret or settings.EIDEASY_SECRET
    missing = [flag for flag, value in (("--client-id", client_id), ("--secret", secret)) if not value]
    if missing:
        raise UsageError(f"Missing required option(s): {', '.join(missing)}")
    return client_id, secret


def cmd_upload(args: argparse.Namespace) -> int:
    """Upload files for signing and print the signing URL."""
    if not args.files:
        raise UsageError("No files specified.")
    client_id, secret = _credentials(args)

    c = _client(args)
    res = c.upload(client_id, secret, args.files)
    _print_json(res.model_dump())
    print(c.signing_url(client_id, res.doc_id))
    return 0


def cmd_download(args: argparse.Namespace) -> int:
    """Download a signed file and save it to --output-path."""
    client_id, secret = _credentials(args)

    res = _client(args).download(client_id, secret, args.doc_id, args.output_path)
    out = res.summary()
    out["saved_to"] = os.path.abspath(args.output_path)
    _print_json(out)
    return 0


def cmd_queue_create(args: argparse.Namespace) -> int:
    """Create a signing queue for an uploaded document."""
    client_id, secret = _credentials(args)

    res = _client(args).create_queue(client_id, secret, args.doc_id, args.email)
    _print_json(res.model_dump())
    return 0


def cmd_queue_push(args: argparse.Namespace) -> int:
    """Add one signer to a queue."""
    signer = Signer(name=args.name, email=args.email)
    _print_json(_client(args).push_signers(args.queue_id, args.queue_secret, [signer]))
    return 0


def cmd_queue_run(args: argparse.Namespace) -> int:
    """Trigger queue execution. Returns as soon as the provider answers."""
    _print_json(_client(args).run_queue(args.queue_id, args.queue_secret))
    return 0


def _add_client_credentials(p: argparse.ArgumentParser) -> None:
    p.add_argument("--client-id", default=None, help="eID Easy client id (or EIDEASY_CLIENT_ID)")
    p.add_argument("--secret", default=None, help="eID Easy client secret (or EIDEASY_SECRET)")


def _add_queue_credentials(p: argparse.ArgumentParser) -> None:
    p.add_argument("-i", "--queue-id", required=True, help="Signing queue id")
    p.add_argument(
        "-s", "--queue-secret", required=True, help="Signing queue secret (sent as bearer token)"
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    p = argparse.ArgumentParser(prog="eideasy-sign", description="eID Easy signing client")
    p.add_argument(
        "--base-url", default=None, help="API host (default: EIDEASY_BASE_URL or id.eideasy.com)"
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="cmd")

    up = sub.add_parser("upload", help="Upload documents for signing")
    up.add_argument("files", nargs="*", help="Paths to local files")
    _add_client_credentials(up)
    up.set_defaults(func=cmd_upload)

    dl = sub.add_parser("download", help="Download a signed document")
    _add_client_credentials(dl)
    dl.add_argument("--doc-id", required=True, help="Document id returned by upload")
    dl.add_argument("--output-path", required=True, help="Where to save the signed file")
    dl.set_defaults(func=cmd_download)

    queue = sub.add_parser("queue", help="Manage signing queues")
    qsub = queue.add_subparsers(dest="queue_cmd")

    qc = qsub.add_parser("create", help="Create a signing queue")
    _add_client_credentials(qc)
    qc.add_argument("--doc-id", required=True, help="Document id returned by upload")
    qc.add_argument("--email", required=True, help="Queue owner email")
    qc.set_defaults(func=cmd_queue_create)

    qp = qsub.add_parser("push", help="Add a signer to a queue")
    _add_queue_credentials(qp)
    qp.add_argument("--name", required=True, help="Signer name")
    qp.add_argument("--email", required=True, help="Signer email")
    qp.set_defaults(func=cmd_queue_push)

    qr = qsub.add_parser("run", help="Run a signing queue")
    _add_queue_credentials(qr)
    qr.set_defaults(func=cmd_queue_run)

    return p


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else getattr(logging, settings.LOG_LEVEL, logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    func = getattr(args, "func", None)
    if func is None:
        parser.print_help(sys.stderr)
        print("error: no command given", file=sys.stderr)
        return 2

    try:
        return func(args)
    except UsageError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    except EIDEasyError as e:
        logger.debug("command failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
