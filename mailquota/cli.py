"""Print the quota usage of a mail user, computed from disk.

Usage:
    mailquota-du alice
    mailquota-du alice --resource STORAGE_BYTES
    mailquota-du alice --human

Exit codes: 0 on success, 1 on a filesystem or configuration error, 2 for
an unknown resource or bad arguments. STORAGE is reported in kilobytes.
"""

from __future__ import annotations

import argparse
import sys

from mailquota.main import setup_logging
from mailquota.services import get_quota_resource, init_services, open_quota_root
from mailquota.services.dirsize_backend import (
    QUOTA_NAME_STORAGE_BYTES,
    QUOTA_NAME_STORAGE_KILOBYTES,
    QuotaConfigError,
    QuotaGetResult,
)


def format_bytes(num: int) -> str:
    units = ["B", "KB", "MB", "GB", "TB", "PB"]
    x = float(num)
    for u in units:
        if x < 1024.0 or u == units[-1]:
            return f"{x:.2f} {u}" if u != "B" else f"{int(x)} {u}"
        x /= 1024.0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="mailquota-du", description=__doc__.splitlines()[0])
    parser.add_argument("user", help="Mail user whose namespaces are scanned")
    parser.add_argument(
        "--resource",
        default=QUOTA_NAME_STORAGE_BYTES,
        help=f"Quota resource name (default: {QUOTA_NAME_STORAGE_BYTES})",
    )
    parser.add_argument("--human", action="store_true", help="Print a human readable size")
    args = parser.parse_args(argv)

    setup_logging()
    init_services()

    try:
        backend = open_quota_root(args.user)
    except QuotaConfigError as e:
        print(f"mailquota-du: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"mailquota-du: {e}", file=sys.stderr)
        return 2

    try:
        res = get_quota_resource(backend, args.resource)
    finally:
        backend.deinit()

    if res.result == QuotaGetResult.UNKNOWN_RESOURCE:
        print(f"mailquota-du: {res.error}: {args.resource}", file=sys.stderr)
        return 2
    if res.result == QuotaGetResult.INTERNAL_ERROR:
        print(f"mailquota-du: {res.error}", file=sys.stderr)
        return 1

    if args.human:
        kilobytes = args.resource.lower() == QUOTA_NAME_STORAGE_KILOBYTES.lower()
        print(format_bytes(res.value * 1024 if kilobytes else res.value))
    else:
        print(res.value)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
