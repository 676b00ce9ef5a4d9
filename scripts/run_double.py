#!/usr/bin/env python3
"""Run the CloudAPI double in the foreground with a seeded in-memory store."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Ensure repository root is importable when running from a checkout.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


def main() -> None:
    from cloudapi_double.shared import config

    parser = argparse.ArgumentParser(description="Run the CloudAPI double")
    parser.add_argument("--account", help="Account name in every path (or use CLOUDAPI_DOUBLE_ACCOUNT)")
    parser.add_argument("--host", help="Bind address (or use CLOUDAPI_DOUBLE_HOST)")
    parser.add_argument("--port", type=int, help="Bind port, 0 to auto-assign (or use CLOUDAPI_DOUBLE_PORT)")
    parser.add_argument("--log-level", help="Logging level (or use CLOUDAPI_DOUBLE_LOG_LEVEL)")
    args = parser.parse_args()

    logging.basicConfig(
        level=(args.log_level or config.LOG_LEVEL()).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    from cloudapi_double.backends.http.server import CloudAPIDoubleServer
    from cloudapi_double.backends.mock.store import InMemoryCloudStore
    from cloudapi_double.core.routing import build_router

    account = args.account or config.ACCOUNT()
    router = build_router(account, InMemoryCloudStore.with_defaults())
    server = CloudAPIDoubleServer(
        router,
        host=args.host or config.HOST(),
        port=args.port if args.port is not None else config.PORT(),
    )
    print(f"{server.url}/{account}", flush=True)

    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        server.server.server_close()


if __name__ == "__main__":
    main()
