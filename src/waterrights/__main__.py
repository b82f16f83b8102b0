from __future__ import annotations

import argparse
import logging
import time

from .runtime.server import RegistryServer, run


def main() -> None:
    p = argparse.ArgumentParser(prog="waterrights", description="waterrights: in-memory water rights registry server")
    p.add_argument("--host", default="127.0.0.1")
    p.add_argument("--port", type=int, default=8000)
    p.add_argument("--admin", default=None, help="initial admin id (default: $WATERRIGHTS_ADMIN)")
    p.add_argument("--log-level", default="info")
    args = p.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    srv = run(host=args.host, port=args.port, admin=args.admin, log_level=args.log_level)
    if not isinstance(srv, RegistryServer):
        print(f"waterrights already running at {srv.base_url}")
        return
    print(srv.url)

    # Block forever (so it behaves like a normal CLI server)
    while True:
        time.sleep(3600)


if __name__ == "__main__":
    main()
