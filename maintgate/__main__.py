import argparse
import sys

import anyio
import uvicorn
from dotenv import load_dotenv

from maintgate.maintenance.config import load_config
from maintgate.maintenance.errors import ConfigurationError
from maintgate.main import create_app


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Serve maintgate or report its maintenance state.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP server.")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)

    subparsers.add_parser("status", help="Print whether maintenance mode is active.")
    return parser.parse_args(argv)


def status() -> int:
    load_dotenv()
    try:
        config = load_config()
        interceptor = create_app(config)
    except ConfigurationError as exc:
        print(f"configuration error: {exc}", file=sys.stderr)
        return 2

    active = anyio.run(interceptor.is_active)
    state = "active" if active else "inactive"
    print(f"maintenance={state} enabled={str(config.enabled).lower()} trigger={config.trigger_filename}")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    if args.command == "status":
        return status()

    uvicorn.run("maintgate.main:create_app", factory=True, host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
