#!/usr/bin/env python3
"""Command line entry point for BizDesk.

Usage:
    bizdesk serve --port 5000
    bizdesk config
"""
import argparse
import json
import sys

from .config import DEFAULT_JWT_SECRET, reload_settings


def _cmd_serve(args) -> int:
    import uvicorn

    from .main import create_app

    settings = reload_settings(args.config)
    host = args.host or settings.server.host
    port = args.port or settings.server.port
    uvicorn.run(create_app(settings), host=host, port=port, log_config=None)
    return 0


def _cmd_config(args) -> int:
    settings = reload_settings(args.config)
    data = settings.model_dump()
    if data["auth"]["jwt_secret"] != DEFAULT_JWT_SECRET:
        data["auth"]["jwt_secret"] = "***"
    print(json.dumps(data, indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='bizdesk',
        description='BizDesk - invoicing, clients and enquiries API',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  bizdesk serve
  bizdesk serve --host 127.0.0.1 --port 8000
  bizdesk config --config config/bizdesk.yml
"""
    )
    parser.add_argument('--config', help='Path to YAML config (default: $BIZDESK_CONFIG)')
    sub = parser.add_subparsers(dest='command', required=True)

    serve = sub.add_parser('serve', help='Run the API server')
    serve.add_argument('--host', help='Bind address')
    serve.add_argument('--port', type=int, help='Bind port')
    serve.set_defaults(func=_cmd_serve)

    show = sub.add_parser('config', help='Print the effective configuration')
    show.set_defaults(func=_cmd_config)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
