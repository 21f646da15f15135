#!/usr/bin/env python3
# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

import argparse

import uvicorn

from pyonu.config.system_config_settings import SystemConfigSettings
from pyonu.version import __version__


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Launch the PyONU OMCI responder FastAPI service."
    )

    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"{__version__}",
        help="Show PyONU version and exit.",
    )

    parser.add_argument("--host", default=None,
                        help="Host to bind (default: FastApi.host from system.json)")
    parser.add_argument("--port", default=None, type=int,
                        help="Port to bind (default: FastApi.port from system.json)")

    parser.add_argument(
        "--log-level",
        default="info",
        choices=["critical", "error", "warning", "info", "debug", "trace"],
        help="Uvicorn log level (default: info).",
    )

    parser.add_argument(
        "--no-access-log",
        action="store_true",
        help="Disable Uvicorn access log.",
    )

    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload on file changes (dev only).",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    host = args.host or SystemConfigSettings.api_host()
    port = args.port or SystemConfigSettings.api_port()

    print(f"Launching PyONU OMCI responder on http://{host}:{port}")

    uvicorn_args = {
        "app": "pyonu.api.main:app",
        "host": host,
        "port": port,
        "timeout_keep_alive": 120,
        "log_level": args.log_level,
        "access_log": not args.no_access_log,
    }

    # A single worker keeps every ONU in one OnuOmciStateStore
    if args.reload:
        uvicorn_args.update(
            {
                "reload": True,
                "reload_dirs": ["src"],
                "reload_includes": ["*.py"],
            }
        )
        print("Auto-reload enabled. Watching: src")

    uvicorn.run(**uvicorn_args)


if __name__ == "__main__":
    main()
