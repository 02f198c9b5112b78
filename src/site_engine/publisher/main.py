"""CLI entry point for building, previewing and deploying the blog.

Usage:
    python -m src.site_engine.publisher.main build
    python -m src.site_engine.publisher.main dev
    python -m src.site_engine.publisher.main deploy
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from src.common.config import Settings
from src.common.logging import set_level, setup_logging
from src.site_engine.content import ContentError

from .builder import SiteBuilder
from .server import DevServer, serve
from .uploader import BucketUploader

logger = setup_logging(module_name="publisher.main")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="reduction",
        description="Build, preview and deploy the blog",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to settings YAML (default: config/settings.yaml)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    build = sub.add_parser("build", help="Build the site into the output directory")
    build.add_argument(
        "--no-clean",
        action="store_true",
        help="Keep previous output and cached images",
    )

    for name in ("dev", "start"):
        dev = sub.add_parser(name, help="Build, serve and rebuild on change")
        dev.add_argument("--port", type=int, help="Port (default from settings)")

    serve_cmd = sub.add_parser("serve", help="Serve the built site")
    serve_cmd.add_argument("--port", type=int, help="Port (default from settings)")

    sub.add_parser("upload", help="Sync the built site to the bucket")
    sub.add_parser("deploy", help="Clean build, then upload")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        set_level(logging.DEBUG)

    try:
        config = Settings.load(args.config)
        builder = SiteBuilder(config=config)

        if args.command == "build":
            builder.build(clean=not args.no_clean)
            return 0

        if args.command in ("dev", "start"):
            port = args.port or config.server.dev_port
            DevServer(builder, config.server.poll_interval_seconds).run(config.server.host, port)
            return 0

        if args.command == "serve":
            port = args.port or config.server.serve_port
            serve(config.paths.output_dir, config.server.host, port)
            return 0

        if args.command == "deploy":
            builder.build(clean=True)

        # upload / deploy
        result = BucketUploader(config.deploy).upload(config.paths.output_dir)
        if not result.success:
            logger.error("Upload failed after %d attempt(s): %s", result.attempts, result.error)
        return result.returncode

    except ContentError as e:
        logger.error("Build failed: %s", e)
        return 1
    except FileNotFoundError as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
