"""Entry point for quarkus-inspector MCP server."""

import argparse
import asyncio
import logging
import os
import sys

from .server import create_server
from .utils.project import find_quarkus_project_root


def configure_logging() -> None:
    """Configure logging based on environment."""
    level = os.environ.get("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Quarkus Inspector MCP Server - Quarkus project awareness via MCP"
    )
    parser.add_argument(
        "--project",
        type=str,
        default=None,
        help="Project root path. Its src/main/resources/application.properties "
        "is used when a tool call names no properties file.",
    )
    parser.add_argument(
        "--project-from-cwd",
        action="store_true",
        default=False,
        help="Auto-detect project from current working directory. "
        "Searches upward for pom.xml, build.gradle(.kts), or .git markers. "
        "Cannot be used with --project.",
    )
    return parser.parse_args(argv)


def resolve_project_path(args: argparse.Namespace) -> str:
    """Project path from parsed arguments."""
    if args.project_from_cwd:
        if args.project is not None:
            raise ValueError("--project-from-cwd cannot be used with --project")
        return str(find_quarkus_project_root())
    return args.project or os.getcwd()


async def main() -> None:
    """Main entry point."""
    configure_logging()
    logger = logging.getLogger(__name__)

    args = parse_args()
    try:
        project_path = resolve_project_path(args)
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    logger.info(f"Starting Quarkus Inspector MCP Server (project: {project_path})...")
    mcp = create_server(project_path)

    try:
        await mcp.run_stdio_async()
    except Exception:
        logger.exception("Server error")
        raise
    finally:
        logger.info("Server stopped")


def run() -> None:
    """Run the server."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    run()
