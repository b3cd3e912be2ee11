"""CLI main entry point - routes commands to appropriate handlers."""

import argparse
import asyncio
import sys
from uuid import uuid4

from src.cli.core.error_handler import CLIErrorHandler
from src.cli.download_images import download_images
from src.cli.get_data import get_data
from src.lib.config import get_config
from src.lib.logging import clear_correlation_id, setup_logging, set_correlation_id


def positive_int(value: str) -> int:
    """argparse type for depth values."""
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def create_parser() -> argparse.ArgumentParser:
    """Create main CLI argument parser with subcommands.

    Returns:
        Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="figma-fetch",
        description="Figma design retrieval and asset export - CLI Tools",
        epilog="For command-specific help: figma-fetch <command> --help",
    )

    parser.add_argument("--version", action="version", version="Figma Fetch v1.0.0")

    subparsers = parser.add_subparsers(dest="command", help="Available commands", required=True)

    # Command: get-data
    get_data_parser = subparsers.add_parser(
        "get-data",
        help="Fetch a simplified design as JSON",
        description="Fetch a Figma file (or one node subtree) and print its simplified design",
    )
    get_data_parser.add_argument("file_key", help="Figma file key (from the file URL)")
    get_data_parser.add_argument("--node-id", help="Fetch only this node's subtree (e.g. 1:2)")
    get_data_parser.add_argument(
        "--depth", type=positive_int, help="Traversal depth (default: API default)"
    )
    get_data_parser.add_argument(
        "--output", "-o", metavar="PATH", help="Write JSON to file instead of stdout"
    )

    # Command: download-images
    download_parser = subparsers.add_parser(
        "download-images",
        help="Download rendered nodes and fill images",
        description="Export PNG/SVG renders and fill images from a Figma file to a directory",
    )
    download_parser.add_argument("file_key", help="Figma file key (from the file URL)")
    download_parser.add_argument("local_path", help="Destination directory")
    download_parser.add_argument(
        "--node",
        dest="nodes",
        action="append",
        required=True,
        metavar="NODE_ID:FILE_NAME[:IMAGE_REF]",
        help="Node to download; repeatable. Add IMAGE_REF to fetch a fill image",
    )

    return parser


def main() -> None:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args()

    try:
        config = get_config()
        setup_logging(config.log_level)
        set_correlation_id(str(uuid4()))

        # Route to appropriate command handler
        if args.command == "get-data":
            asyncio.run(
                get_data(
                    file_key=args.file_key,
                    node_id=args.node_id,
                    depth=args.depth,
                    output=args.output,
                )
            )

        elif args.command == "download-images":
            asyncio.run(
                download_images(
                    file_key=args.file_key,
                    local_path=args.local_path,
                    node_specs=args.nodes,
                )
            )

        else:
            parser.print_help()
            sys.exit(1)

    except (Exception, KeyboardInterrupt) as e:
        sys.exit(CLIErrorHandler.handle_error(e, args.command))

    finally:
        clear_correlation_id()


if __name__ == "__main__":
    main()
