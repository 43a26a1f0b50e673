"""Command line access to a bucket.

Usage:
    bucketfs [--url URL] [--region REGION] ls [PATH]
    bucketfs cat PATH
    bucketfs put LOCAL_PATH [NAME]
    bucketfs rm NAME

``--url`` and ``--region`` default to the ``S3_URL`` and ``S3_REGION``
environment variables.
"""

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path as LocalPath
from typing import List, Optional

from .core.errors import BaseError
from .core.models import Content, Path
from .factory import Factory
from .filesystem import Directory, File, FilesystemAdapter, Node
from .providers.storage import Bucket

logger = logging.getLogger("bucketfs.cli")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(prog="bucketfs", description="Browse and modify an S3 bucket")
    parser.add_argument(
        "--url",
        help="Bucket url with credentials, defaults to $S3_URL"
    )
    parser.add_argument(
        "--region",
        help="Bucket region, defaults to $S3_REGION"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level"
    )

    commands = parser.add_subparsers(dest="command", required=True)

    ls = commands.add_parser("ls", help="List a directory")
    ls.add_argument("path", nargs="?", default="", help="Directory to list, the root by default")

    cat = commands.add_parser("cat", help="Print a file")
    cat.add_argument("path", help="File to print")

    put = commands.add_parser("put", help="Upload a local file or directory at the bucket root")
    put.add_argument("local_path", help="Local file or directory")
    put.add_argument("name", nargs="?", help="Name in the bucket, the local name by default")

    rm = commands.add_parser("rm", help="Delete a file or a directory recursively")
    rm.add_argument("name", help="Name at the bucket root")

    return parser.parse_args(argv)


def load_local(path: LocalPath, name: Optional[str] = None) -> Node:
    """Build a tree node from a local file or directory."""
    name = name or path.name
    if path.is_dir():
        return Directory.of(name, (load_local(child) for child in sorted(path.iterdir())))
    return File(name, Content.of_bytes(path.read_bytes()))


def _as_directory(value: str) -> Path:
    if value and not value.endswith("/"):
        value += "/"
    return Path.of(value)


async def run(args: argparse.Namespace, bucket: Bucket) -> None:
    if args.command == "ls":
        async for child in bucket.list(_as_directory(args.path)):
            print(child)

    elif args.command == "cat":
        content = await bucket.get(Path.of(args.path))
        if content is None:
            raise FileNotFoundError(f"No such file: {args.path}")
        sys.stdout.buffer.write(await content.read())
        sys.stdout.flush()

    elif args.command == "put":
        node = load_local(LocalPath(args.local_path), args.name)
        await FilesystemAdapter.of(bucket).add(node)
        logger.info(f"Uploaded {args.local_path} as {node.name}")

    elif args.command == "rm":
        await FilesystemAdapter.of(bucket).remove(args.name)
        logger.info(f"Removed {args.name}")


async def main_async(argv: Optional[List[str]] = None, factory: Optional[Factory] = None) -> int:
    """Async main execution.

    Returns:
        Process exit code
    """
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    factory = factory or Factory()

    try:
        bucket = factory.from_env(os.environ, url=args.url, region=args.region)
        async with bucket:
            await run(args, bucket)
    except (BaseError, OSError) as e:
        logger.error(f"Error: {str(e)}")
        return 1

    return 0


def main() -> None:
    """Main entry point."""
    sys.exit(asyncio.run(main_async()))


if __name__ == "__main__":
    main()
