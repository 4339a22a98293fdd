# bulkbridge/cli.py
import argparse
import asyncio
import os
import sys
from typing import Optional, Sequence

import httpx

from bulkbridge.client.coordinator import UploadCoordinator
from bulkbridge.client.errors import BulkBridgeClientError
from bulkbridge.client.settings import ClientSettings
from bulkbridge.client.splitter import PathSource, format_file_size
from bulkbridge.client.state import PartStatus
from bulkbridge.core.logging_config import setup_logging

_ICONS = {
    PartStatus.PENDING: " ",
    PartStatus.UPLOADING: "~",
    PartStatus.COMPLETED: "+",
    PartStatus.ERROR: "x",
}


def build_parser(defaults: ClientSettings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bulkbridge-upload",
        description="Upload een bestand in parts naar S3 via de BulkBridge API.",
    )
    parser.add_argument("file", help="pad naar het bestand")
    parser.add_argument("--api", default=defaults.API_BASE_URL, help="base URL van de API")
    parser.add_argument("--key", default=None, help="optionele object key")
    parser.add_argument("--content-type", default=None)
    parser.add_argument("--part-size", type=int, default=defaults.MAX_PART_SIZE, help="part size in bytes")
    parser.add_argument("--max-concurrency", type=int, default=defaults.MAX_CONCURRENCY)
    parser.add_argument("--timeout", type=float, default=defaults.TIMEOUT_SECONDS)
    return parser


def render_parts(coordinator: UploadCoordinator) -> str:
    done, total = coordinator.progress
    lines = [f"{coordinator.file_name}: {coordinator.status.value} ({done}/{total} chunks)"]
    for number, rec in sorted(coordinator.parts_snapshot().items()):
        lines.append(
            f"  [{_ICONS[rec.status]}] Chunk {number:>4}  {format_file_size(rec.size):>9}  {rec.progress:5.1f}%"
        )
    return "\n".join(lines)


async def _upload(args: argparse.Namespace) -> int:
    source = PathSource(args.file)
    timeout = httpx.Timeout(args.timeout)
    async with httpx.AsyncClient(base_url=args.api, timeout=timeout) as api_client, \
            httpx.AsyncClient(timeout=timeout) as store_client:
        coordinator = UploadCoordinator(
            api_client,
            store_client,
            max_part_size=args.part_size,
            max_concurrency=args.max_concurrency,
        )
        try:
            result = await coordinator.upload(source, file_type=args.content_type, key=args.key)
        except (BulkBridgeClientError, ValueError) as e:
            print(render_parts(coordinator))
            print(f"Upload failed: {e}", file=sys.stderr)
            return 1

    print(render_parts(coordinator))
    print(f"Upload complete: s3://{result.bucket}/{result.key}")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    setup_logging("WARNING", json_logs=False)
    parser = build_parser(ClientSettings())
    args = parser.parse_args(argv)
    if not os.path.isfile(args.file):
        parser.error(f"file not found: {args.file}")
    if args.part_size < 1:
        parser.error("--part-size must be >= 1")
    if args.max_concurrency is not None and args.max_concurrency < 1:
        parser.error("--max-concurrency must be >= 1")
    return asyncio.run(_upload(args))


if __name__ == "__main__":
    sys.exit(main())
