"""CLI for inspecting how attachments and selected files would be previewed."""

import argparse
import asyncio
import json
import logging
import sys
from typing import List, Optional

from ..api.models import FileSelectionResponse, RenderDirectiveResponse
from ..config import get_app_name, get_app_version, get_fetch_timeout, get_profile_name
from ..config.profile_loader import PreviewProfile, get_profile, set_profile
from ..models.attachment import AttachmentDescriptor
from ..models.directive import DirectiveKind, RenderDirective
from ..models.file_selection import FileSelection
from ..pipeline.dispatcher import ContentDispatcher
from ..pipeline.document_loader import DocumentLoader, get_document_loader
from ..pipeline.file_preview import FilePreviewPipeline
from ..pipeline.file_reader import FileReader

logger = logging.getLogger(__name__)

PREVIEW_TRUNCATE = 80


async def render_attachment(
    url: str,
    content_type: str,
    width: Optional[float] = None,
    loader: Optional[DocumentLoader] = None,
    profile: Optional[PreviewProfile] = None,
) -> RenderDirective:
    """Dispatch one attachment and wait for any document load to settle."""
    dispatcher = ContentDispatcher(loader=loader, profile=profile)
    directive = dispatcher.render(AttachmentDescriptor(content_type, url, width))
    if directive.kind == DirectiveKind.DOCUMENT:
        directive = await dispatcher.settled()
    return directive


async def select_files(paths: List[str], reader: Optional[FileReader] = None) -> Optional[FileSelection]:
    """Run a file selection through the preview pipeline and wait for decoding."""
    pipeline = FilePreviewPipeline(
        on_preview_ready=lambda uri: logger.info(f"Preview ready ({len(uri)} chars)"),
        on_raw_file_ready=lambda raw: logger.info(f"Raw file ready: {raw.name}"),
        on_decode_error=lambda raw, e: logger.info(f"Decode failed for {raw.name}: {e}"),
        reader=reader,
    )
    task = pipeline.on_file_selected(paths)
    if task is None:
        return None
    await task
    return pipeline.selection


def _print_json(payload: dict) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False))


def _handle_render(args) -> int:
    profile = get_profile() if args.profile == "default" else set_profile(args.profile)
    loader = None
    if args.loader:
        loader = get_document_loader(args.loader, fetch_timeout=get_fetch_timeout(profile.fetch_timeout))
    directive = asyncio.run(
        render_attachment(args.url, args.content_type, args.width, loader=loader, profile=profile)
    )
    _print_json(RenderDirectiveResponse.from_directive(directive).model_dump())
    return 1 if directive.kind == DirectiveKind.ERROR else 0


def _handle_select(args) -> int:
    selection = asyncio.run(select_files(args.files))
    if selection is None:
        print("No file selected")
        return 0
    payload = FileSelectionResponse.from_selection(selection).model_dump()
    uri = payload.get("preview_data_uri")
    if uri and not args.full and len(uri) > PREVIEW_TRUNCATE:
        payload["preview_data_uri"] = uri[:PREVIEW_TRUNCATE] + "..."
    _print_json(payload)
    return 1 if selection.error else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="media-preview",
        description=f"{get_app_name()} - inspect inline previews for attachments and selected files",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {get_app_version()}",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    render = subparsers.add_parser("render", help="Show the render directive for an attachment")
    render.add_argument("--url", required=True, help="Attachment URL, file path or data URI")
    render.add_argument("--content-type", required=True, help="Declared content type (e.g. image/png)")
    render.add_argument("--width", type=float, default=None, help="Target display width in pixels")
    render.add_argument(
        "--loader",
        choices=["pdfplumber", "pymupdf"],
        default=None,
        help="Document loader backend (default: from profile / MEDIA_PREVIEW_LOADER)",
    )
    render.add_argument(
        "--profile",
        type=str,
        default=get_profile_name(),
        help="Configuration profile name (default: default)",
    )
    render.set_defaults(handler=_handle_render)

    select = subparsers.add_parser("select", help="Decode a selected file into a preview data URI")
    select.add_argument("files", nargs="+", help="Selected files; only the first is previewed")
    select.add_argument("--full", action="store_true", help="Print the full data URI")
    select.set_defaults(handler=_handle_select)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(message)s",
    )
    try:
        return args.handler(args)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
