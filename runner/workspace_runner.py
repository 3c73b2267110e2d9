"""Workspace runner entry point.

Drives the document workspace from the command line.

Usage:
    python -m runner.workspace_runner list
    python -m runner.workspace_runner upload ./notes.pdf --title "Lecture notes"
    python -m runner.workspace_runner delete <document-id>
    python -m runner.workspace_runner search "gradient descent" --limit 10 --document <document-id>
"""

import argparse
import asyncio
import sys

from shared.helper.HelperConfig import HelperConfig
from shared.logging.logging_setup import setup_logging
from shared.models.errors import WorkspaceError
from shared.models.upload import UploadFile
from services.document_search import ResultPresenter
from services.workspace.DocumentWorkspace import DocumentWorkspace

MISSING_FIELDS_MESSAGE = "Please fill all fields and select a file"
UPLOAD_NOT_CONFIGURED_MESSAGE = "Upload service is not configured"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="workspace_runner", description="Upload, list, delete and search documents.")
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("list", help="List registered documents")

    upload = commands.add_parser("upload", help="Upload a PDF and register it")
    upload.add_argument("path")
    upload.add_argument("--title", default=None, help="Defaults to the file name without extension")

    delete = commands.add_parser("delete", help="Delete a document by id")
    delete.add_argument("document_id")

    search = commands.add_parser("search", help="Semantic search over registered documents")
    search.add_argument("query")
    search.add_argument("--document", default=None, help="Restrict the search to one document id")
    search.add_argument("--limit", type=int, default=None)
    return parser


async def run(args: argparse.Namespace, workspace: DocumentWorkspace, config: HelperConfig) -> int:
    """Execute one command against a booted workspace and return the exit code."""
    if args.command == "list":
        await workspace.registry.do_fetch()
        if workspace.registry.error:
            print(workspace.registry.error, file=sys.stderr)
            return 1
        for document in workspace.registry.documents:
            print(f"{document.id}  {document.title}  ({document.file_name}, {ResultPresenter.format_file_size(document.file_size)})")
        return 0

    if args.command == "upload":
        try:
            file = UploadFile.from_path(args.path)
        except OSError as e:
            print(f"Cannot read {args.path}: {e.strerror or e}", file=sys.stderr)
            return 1
        title = (args.title if args.title is not None else file.stem).strip()
        if not title:
            print(MISSING_FIELDS_MESSAGE, file=sys.stderr)
            return 1
        try:
            access_token = config.get_string_val("BLOB_READ_WRITE_TOKEN")
        except ValueError:
            print(UPLOAD_NOT_CONFIGURED_MESSAGE, file=sys.stderr)
            return 1
        try:
            document = await workspace.uploader.do_upload(file, title, access_token)
        except WorkspaceError as e:
            print(e.message, file=sys.stderr)
            return 1
        print(f"Uploaded {document.title} as {document.id}")
        return 0

    if args.command == "delete":
        try:
            await workspace.registry.do_delete(args.document_id)
        except WorkspaceError as e:
            print(e.message, file=sys.stderr)
            return 1
        print(f"Deleted {args.document_id}")
        return 0

    if args.command == "search":
        # titles come from the registry
        await workspace.registry.do_fetch()
        await workspace.search.do_search(query=args.query, document_id=args.document, limit=args.limit)
        if workspace.search.error:
            print(workspace.search.error, file=sys.stderr)
            return 1
        rows = workspace.presented_results()
        print(ResultPresenter.summarize(len(rows), workspace.search.query))
        for row in rows:
            print(f"\n#{row.rank} [{row.bucket}] {row.score_text}% match - {row.title}")
            print(f"   {row.highlighted[:300]}")
        return 0

    return 2


async def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logger = setup_logging()
    config = HelperConfig(logger=logger)
    workspace = DocumentWorkspace(helper_config=config)
    try:
        await workspace.boot()
        if await workspace.check_connections():
            logger.info("All services reachable.", color="green")
        return await run(args, workspace, config)
    finally:
        await workspace.close()


def cli() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
