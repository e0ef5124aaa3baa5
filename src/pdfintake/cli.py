#!/usr/bin/env python3
"""
PdfIntake CLI: assemble selected pages of several PDFs from the terminal.

Usage:
    python -m pdfintake <command> [options]

Commands:
    inspect     Validate files and show how each would be taken in
    merge       Take files in, choose pages, and write the result to one PDF

Examples:
    # Check a set of files
    pdfintake inspect a.pdf b.pdf notes.txt

    # Merge, answering page prompts interactively for multi-page files
    pdfintake merge a.pdf b.pdf -o out.pdf

    # Merge non-interactively
    pdfintake merge a.pdf b.pdf -o out.pdf --select b.pdf=1,3
    pdfintake merge a.pdf b.pdf -o out.pdf --all-pages
"""

import argparse
import asyncio
import logging
import sys
from collections.abc import Callable
from pathlib import Path

from pdfintake.services.composer import SnapshotComposer
from pdfintake.services.intake_model import SourceFile
from pdfintake.services.notifications import (
    DISMISS_ACTION,
    FailureDialog,
    Notification,
    NotificationKind,
)
from pdfintake.services.page_selection import SelectionRequest
from pdfintake.services.session import IntakeSession
from pdfintake.services.validator import Classification, DocumentValidator
from pdfintake.utils.config_manager import ConfigManager, get_config_manager
from pdfintake.utils.exceptions import PageSelectionError
from pdfintake.utils.i18n import _
from pdfintake.utils.logger import set_log_level

# ---------------------------------------------------------------------------
# Page specification parsers
# ---------------------------------------------------------------------------


def _parse_page_list(text: str) -> list[int]:
    """Parse a page specification string into a list of page numbers.

    Supports: "3", "1-5", "1,3,7", "1-3,7,10-12". Order of first
    appearance is kept and repeated pages are dropped.

    Args:
        text: Page specification string.

    Returns:
        1-indexed page numbers.
    """
    pages: list[int] = []
    for part in text.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            if "-" in part:
                start_s, end_s = part.split("-", 1)
                s, e = int(start_s.strip()), int(end_s.strip())
                if s > e:
                    raise ValueError
                span = range(s, e + 1)
            else:
                span = range(int(part), int(part) + 1)
        except ValueError:
            raise ValueError(
                f"Invalid page specification '{part}'. "
                "Use numbers and ranges like '1-5' or '1,3,7'."
            ) from None
        pages.extend(p for p in span if p >= 1 and p not in pages)
    return pages


def _parse_select(text: str) -> tuple[str, list[int]]:
    """Parse a ``NAME=PAGES`` option value.

    Returns:
        File name and its 1-indexed pages.
    """
    name, sep, spec = text.rpartition("=")
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(
            f"Invalid selection '{text}'. Use NAME=PAGES, for example b.pdf=1,3."
        )
    try:
        pages = _parse_page_list(spec)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None
    if not pages:
        raise argparse.ArgumentTypeError(f"No pages given for '{name.strip()}'.")
    return name.strip(), pages


# ---------------------------------------------------------------------------
# Terminal selection surface
# ---------------------------------------------------------------------------


class TerminalSelectionSurface:
    """Answers selection requests from presets, or by prompting on the terminal.

    Page numbers typed or preset by the user are 1-indexed.
    """

    def __init__(
        self,
        presets: dict[str, list[int]] | None = None,
        all_pages: bool = False,
        interactive: bool = False,
        input_func: Callable[[str], str] = input,
        on_error: Callable[[str], None] | None = None,
    ) -> None:
        self.presets = presets or {}
        self.all_pages = all_pages
        self.interactive = interactive
        self.input_func = input_func
        self.on_error = on_error

    def _report(self, message: str) -> None:
        if self.on_error is not None:
            self.on_error(message)
        else:
            print(f"Error: {message}", file=sys.stderr)

    async def __call__(self, request: SelectionRequest) -> None:
        preset = self.presets.get(request.name)
        if preset is not None:
            try:
                request.commit([p - 1 for p in preset])
                return
            except PageSelectionError as e:
                self._report(f"{request.name}: {e.message}")
        elif self.all_pages:
            request.commit(range(request.total_pages))
            return

        if not self.interactive:
            request.cancel()
            return

        await self._prompt(request)

    async def _prompt(self, request: SelectionRequest) -> None:
        current = ""
        if request.initial_selected_pages:
            current = ",".join(str(p + 1) for p in request.initial_selected_pages)
        question = _("{name} has {count} pages. Pages to use (e.g. 1-3,5; empty to skip)").format(
            name=request.name, count=request.total_pages
        )
        if current:
            question += f" [{current}]"

        while not request.resolved:
            try:
                # input() blocks, so it runs in a worker thread
                answer = await asyncio.to_thread(self.input_func, f"{question}: ")
                answer = answer.strip()
            except EOFError:
                request.cancel()
                return

            if not answer:
                request.cancel()
                return
            try:
                request.commit([p - 1 for p in _parse_page_list(answer)])
            except (ValueError, PageSelectionError) as e:
                self._report(str(e))


# ---------------------------------------------------------------------------
# Terminal notification display
# ---------------------------------------------------------------------------


def _print_notification(notification: Notification) -> None:
    stream = sys.stderr if notification.kind is NotificationKind.ERROR else sys.stdout
    print(notification.message, file=stream)


def _print_dialog(dialog: FailureDialog) -> None:
    print(f"{dialog.title}: {dialog.message}", file=sys.stderr)
    for name in dialog.failed_names:
        print(f"  - {name}", file=sys.stderr)
    dialog.respond(DISMISS_ACTION)


# ---------------------------------------------------------------------------
# Argument parser construction
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with subcommands."""
    p = argparse.ArgumentParser(
        prog="pdfintake",
        description="PdfIntake: assemble selected PDF pages into one document.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("-v", "--verbose", action="store_true", help=_("Verbose logging (DEBUG)"))
    p.add_argument("--config", type=Path, default=None, help=_("Settings file to use"))

    sub = p.add_subparsers(dest="command", help=_("Available commands"))

    # --- inspect ---
    inspect_p = sub.add_parser("inspect", help=_("Validate files and show their page counts"))
    inspect_p.add_argument("inputs", nargs="+", type=Path, help=_("Files to check"))

    # --- merge ---
    merge_p = sub.add_parser("merge", help=_("Choose pages from several PDFs and merge them"))
    merge_p.add_argument("inputs", nargs="+", type=Path, help=_("Input files (in order)"))
    merge_p.add_argument("-o", "--output", type=Path, required=True, help=_("Output PDF file"))
    merge_p.add_argument(
        "--select",
        action="append",
        type=_parse_select,
        default=[],
        metavar="NAME=PAGES",
        help=_("Pages to use from a multi-page file, e.g. b.pdf=1,3 (repeatable)"),
    )
    merge_p.add_argument(
        "--all-pages",
        action="store_true",
        help=_("Use every page of multi-page files without asking"),
    )
    merge_p.add_argument(
        "--no-input",
        action="store_true",
        help=_("Never prompt; skip multi-page files without a selection"),
    )

    return p


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


async def _inspect_files(validator: DocumentValidator, paths: list[Path]) -> int:
    exit_code = 0
    for path in paths:
        result = await validator.validate(SourceFile.from_path(path))
        if not result.is_valid:
            print(f"{path.name}: {_('error')}: {result.error_message}")
            exit_code = 1
        elif result.classification is Classification.SINGLE_PAGE:
            print(f"{path.name}: {_('1 page')}")
        else:
            print(
                f"{path.name}: "
                + _("{count} pages (selection required)").format(count=result.total_pages)
            )
    return exit_code


def _cmd_inspect(args, config: ConfigManager, logger) -> int:
    """Handle the 'inspect' command."""
    validator = DocumentValidator.from_config(config)
    return asyncio.run(_inspect_files(validator, args.inputs))


def _cmd_merge(args, config: ConfigManager, logger) -> int:
    """Handle the 'merge' command."""
    surface = TerminalSelectionSurface(
        presets=dict(args.select),
        all_pages=args.all_pages,
        interactive=not args.no_input and sys.stdin.isatty(),
    )
    session = IntakeSession(surface=surface, config=config)
    surface.on_error = session.report_external_error

    composer = SnapshotComposer()
    session.bridge.subscribe(composer)
    session.notifications.subscribe(_print_notification)
    session.notifications.subscribe_dialogs(_print_dialog)

    report = asyncio.run(session.submit(SourceFile.from_path(p) for p in args.inputs))
    logger.debug("Batch report: %s", [item.to_dict() for item in report.added])

    if not composer.latest.files:
        print(_("Error: no pages were selected"), file=sys.stderr)
        return 1

    result = composer.write(args.output)
    if result.success:
        print(f"{result.message} → {args.output}")
        return 0
    print(f"Error: {result.message}", file=sys.stderr)
    return 1


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    config = ConfigManager(str(args.config)) if args.config else get_config_manager()
    set_log_level(logging.DEBUG if args.verbose else config.get("logging.level", "INFO"))
    logger = logging.getLogger("pdfintake.cli")

    handlers = {
        "inspect": _cmd_inspect,
        "merge": _cmd_merge,
    }

    handler = handlers.get(args.command)
    if handler:
        return handler(args, config, logger)
    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
