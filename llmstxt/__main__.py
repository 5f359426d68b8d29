"""CLI entry point: python -m llmstxt {generate,parse,validate} [options]"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from urllib.parse import urlparse

from llmstxt.errors import LLMSTxtError
from llmstxt.extractors.validate import validate_and_correct
from llmstxt.items import ContentItem, make_metadata
from llmstxt.manager import LLMSManager
from llmstxt.profiles import load_profile
from llmstxt.query import fetch_manifest, fetch_text, save_text

logger = logging.getLogger(__name__)

_DEFAULT_THRESHOLD = 0.5
_DEFAULT_OUT = "llms.txt"


def _link_arg(value: str) -> dict[str, str]:
    """argparse type for ``TITLE=URL`` pairs."""
    title, sep, url = value.partition("=")
    if not sep or not title.strip() or not url.strip():
        raise argparse.ArgumentTypeError(f"expected TITLE=URL, got {value!r}")
    return {"title": title.strip(), "url": url.strip()}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="llmstxt",
        description=(
            "Generate llms.txt from a sitemap, validate it, and parse it back to JSON.\n"
            "Locations may be http(s):// URLs, file:// URLs or local paths."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        metavar="{DEBUG,INFO,WARNING,ERROR}",
                        help="Logging level (default: WARNING)")
    sub = parser.add_subparsers(dest="command", required=True, metavar="COMMAND")

    gen = sub.add_parser("generate", help="Build llms.txt from a sitemap")
    gen.add_argument("--sitemap", required=True, metavar="LOCATION",
                     help="Sitemap URL (http, https, file) or local path")
    gen.add_argument("--title", default=None, help="Manifest title (# line)")
    gen.add_argument("--description", default=None, help="Manifest description (> line)")
    gen.add_argument("--threshold", type=float, default=None, metavar="F",
                     help=f"Minimum sitemap priority for core items (default: {_DEFAULT_THRESHOLD})")
    gen.add_argument("--core", type=_link_arg, action="append", default=[], metavar="TITLE=URL",
                     help="Extra core item, repeatable")
    gen.add_argument("--optional", type=_link_arg, action="append", default=[], metavar="TITLE=URL",
                     help="Optional item, repeatable")
    gen.add_argument("--profile", default=None, metavar="FILE",
                     help="YAML profile supplying defaults for these options")
    gen.add_argument("--out", default=None, metavar="FILE",
                     help=f"Output file (default: {_DEFAULT_OUT})")
    gen.add_argument("--validate", action="store_true", default=None,
                     help="Run the validator/corrector before writing")
    gen.add_argument("--quiet", action="store_true", default=False,
                     help="Do not print the summary table")

    prs = sub.add_parser("parse", help="Parse llms.txt into JSON")
    prs.add_argument("location", metavar="LOCATION", help="llms.txt URL or local path")
    prs.add_argument("--out", default=None, metavar="FILE", help="Write JSON here instead of stdout")
    prs.add_argument("--indent", type=int, default=2, metavar="N", help="JSON indent (default: 2)")

    val = sub.add_parser("validate", help="Validate and auto-correct an llms.txt file")
    val.add_argument("location", metavar="LOCATION", help="llms.txt URL or local path")
    val.add_argument("--title", required=True, help="Expected title")
    val.add_argument("--description", required=True, help="Expected description")
    val.add_argument("--out", default=None, metavar="FILE",
                     help="Write corrected text here instead of stdout")
    return parser


def _as_sitemap_url(location: str) -> str:
    """Turn a bare filesystem path into a ``file://`` URL."""
    scheme = urlparse(location).scheme.lower()
    if scheme in ("http", "https", "file"):
        return location
    return Path(location).resolve().as_uri()


def _print_summary(out_path: Path, core: list[ContentItem], optional: list[ContentItem]) -> None:
    from rich import box
    from rich.console import Console
    from rich.table import Table

    console = Console()
    tbl = Table(
        title=f"[bold green]llms.txt written to {out_path}[/bold green]",
        box=box.SIMPLE_HEAVY,
        show_lines=False,
    )
    tbl.add_column("#",       style="dim",   justify="right", width=4, no_wrap=True)
    tbl.add_column("Section", style="yellow", width=9,               no_wrap=True)
    tbl.add_column("Title",   style="cyan",   max_width=40,          no_wrap=True)
    tbl.add_column("URL",     style="blue",   max_width=60,          no_wrap=True)

    rows = [("Core", item) for item in core] + [("Optional", item) for item in optional]
    for i, (section, item) in enumerate(rows, 1):
        tbl.add_row(str(i), section, item.title[:40], item.url[:60])
    console.print(tbl)


def _cmd_generate(args: argparse.Namespace) -> int:
    sitemap_url = _as_sitemap_url(args.sitemap)
    profile = load_profile(args.profile, sitemap_url) if args.profile else {}

    title = args.title if args.title is not None else profile.get("title")
    description = args.description if args.description is not None else profile.get("description")
    threshold = args.threshold if args.threshold is not None else profile.get("threshold", _DEFAULT_THRESHOLD)
    run_validation = args.validate if args.validate is not None else bool(profile.get("validate", False))
    out = args.out or profile.get("out") or _DEFAULT_OUT

    manager = LLMSManager(sitemap_url)
    manager.set_metadata(title, description)
    manager.load_sitemap()

    core = manager.auto_generate_core_content(threshold)
    logger.info("%d of %d sitemap entries meet threshold %s",
                len(core), len(manager.get_sitemap_entries()), threshold)
    manager.add_core_content(core)
    manager.add_core_content((profile.get("core") or []) + args.core)
    manager.add_optional_content((profile.get("optional") or []) + args.optional)

    text = manager.generate()
    if run_validation:
        text = manager.validate(text)
    out_path = save_text(out, text)

    if not args.quiet:
        _print_summary(out_path, manager.model.core_content, manager.model.optional_content)
    return 0


def _cmd_parse(args: argparse.Namespace) -> int:
    manifest = fetch_manifest(args.location)
    payload = manifest.to_json(indent=args.indent)
    if args.out:
        save_text(args.out, payload + "\n")
    else:
        sys.stdout.write(payload + "\n")
    return 0


def _cmd_validate(args: argparse.Namespace) -> int:
    metadata = make_metadata(args.title, args.description)
    corrected = validate_and_correct(fetch_text(args.location), metadata)
    if args.out:
        save_text(args.out, corrected)
    else:
        sys.stdout.write(corrected if corrected.endswith("\n") else corrected + "\n")
    return 0


_COMMANDS = {
    "generate": _cmd_generate,
    "parse": _cmd_parse,
    "validate": _cmd_validate,
}


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    try:
        return _COMMANDS[args.command](args)
    except LLMSTxtError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
