"""Command line interface for scripture-highlight."""

import argparse
import sys
from pathlib import Path

from .downloader import ensure_assets_downloaded
from .errors import NoReferencesResolved
from .project import ProjectBuilder, Submission
from .resolver import resolve_references


def _read_file(path: str | None) -> str | None:
    if path is None:
        return None
    return Path(path).read_text(encoding="utf-8")


def _print_warnings(warnings: list[str]) -> None:
    for warning in warnings:
        print(f"Warning: {warning}", file=sys.stderr)


def cmd_resolve(args):
    """Handle the resolve command."""
    try:
        sources = []
        if args.file:
            sources.append(("file", _read_file(args.file)))
        if args.text:
            sources.append(("text", args.text))

        resolution = resolve_references(*sources)
    except NoReferencesResolved as e:
        _print_warnings([str(error) for error in e.errors])
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading references: {e}", file=sys.stderr)
        return 1

    for reference in resolution.references:
        print(reference)

    _print_warnings(resolution.warnings)
    print(f"\n✓ Resolved {len(resolution.verses)} verses", file=sys.stderr)
    return 0


def cmd_project(args):
    """Handle the project command."""
    try:
        submission = Submission(
            name=args.name,
            output_path=args.output_path,
            file_text=_read_file(args.file),
            pasted_text=args.text,
        )

        if args.assets_dir or args.download:
            builder = ProjectBuilder.from_assets(args.assets_dir, download=args.download)
        else:
            builder = ProjectBuilder()

        result = builder.build(submission)
    except NoReferencesResolved as e:
        _print_warnings([str(error) for error in e.errors])
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error building project: {e}", file=sys.stderr)
        return 1

    payload = result.record.to_json()
    if args.json_out:
        out_path = Path(args.json_out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(payload + "\n", encoding="utf-8")
        print(f"Saved project record to {out_path}", file=sys.stderr)
    else:
        print(payload)

    _print_warnings(result.warnings)
    record = result.record
    print(
        f"\n✓ {len(record.references)} references, {len(record.highlights)} highlights",
        file=sys.stderr,
    )
    return 0


def cmd_download(args):
    """Handle the download command."""
    try:
        assets_dir = ensure_assets_downloaded(args.assets_dir)
    except Exception as e:
        print(f"Error during download: {e}", file=sys.stderr)
        return 1

    print(f"\n✓ Verse text available at {assets_dir}")
    return 0


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Scripture Highlight - resolve scripture references into page highlights"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Resolve command
    resolve_parser = subparsers.add_parser(
        "resolve", help="Resolve references into a canonical, deduplicated verse list"
    )
    resolve_parser.add_argument("--file", type=str, help="File with one reference per line")
    resolve_parser.add_argument(
        "--text", type=str, help='References typed inline, e.g. "John 3:16; Ac 1:12"'
    )

    # Project command
    project_parser = subparsers.add_parser(
        "project", help="Build a project record with highlight regions"
    )
    project_parser.add_argument("--name", type=str, required=True, help="Project name")
    project_parser.add_argument(
        "--output-path", type=str, required=True, help="Directory the page image is written to"
    )
    project_parser.add_argument("--file", type=str, help="File with one reference per line")
    project_parser.add_argument("--text", type=str, help="References typed inline")
    project_parser.add_argument(
        "--assets-dir",
        type=str,
        help="Verse text assets directory (default: $SCRIPTURE_HIGHLIGHT_ASSETS "
        "or ~/.scripture-highlight/assets)",
    )
    project_parser.add_argument(
        "--download",
        action="store_true",
        help="Download verse text if missing and include it in highlights",
    )
    project_parser.add_argument(
        "--json-out", type=str, help="Write the record JSON here instead of stdout"
    )

    # Download command
    download_parser = subparsers.add_parser("download", help="Download verse text assets")
    download_parser.add_argument(
        "--assets-dir", type=str, help="Target directory (default: auto-detect)"
    )

    args = parser.parse_args(argv)

    if args.command == "resolve":
        return cmd_resolve(args)
    elif args.command == "project":
        return cmd_project(args)
    elif args.command == "download":
        return cmd_download(args)
    else:
        parser.print_help()
        return 0


if __name__ == "__main__":
    sys.exit(main())
