"""Command-line bootstrap."""

from __future__ import annotations

import argparse
import json
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
import sys

from themeforge.config.profile import ExportProfile, load_profile
from themeforge.config.settings import AppSettings
from themeforge.core.css_reader import parse_css
from themeforge.core.exporter import EXPORT_FORMATS, convert_css_to_theme, export_all, export_as_vsix
from themeforge.core.loader import ConversionOptions, extract_theme, load_documents
from themeforge.core.models import ThemeDocument
from themeforge.core.template import load_template, merge_with_template
from themeforge.errors import classify_exception, format_error_for_user
from themeforge.runtime_paths import is_frozen, package_root, resolve_template


def _configure_logger(settings: AppSettings, *, verbose: bool = False) -> logging.Logger:
    logger = logging.getLogger("themeforge")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(logging.DEBUG)
    handler = RotatingFileHandler(
        settings.logs_dir / "themeforge.log",
        maxBytes=512_000,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.addHandler(handler)

    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    console.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.addHandler(console)
    logger.propagate = False
    return logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="themeforge",
        description="Convert VS Code colour themes to CSS and back, and package them as VSIX.",
    )
    parser.add_argument("--profile", type=Path, help="YAML export profile")
    parser.add_argument("--timestamp", action="store_true", help="add a Generated: header to CSS")
    parser.add_argument("--strict", action="store_true", help="reject colliding colour keys")
    parser.add_argument(
        "--template",
        metavar="NAME_OR_PATH",
        help="merge an element template (bundled name such as 'elements', or a JSONC path)",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    extract = sub.add_parser("extract", help="render a .json/.jsonc/.vsix theme as CSS")
    extract.add_argument("input", type=Path)
    extract.add_argument("-o", "--output", help="output file, '-' for stdout")

    to_theme = sub.add_parser("to-theme", help="rebuild theme JSON from generated CSS")
    to_theme.add_argument("input", type=Path)
    to_theme.add_argument("--name", required=True)
    to_theme.add_argument("-o", "--output", type=Path)

    package = sub.add_parser("package", help="build a VSIX from a theme or CSS file")
    package.add_argument("input", type=Path)
    package.add_argument("--name")
    package.add_argument("-o", "--output", type=Path)

    export = sub.add_parser("export", help="write CSS, JSON and/or VSIX into a folder")
    export.add_argument("input", type=Path)
    export.add_argument("--name")
    export.add_argument("-d", "--directory", type=Path)
    export.add_argument(
        "-f",
        "--format",
        dest="formats",
        action="append",
        choices=EXPORT_FORMATS,
        help="repeatable; defaults to all formats",
    )
    return parser


def run_app(argv: list[str] | None = None, settings: AppSettings | None = None) -> int:
    """Parse arguments, run one command and return the exit code."""
    args = build_parser().parse_args(argv)
    settings = settings or AppSettings()
    logger = _configure_logger(settings, verbose=args.verbose)
    logger.debug("startup frozen=%s package_root=%s", is_frozen(), package_root())

    try:
        profile, profile_dir = _resolve_profile(args, settings)
        options = _conversion_options(args, profile, profile_dir)
        handler = _COMMANDS[args.command]
        code = handler(args, settings, profile, options)
    except Exception as exc:
        classified = classify_exception(exc, getattr(args, "input", None))
        logger.error("%s failed: %s", args.command, classified.to_dict())
        print(format_error_for_user(classified), file=sys.stderr)
        return 1
    settings.add_recent_file(str(args.input))
    settings.sync()
    return code


def _resolve_profile(args: argparse.Namespace, settings: AppSettings) -> tuple[ExportProfile, Path | None]:
    path = args.profile
    if path is None and settings.profile_path:
        path = Path(settings.profile_path)
        if not path.exists():
            logging.getLogger("themeforge").warning("saved profile %s is missing; using defaults", path)
            return ExportProfile(), None
    if path is None:
        return ExportProfile(), None
    profile = load_profile(path)
    if args.profile is not None:
        settings.profile_path = str(path)
    return profile, path.parent


def _conversion_options(
    args: argparse.Namespace,
    profile: ExportProfile,
    profile_dir: Path | None,
) -> ConversionOptions:
    options = profile.conversion_options(profile_dir)
    template = resolve_template(args.template) if args.template else options.merge_template
    return ConversionOptions(
        include_timestamp=args.timestamp or options.include_timestamp,
        strict_keys=args.strict or options.strict_keys,
        merge_template=template,
    )


def _load_single(
    path: Path,
    name: str | None,
    options: ConversionOptions,
) -> tuple[ThemeDocument, str]:
    if path.suffix.lower() == ".css":
        label = name or path.stem
        doc = parse_css(path.read_text(encoding="utf-8"), label)
    else:
        doc, label = load_documents(path)[0]
        label = name or label
    if options.merge_template is not None:
        doc = merge_with_template(doc, load_template(options.merge_template))
    return doc, label


def _cmd_extract(args, settings, profile, options) -> int:
    css = extract_theme(args.input, options)
    if args.output == "-":
        print(css)
        return 0
    output = Path(args.output) if args.output else Path(f"{args.input.stem}.css")
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(css, encoding="utf-8")
    print(f"CSS saved to: {output}")
    return 0


def _cmd_to_theme(args, settings, profile, options) -> int:
    theme = convert_css_to_theme(args.input.read_text(encoding="utf-8"), args.name)
    output = args.output or args.input.with_suffix(".json")
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(json.dumps(theme, indent=2), encoding="utf-8")
    print(f"Theme JSON saved to: {output}")
    return 0


def _cmd_package(args, settings, profile, options) -> int:
    doc, name = _load_single(args.input, args.name, options)
    output = args.output or Path(f"{args.input.stem}.vsix")
    export_as_vsix(doc, name, output, **profile.package_kwargs())
    print(f"VSIX created: {output}")
    return 0


def _cmd_export(args, settings, profile, options) -> int:
    doc, name = _load_single(args.input, args.name, options)
    directory = args.directory or Path(settings.export_dir or ".")
    written = export_all(
        doc,
        name,
        directory,
        args.formats or EXPORT_FORMATS,
        options=options,
        **profile.package_kwargs(),
    )
    settings.export_dir = str(directory)
    for path in written:
        print(f"Exported: {path}")
    return 0


_COMMANDS = {
    "extract": _cmd_extract,
    "to-theme": _cmd_to_theme,
    "package": _cmd_package,
    "export": _cmd_export,
}
