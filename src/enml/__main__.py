"""Command-line interface: ``python -m enml <command> ...``."""

import argparse
import json
import logging
import sys
from pathlib import Path

from .plaintext import enml_of_plain_text, plain_text_of_enml
from .render import to_html
from .resources import url_of_resource
from .todos import extract_todos, toggle_todo
from .tokens import ParseError


def _read(path):
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _resource_pair(value):
    hash_, sep, url = value.partition("=")
    if not sep or not hash_ or not url:
        raise argparse.ArgumentTypeError(f"expected HASH=URL, got {value!r}")
    return hash_, url


def _load_resources(args):
    resources = {}
    if args.resources:
        resources.update(json.loads(Path(args.resources).read_text(encoding="utf-8")))
    resources.update(dict(args.resource or []))
    return resources


def _cmd_html(args):
    return to_html(_read(args.file), _load_resources(args))


def _cmd_todos(args):
    todos = extract_todos(_read(args.file))
    return json.dumps([{"text": todo.text, "checked": todo.checked} for todo in todos], ensure_ascii=False, indent=2)


def _cmd_check(args):
    return toggle_todo(_read(args.file), args.index, not args.uncheck)


def _cmd_text(args):
    return plain_text_of_enml(_read(args.file))


def _cmd_from_text(args):
    return enml_of_plain_text(_read(args.file))


def _cmd_url(args):
    return url_of_resource(args.guid, args.shard)


def build_parser():
    parser = argparse.ArgumentParser(prog="enml", description="Convert ENML notes to HTML and edit their checklists")
    parser.add_argument("--debug", action="store_true", help="Log debug output to stderr")
    commands = parser.add_subparsers(dest="command", required=True)

    html = commands.add_parser("html", help="Render ENML as HTML")
    html.add_argument("file", help="ENML file, or - for stdin")
    html.add_argument(
        "--resource",
        action="append",
        type=_resource_pair,
        metavar="HASH=URL",
        help="Resolve en-media with this hash to URL (repeatable)",
    )
    html.add_argument(
        "--resources",
        metavar="JSON_FILE",
        help='JSON object mapping hashes to URLs or {"url": ..., "title": ...}',
    )
    html.set_defaults(func=_cmd_html)

    todos = commands.add_parser("todos", help="List checklist items as JSON")
    todos.add_argument("file", help="ENML file, or - for stdin")
    todos.set_defaults(func=_cmd_todos)

    check = commands.add_parser("check", help="Check (or uncheck) one checklist item")
    check.add_argument("file", help="ENML file, or - for stdin")
    check.add_argument("index", type=int, help="Zero-based position of the item in the document")
    check.add_argument("--uncheck", action="store_true", help="Clear the item instead of checking it")
    check.set_defaults(func=_cmd_check)

    text = commands.add_parser("text", help="Plain text of an ENML note")
    text.add_argument("file", help="ENML file, or - for stdin")
    text.set_defaults(func=_cmd_text)

    from_text = commands.add_parser("from-text", help="Build an ENML note from plain text")
    from_text.add_argument("file", help="Text file, or - for stdin")
    from_text.set_defaults(func=_cmd_from_text)

    url = commands.add_parser("url", help="URL of a stored resource")
    url.add_argument("guid")
    url.add_argument("shard")
    url.set_defaults(func=_cmd_url)
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    if args.debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        output = args.func(args)
    except (ParseError, OSError, json.JSONDecodeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    sys.stdout.write(output)
    if not output.endswith("\n"):
        sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
