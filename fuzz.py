#!/usr/bin/env python3
"""
Random fuzzer for the ENML transforms.
Generates well-formed ENML notes and checks the properties the transforms
promise: rendering never unbalances the output, toggling is idempotent and
agrees with extraction, and out-of-range toggles change nothing.
"""

import argparse
import random
import string
import sys
import time
import traceback

from enml import extract_todos, to_html, toggle_todo

# Fuzzing strategies
BLOCK_TAGS = ["div", "p", "blockquote", "ul", "ol", "li", "table", "tr", "td", "h1", "h2", "pre"]
INLINE_TAGS = ["b", "u", "i", "font", "strong", "span", "em", "a", "code", "sub", "sup"]
VOID_TAGS = ["br", "hr"]

ATTRIBUTES = ["style", "class", "title", "id", "href", "color", "dir", "align"]

MEDIA_TYPES = [
    "image/png", "image/jpeg", "audio/mpeg", "audio/wav", "video/mp4",
    "application/pdf", "text/plain", "unknown/x", None,
]

TEXT_PIECES = [
    "&amp;", "&lt;", "&gt;", "&quot;", "&apos;", "&nbsp;", "&eacute;", "&#160;", "&#x263A;",
    "&#9;", "&#10;", "&#13;",
    "é", " ", "​", "\U0001f600", " ", "\n", "\t",
]


def random_string(min_len=0, max_len=20):
    """Generate random ASCII string."""
    length = random.randint(min_len, max_len)
    return "".join(random.choices(string.ascii_letters + string.digits + " ", k=length))


def fuzz_text():
    """Generate character data, escaped for ENML."""
    parts = []
    for _ in range(random.randint(0, 4)):
        if random.random() < 0.3:
            parts.append(random.choice(TEXT_PIECES))
        else:
            parts.append(random_string(0, 12))
    return "".join(parts)


def fuzz_attributes(names=ATTRIBUTES, max_count=3):
    chosen = random.sample(names, k=random.randint(0, min(max_count, len(names))))
    return "".join(f' {name}="{fuzz_text().replace(chr(34), "&quot;").replace("<", "&lt;")}"' for name in chosen)


def fuzz_todo():
    checked = random.choice(['', ' checked="true"', ' checked="false"'])
    if random.random() < 0.2:
        return f"<en-todo{checked}>{fuzz_text()}</en-todo>"
    return f"<en-todo{checked}/>"


def fuzz_media(hashes):
    attrs = [f'hash="{random.choice(hashes)}"']
    media_type = random.choice(MEDIA_TYPES)
    if media_type:
        attrs.append(f'type="{media_type}"')
    if random.random() < 0.5:
        attrs.append(f'width="{random.randint(0, 800)}"')
    if random.random() < 0.5:
        attrs.append(f'height="{random.randint(0, 600)}"')
    random.shuffle(attrs)
    return f"<en-media {' '.join(attrs)}/>"


def fuzz_nested_structure(hashes, depth=0, max_depth=5):
    """Generate nested content."""
    parts = []
    for _ in range(random.randint(0, 5)):
        roll = random.random()
        if roll < 0.2:
            parts.append(fuzz_text())
        elif roll < 0.35:
            parts.append(fuzz_todo())
        elif roll < 0.45:
            parts.append(fuzz_media(hashes))
        elif roll < 0.5:
            parts.append(f"<{random.choice(VOID_TAGS)}/>")
        elif depth < max_depth:
            tag = random.choice(BLOCK_TAGS + INLINE_TAGS)
            inner = fuzz_nested_structure(hashes, depth + 1, max_depth)
            parts.append(f"<{tag}{fuzz_attributes()}>{inner}</{tag}>")
    return "".join(parts)


def generate_fuzzed_enml():
    """Return (enml, resources) for one random note."""
    hashes = [random_string(8, 8).replace(" ", "0") for _ in range(3)]
    resources = {}
    for hash_ in hashes[:2]:
        if random.random() < 0.5:
            resources[hash_] = f"https://example.com/{hash_}"
        else:
            resources[hash_] = {"url": f"https://example.com/{hash_}", "title": random_string(1, 10)}
    prologue = ""
    if random.random() < 0.5:
        prologue = (
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            '<!DOCTYPE en-note SYSTEM "http://xml.evernote.com/pub/enml2.dtd">\n'
        )
    body = fuzz_nested_structure(hashes)
    style = random.choice(["", ' style="color: red"'])
    return f"{prologue}<en-note{style}>{body}<hr/></en-note>", resources


def check_properties(enml, resources):
    """Raise AssertionError when a transform property does not hold."""
    html = to_html(enml, resources)
    assert html.startswith("<html><head>") and html.endswith("</body></html>"), "render is not a page"

    todo_count = enml.count("<en-todo")
    baseline = toggle_todo(enml, todo_count, True)
    assert toggle_todo(baseline, todo_count, True) == baseline, "out-of-range toggle changed the document"
    assert extract_todos(baseline) == extract_todos(enml), "out-of-range toggle changed the todos"

    before = extract_todos(enml)
    for i in range(todo_count):
        for checked in (True, False):
            once = toggle_todo(enml, i, checked)
            assert toggle_todo(once, i, checked) == once, f"toggle {i} {checked} is not idempotent"
            after = extract_todos(once)
            assert len(after) == len(before), f"toggle {i} changed the number of todos"
            if len(before) == todo_count:
                assert after[i].checked is checked, f"toggle {i} {checked} not visible to extraction"
                assert all(a == b for j, (a, b) in enumerate(zip(after, before)) if j != i), (
                    f"toggle {i} changed other todos"
                )


def run_fuzzer(num_tests, seed=None, verbose=False, save_failures=False):
    """Run the fuzzer and return the number of failures."""
    if seed is None:
        seed = int(time.time())
    random.seed(seed)
    print(f"Fuzzing ENML transforms with {num_tests} notes (seed={seed})")

    failures = []
    start = time.time()
    for i in range(num_tests):
        enml, resources = generate_fuzzed_enml()
        try:
            check_properties(enml, resources)
        except Exception as exc:  # noqa: BLE001 - collect every failure kind
            failures.append((enml, resources, exc, traceback.format_exc()))
            if verbose:
                print(f"\nFAIL #{i}: {exc}\n{enml}")
        if verbose and (i + 1) % 100 == 0:
            print(f"  {i + 1}/{num_tests} ({len(failures)} failures)")

    elapsed = time.time() - start
    print(f"Done: {num_tests} notes in {elapsed:.2f}s, {len(failures)} failures")

    if failures and save_failures:
        with open("fuzz_failures.txt", "w", encoding="utf-8") as f:
            for enml, resources, _, trace in failures:
                f.write(f"#data\n{enml}\n#resources\n{resources!r}\n#trace\n{trace}\n")
        print("Failures written to fuzz_failures.txt")
    return len(failures)


def main():
    parser = argparse.ArgumentParser(description="Fuzz the ENML transforms with random notes")
    parser.add_argument(
        "-n",
        "--num-tests",
        type=int,
        default=1000,
        help="Number of notes to generate (default: 1000)",
    )
    parser.add_argument(
        "-s",
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducibility",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print each failure and progress",
    )
    parser.add_argument(
        "--save-failures",
        action="store_true",
        help="Write failing notes to fuzz_failures.txt",
    )
    args = parser.parse_args()
    failures = run_fuzzer(args.num_tests, args.seed, args.verbose, args.save_failures)
    sys.exit(1 if failures else 0)


if __name__ == "__main__":
    main()
