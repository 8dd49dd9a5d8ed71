#!/usr/bin/env python3
"""List a template's form fields and check them against the field mapping table."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from jobapp.pdf.errors import TemplateError
from jobapp.pdf.inspection import coverage_summary, list_form_fields, mapping_coverage
from jobapp.pdf.mappings import default_application_mappings, default_i9_mappings
from jobapp.pdf.templates import TemplateStore


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Inspect fillable fields of a PDF template.",
    )
    parser.add_argument("template", type=Path, help="Path to the PDF template.")
    parser.add_argument(
        "--kind",
        choices=("application", "i9"),
        default="application",
        help="Which mapping table to check coverage against.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print a JSON report instead of plain text.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    store = TemplateStore(args.template.parent)
    try:
        doc = store.open_form(args.template.name)
    except TemplateError as exc:
        print(str(exc), file=sys.stderr)
        return 2

    with doc:
        fields = list_form_fields(doc)
    table = default_application_mappings() if args.kind == "application" else default_i9_mappings()
    summary = coverage_summary(mapping_coverage(table, (item.name for item in fields)))

    if args.json:
        report = {
            "template": str(args.template),
            "kind": args.kind,
            "fields": [
                {"name": item.name, "kind": item.kind, "page": item.page, "options": list(item.options)}
                for item in fields
            ],
            "coverage": summary,
        }
        print(json.dumps(report, ensure_ascii=False, indent=2))
        return 0

    print(f"Template: {args.template}")
    print(f"Fields: {len(fields)}")
    for item in fields:
        options = f" [{', '.join(item.options)}]" if item.options else ""
        print(f"  p{item.page} {item.kind:<10} {item.name}{options}")
    counts = summary["counts"]
    print(
        f"Mapping coverage ({args.kind}): primary={counts['primary']} "
        f"fallback={counts['fallback']} missing={counts['missing']}"
    )
    for attribute in summary["missing"]:
        print(f"  missing: {attribute}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
