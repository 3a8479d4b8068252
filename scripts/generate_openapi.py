"""Generate and write an augmented OpenAPI spec (default: docs/openapi.json)."""
from __future__ import annotations

import argparse
import json
import os

from helpdesk.main import app
from helpdesk.helpers.openapi import augment_openapi

DEFAULT_OUTPUT = os.path.join(os.path.dirname(os.path.dirname(__file__)), "docs", "openapi.json")


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--output", "-o", default=DEFAULT_OUTPUT)
    args = ap.parse_args()

    augmented = augment_openapi(app.openapi())
    out_dir = os.path.dirname(os.path.abspath(args.output))
    os.makedirs(out_dir, exist_ok=True)
    with open(args.output, "w", encoding="utf-8") as f:
        json.dump(augmented, f, indent=2, ensure_ascii=False, sort_keys=True)
    print(f"Wrote OpenAPI to {args.output}")


if __name__ == "__main__":
    main()
