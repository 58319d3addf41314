"""
Write the OpenAPI schema of the Todo API to disk.

API clients and documentation tools can consume the exported file without
running the server.

Usage:
    python -m todo_api.generate_openapi [OUTPUT_PATH]

Without an argument the schema goes to <project root>/interfaces/openapi.json.
"""
from __future__ import annotations

import json
import logging
import os
import sys
from typing import Any, Dict, List, Optional

from fastapi import FastAPI

from .main import create_app, openapi_tags

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT = os.path.join(
    os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))),
    "interfaces",
    "openapi.json",
)


def _ensure_tags(schema: Dict[str, Any]) -> None:
    """
    Make sure every tag declared in openapi_tags is present in the schema,
    without overriding tag definitions that already exist.
    """
    existing_tags: List[Dict[str, Any]] = schema.get("tags", []) or []
    existing_names = {t.get("name") for t in existing_tags if isinstance(t, dict)}
    for tag in openapi_tags:
        if tag.get("name") not in existing_names:
            existing_tags.append(tag)
    if existing_tags:
        schema["tags"] = existing_tags


# PUBLIC_INTERFACE
def generate_openapi(out_path: Optional[str] = None, app: Optional[FastAPI] = None) -> str:
    """Generate the OpenAPI schema file and return the written file path."""
    target = out_path or DEFAULT_OUTPUT
    application = app or create_app()

    schema = application.openapi()
    _ensure_tags(schema)

    os.makedirs(os.path.dirname(os.path.abspath(target)), exist_ok=True)
    with open(target, "w", encoding="utf-8") as f:
        json.dump(schema, f, indent=2, ensure_ascii=False)
    logger.info("Wrote OpenAPI schema to %s", target)
    return target


def main(argv: Optional[List[str]] = None) -> None:
    args = sys.argv[1:] if argv is None else argv
    path = generate_openapi(args[0] if args else None)
    print(f"Wrote OpenAPI schema to: {path}")


if __name__ == "__main__":
    main()
