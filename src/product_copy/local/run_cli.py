"""Generate product copy locally from template and product-info files."""
from __future__ import annotations
import argparse
import logging
import sys
from typing import Any

from product_copy.common.config import ConfigError, Settings
from product_copy.common.logging_setup import setup_logging
from product_copy.common.templates import load_template
from product_copy.serve.handler import GenerateHandler

LOGGER = logging.getLogger("product_copy.local.cli")

def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Generate product copy with the OpenAI Responses API")
    ap.add_argument("--template", required=True, help="Markdown template file")
    ap.add_argument("--product", required=True, help="Product info file")
    ap.add_argument("--extra", default="", help="Extra instructions for this run")
    ap.add_argument("--model", default=None, help="Model id (defaults to configured model)")
    ap.add_argument("--temperature", type=float, default=0.5)
    ap.add_argument("--cfg", default=None, help="YAML settings path")
    return ap

def main(argv: list[str] | None = None, client: Any | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = Settings.load(args.cfg)
    except ConfigError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    setup_logging(settings.log_level)

    payload = {
        "template": load_template(args.template),
        "productInfo": load_template(args.product),
        "extraPrompt": args.extra,
        "temperature": args.temperature,
    }
    if args.model:
        payload["model"] = args.model

    result = GenerateHandler(settings, client=client).handle("POST", payload)
    if result.status != 200:
        message = result.body.get("error") if isinstance(result.body, dict) else result.body
        LOGGER.error("Generation failed with status %s", result.status)
        print(f"error: {message}", file=sys.stderr)
        return 1
    print(result.body["text"])
    return 0

if __name__ == "__main__":
    sys.exit(main())
