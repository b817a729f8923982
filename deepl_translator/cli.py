"""
Command-line interface for text translation
"""
import argparse
import asyncio
import json
import logging
from typing import List, Optional

import httpx

from deepl_translator.config import (
    DEFAULT_SOURCE_LANGUAGE, DEFAULT_TARGET_LANGUAGE, JSONRPC_VERSION, DeepLConfig,
)
from deepl_translator.core.exceptions import TranslationError
from deepl_translator.core.providers import available_providers, create_provider

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Translate text with the DeepL web translator.")
    parser.add_argument("text", nargs="?", default=None, help="Text to translate.")
    parser.add_argument("-i", "--input", default=None, help="Read the text from this file instead.")
    parser.add_argument("-sl", "--source_lang", default=DEFAULT_SOURCE_LANGUAGE, help=f"Source language (default: {DEFAULT_SOURCE_LANGUAGE}).")
    parser.add_argument("-tl", "--target_lang", default=DEFAULT_TARGET_LANGUAGE, help=f"Target language (default: {DEFAULT_TARGET_LANGUAGE}).")
    parser.add_argument("--provider", default="deepl", choices=available_providers(), help="Translation provider to use (default: deepl).")
    parser.add_argument("--jsonrpc", default=JSONRPC_VERSION, help=f"JSON-RPC version string (default: {JSONRPC_VERSION}).")
    parser.add_argument("--lmtbid", default=None, help="Override the LMTBID session cookie.")
    parser.add_argument("--json", action="store_true", help="Print the full result as JSON.")
    parser.add_argument("--detect", action="store_true", help="Only detect the source language.")
    parser.add_argument("--list-languages", action="store_true", help="List supported languages and exit.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def _read_text(args, parser: argparse.ArgumentParser) -> str:
    if args.input:
        with open(args.input, "r", encoding="utf-8") as f:
            return f.read()
    if args.text:
        return args.text
    parser.error("either TEXT or --input is required")


async def run(args, text: str) -> int:
    config = DeepLConfig.from_cli_args(args)
    provider = create_provider(args.provider)
    try:
        if args.detect:
            print(await provider.detect(text, config))
            return 0

        result = await provider.translate(text, args.source_lang, args.target_lang, config)
        if args.json:
            print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
        else:
            print(f"[{result.from_lang} -> {result.to_lang}]")
            for paragraph in result.trans.paragraphs:
                print(paragraph)
        return 0
    finally:
        await provider.close()


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if args.list_languages:
        for lang in create_provider(args.provider).get_supported_languages():
            print(lang)
        return 0

    text = _read_text(args, parser)

    try:
        return asyncio.run(run(args, text))
    except TranslationError as e:
        logger.error("Translation failed: %s", e)
        return 1
    except httpx.HTTPError as e:
        logger.error("Request to translation backend failed: %s", e)
        return 1
