"""Command line entry point: send one prompt to the local LLM server."""
from __future__ import annotations
import argparse
import logging
import sys
import time

from local_content_generator.client.local_generator import LocalContentGenerator
from local_content_generator.common.errors import LocalLLMError
from local_content_generator.common.logging_setup import setup_logging
from local_content_generator.common.schema import GenerationConfig, GenerationRequest
from local_content_generator.common.settings import load_settings

LOGGER = logging.getLogger("localgen.cli")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Generate content with a local LLM server")
    ap.add_argument("--text", required=True, help="User input text")
    ap.add_argument("--cfg", default=None, help="YAML config path (base_url, model, timeout_ms)")
    ap.add_argument("--stream", action="store_true", help="Use streamGenerateContent")
    ap.add_argument("--temperature", type=float, default=None)
    ap.add_argument("--top-p", type=float, default=None)
    ap.add_argument("--top-k", type=int, default=None)
    ap.add_argument("--candidate-count", type=int, default=None)
    ap.add_argument("--max-tokens", type=int, default=None)
    ap.add_argument("--stop", action="append", default=None, help="Stop sequence (repeatable)")
    return ap


def main(argv: list[str] | None = None) -> int:
    setup_logging()
    args = build_parser().parse_args(argv)

    request = GenerationRequest(
        contents=args.text,
        config=GenerationConfig(
            temperature=args.temperature,
            top_p=args.top_p,
            top_k=args.top_k,
            candidate_count=args.candidate_count,
            max_output_tokens=args.max_tokens,
            stop_sequences=args.stop,
        ),
    )

    start = time.time()
    try:
        generator = LocalContentGenerator(load_settings(args.cfg))
        if args.stream:
            for event in generator.generate_content_stream(request):
                sys.stdout.write(event.text)
                sys.stdout.flush()
            sys.stdout.write("\n")
        else:
            print(generator.generate_content(request).text)
    except (LocalLLMError, OSError) as e:
        LOGGER.error("%s", e)
        return 1
    LOGGER.info("Latency: %sms", int((time.time() - start) * 1000))
    return 0


if __name__ == "__main__":
    sys.exit(main())
