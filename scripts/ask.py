#!/usr/bin/env python3
"""
Ask the profile assistant from the command line, without starting the API.

Uses the same relay, profile and provider configuration as the server
(GEMINI_API_KEY / LLM_PROVIDER from the environment or .env).

Run from project root:

    python scripts/ask.py "What projects has Nolin worked on?"
    python scripts/ask.py --show-prompt "How can I contact her?"
"""

import argparse
import sys
from pathlib import Path

# Project root on path so "app" resolves
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from app.agent.llm import build_generator
from app.agent.prompts import SYSTEM_INSTRUCTION
from app.core.errors import RelayError, StartupConfigurationError
from app.services.relay_service import answer, compose_prompt


def main() -> int:
    parser = argparse.ArgumentParser(description="Ask the profile assistant a question.")
    parser.add_argument("query", help="Question to answer from the profile.")
    parser.add_argument(
        "--show-prompt",
        action="store_true",
        help="Print the system instruction and composed prompt instead of calling the model.",
    )
    parser.add_argument("--provider", choices=["gemini", "openai"], help="Override LLM_PROVIDER.")
    args = parser.parse_args()

    try:
        if args.show_prompt:
            print(SYSTEM_INSTRUCTION)
            print()
            print(compose_prompt(args.query))
            return 0
        generator = build_generator(args.provider)
        print(answer(args.query, generator))
    except StartupConfigurationError as e:
        print(f"Configuration error: {e.message}", file=sys.stderr)
        return 2
    except RelayError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
