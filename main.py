#!/usr/bin/env python3
"""BrightPath Studio chat relay CLI."""

import argparse
import logging
import sys
from config.settings import Settings
from schemas.business import BRIGHTPATH_STUDIO
from orchestrator import RelayController


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description=f"Chat with the {BRIGHTPATH_STUDIO.name} business assistant"
    )
    parser.add_argument(
        "--provider",
        type=str,
        choices=["openai", "anthropic"],
        default="openai",
        help="Completion provider (default: openai)"
    )
    parser.add_argument(
        "--model",
        type=str,
        help="Override the provider's default model"
    )
    parser.add_argument(
        "--db-path",
        type=str,
        default="data/chat_history.db",
        help="SQLite file holding the chat history (default: data/chat_history.db)"
    )
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Clear the stored chat history before starting"
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output"
    )

    args = parser.parse_args()

    settings = Settings(
        llm_provider=args.provider,
        llm_model=args.model,
        db_path=args.db_path,
        verbose=args.verbose,
    )
    configure_logging(settings)

    controller = RelayController.from_settings(settings)
    if args.reset:
        controller.reset()

    print("\n" + "="*60)
    print(f"{BRIGHTPATH_STUDIO.name} - {BRIGHTPATH_STUDIO.tagline}")
    print("="*60 + "\n")

    for message in controller.transcript:
        _print_message(message)

    while True:
        try:
            text = input("you> ")
        except (EOFError, KeyboardInterrupt):
            print()
            break

        if text.strip() in ("/quit", "/exit"):
            break

        before = len(controller.transcript)
        controller.submit_user_turn(text)
        for message in controller.transcript[before + 1:]:
            _print_message(message)

    sys.exit(0)


def configure_logging(settings: Settings) -> int:
    """Set the root log level from settings and return it."""
    level = logging.DEBUG if settings.verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        force=True
    )
    return level


def _print_message(message):
    author = "you" if message.role.value == "user" else BRIGHTPATH_STUDIO.avatar
    stamp = message.timestamp.astimezone().strftime("%H:%M")
    print(f"[{stamp}] {author}> {message.content}")


if __name__ == "__main__":
    main()
