#!/usr/bin/env python3
"""
Demo script for CodeEcho.

This script walks through the suggestion pipeline: comment suppression,
static completions, the model path and the suggestion cache. The model
section needs a running Ollama with the configured model pulled.
"""

import asyncio
import time

from code_echo import EditContext, settings
from code_echo.repositories import InMemorySuggestionRepository, LoggingNotifier, OllamaCompletionProvider
from code_echo.services import SuggestionService, is_suppressed, match_static


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def demo_suppression() -> None:
    """Show which prefixes never get a suggestion."""
    print_section("Comment and Docstring Suppression")

    prefixes = [
        "    # compute the total",
        "// TODO",
        "x = 1  /* note",
        '    """Return the',
        "total = sum(",
    ]
    for prefix in prefixes:
        verdict = "suppressed" if is_suppressed(prefix) else "eligible"
        print(f"  {prefix!r:35} -> {verdict}")


def demo_static_patterns() -> None:
    """Show completions answered without the model."""
    print_section("Static Completions")

    cases = [
        ('if __name__ == "', ""),
        ("if ", ""),
        ("    def area(self):", ""),
        ("", "class Shape:"),
        ("total = sum(", ""),
    ]
    for prefix, previous_line in cases:
        match = match_static(prefix, previous_line)
        if match is not None:
            print(f"  {prefix!r:25} -> [{match.kind.value}] {match.text!r}")
        else:
            print(f"  {prefix!r:25} -> (model)")


async def demo_model_and_cache() -> None:
    """Ask the model, then ask again to hit the cache."""
    print_section("Model Path and Cache")

    model = OllamaCompletionProvider.create()
    service = SuggestionService.create(
        model=model,
        store=InMemorySuggestionRepository.create(),
        notifier=LoggingNotifier(),
    )

    document = "import math\n\n\ndef circle_area(radius):\n    return math.pi * "
    context = EditContext.from_document(
        "demo.py", document, line=4, column=len("    return math.pi * "), radius=settings.context_radius
    )

    try:
        if not await model.is_available():
            print(f"\n  Ollama is not reachable at {model.endpoint}")
            print("  Start it with: ollama serve")
            return

        for attempt in ("first request", "repeat request"):
            start = time.time()
            suggestions = await service.provide(context)
            elapsed_ms = (time.time() - start) * 1000
            print(f"\n  {attempt}: {elapsed_ms:.1f} ms")
            for suggestion in suggestions:
                print(f"  [{suggestion.source.value}] {suggestion.text!r}")
            if not suggestions:
                print("  (no suggestion)")

        print(f"\n  Stats: {service.get_stats()}")
    finally:
        await service.close()


def main() -> None:
    """Run all demos."""
    print("\n🚀 CodeEcho Demo")
    print("=" * 70)
    print(f"Model: {settings.model_name} at {settings.model_endpoint}")

    try:
        demo_suppression()
        demo_static_patterns()
        asyncio.run(demo_model_and_cache())

        print("\n" + "=" * 70)
        print("✅ Demo completed successfully!")
        print("=" * 70)

    except Exception as e:
        print(f"\n❌ Error: {e}")
        print("\nMake sure Ollama is running and the model is pulled:")
        print(f"  ollama pull {settings.model_name}")


if __name__ == "__main__":
    main()
