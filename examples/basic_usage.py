#!/usr/bin/env python3
"""
Basic Varnavinyas Usage Example

This example demonstrates the core workflow:
1. Check single words
2. Follow a derivation step by step
3. Check free text, with and without grammar hints
4. Join and split morphemes with sandhi
5. Build a custom lexicon
"""

import logging
from pathlib import Path

import varnavinyas
from varnavinyas import sandhi
from varnavinyas.config import CheckOptions
from varnavinyas.lexicon import LexiconBuilder, override_lexicon
from varnavinyas.models import Origin, table


def main():
    # ─────────────────────────────────────────────────────────────────────────
    # 1. Single Words
    # ─────────────────────────────────────────────────────────────────────────

    for word in ["अत्याधिक", "मीठो", "नेपाल", "संग"]:
        diagnostic = varnavinyas.check_word(word)
        if diagnostic is None:
            print(f"{word}: no issue found")
        else:
            print(f"{word} → {diagnostic.correction} [{diagnostic.rule}]")

    # ─────────────────────────────────────────────────────────────────────────
    # 2. Derivation Trace
    # ─────────────────────────────────────────────────────────────────────────

    derivation = varnavinyas.derive("मीठो")
    print(f"\n{derivation.input} → {derivation.output}")
    for step in derivation.steps:
        print(f"  {step.before} → {step.after}  ({step.rule}: {step.description})")

    analysis = varnavinyas.analyze_word("मीठो")
    print(f"  Origin: {analysis.origin.label} ({analysis.origin_source.value})")
    for note in analysis.rule_notes:
        print(f"  Note: {note.explanation}")

    # ─────────────────────────────────────────────────────────────────────────
    # 3. Free Text
    # ─────────────────────────────────────────────────────────────────────────

    text = "धेरै मानिसहरू आए. ऊ घर तिर गयो।"
    text_bytes = text.encode("utf-8")

    for d in varnavinyas.check_text(text):
        print(f"[{d.span_start}:{d.span_end}] {text_bytes[d.span_start:d.span_end].decode()} → {d.correction}")

    # Grammar hints are off by default and always below 0.8 confidence
    pipeline = varnavinyas.create_pipeline(grammar=True, workers=4)
    diagnostics, stats = pipeline.check_text_with_stats(text)
    for d in diagnostics:
        print(f"  {d.kind.value:8s} {d.confidence:.2f} {d.incorrect} → {d.correction}")
    print(f"  Tokens: {stats.tokens_seen}, known: {stats.tokens_skipped_known}")

    # Only authoritative findings
    strict = varnavinyas.check_text(text, CheckOptions(grammar=True, min_confidence=0.8))
    print(f"  {len(strict)} diagnostics at confidence >= 0.8")

    # ─────────────────────────────────────────────────────────────────────────
    # 4. Sandhi
    # ─────────────────────────────────────────────────────────────────────────

    result = sandhi.apply("अति", "अधिक")
    print(f"\nअति + अधिक = {result.output} ({result.sandhi_type.label}: {result.rule_citation})")

    for left, right, result in sandhi.split("सूर्योदय"):
        print(f"  सूर्योदय = {left} + {right} ({result.sandhi_type.value})")

    try:
        sandhi.apply("राम", "घर")
    except varnavinyas.NoRuleAppliesError as e:
        print(f"  {e}")

    # ─────────────────────────────────────────────────────────────────────────
    # 5. Custom Lexicon
    # ─────────────────────────────────────────────────────────────────────────

    builder = LexiconBuilder()
    builder.add_words(["नेपाल", "हिमाल"], Origin.DESHAJ)
    builder.add_correction("अत्याधिक", "अत्यधिक", table(), "अति + अधिक = अत्यधिक")
    lexicon = builder.build()

    # The blob is byte-identical for identical inputs
    blob_path = Path("custom.vvlx")
    lexicon.save(blob_path)
    print(f"\nSaved {len(lexicon)} words to {blob_path}")

    with override_lexicon(lexicon):
        print(f"  Custom lexicon: {varnavinyas.derive('अत्याधिक').output}")

    blob_path.unlink()

    # ─────────────────────────────────────────────────────────────────────────
    # 6. API Dictionaries
    # ─────────────────────────────────────────────────────────────────────────

    from varnavinyas import api

    print(api.decompose_word("प्रशासनमा"))
    print(api.sandhi_apply("राम", "घर"))


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()
