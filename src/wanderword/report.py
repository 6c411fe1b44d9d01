"""Plain-text report of a word journey, as printed by the CLI."""

from typing import Any

from wanderword.journey import WordJourney

RULE = "=" * 60


def format_report(data: Any) -> str:
    """Render a journey dict as a readable multi-line report.

    Tolerates missing and wrong-typed fields: backends are not required to
    return every key, and in non-strict mode any JSON object reaches here.
    """
    journey = WordJourney.from_dict(data)
    origin = journey.origin

    lines = [
        "",
        RULE,
        f"📖 {journey.word.upper()}",
        RULE,
        "",
        f"📝 Definition: {journey.current_meaning}",
        "",
        "🌍 ORIGIN",
        f"   Word: \"{origin.word}\" ({origin.language})",
        f"   Meaning: {origin.meaning}",
        f"   Location: {origin.location.name}",
        f"   Century: {origin.century}",
        "",
        "🗺️  JOURNEY",
    ]

    for idx, step in enumerate(journey.journey, start=1):
        icon = "⛵" if step.by_sea else "🚶"
        lines.append("")
        lines.append(f"   {idx}. {icon} \"{step.word}\" ({step.language})")
        lines.append(f"      → {step.location.name} | {step.century}")
        if step.notes:
            lines.append(f"      {step.notes}")

    if journey.narrative:
        lines.append("")
        lines.append("📜 NARRATIVE")
        lines.extend(f"   {line}" for line in journey.narrative.split("\n"))

    if journey.fun_fact:
        lines.append("")
        lines.append("💡 FUN FACT")
        lines.append(f"   {journey.fun_fact}")

    lines.append("")
    lines.append(RULE)
    return "\n".join(lines)
