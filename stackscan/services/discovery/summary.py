"""Helpers for reading and presenting an analysis result."""

from stackscan.services.discovery.types import AnalysisResult


def get_top_framework(result: AnalysisResult) -> tuple[str, int] | None:
    """Highest-confidence framework and its score; ties go to the first seen."""
    if not result.framework_confidence:
        return None
    name = max(result.framework_confidence, key=lambda fw: result.framework_confidence[fw])
    return name, result.framework_confidence[name]


def format_stack_summary(result: AnalysisResult) -> str:
    """
    Format an analysis result as a short markdown summary.

    Args:
        result: AnalysisResult from StackDetector

    Returns:
        Markdown string, or "" if nothing was confirmed
    """
    if not result.confirmed_discoveries:
        return ""

    lines = [
        "## Detected Stack",
        "",
        f"Signature: `{result.stack_signature}`",
        f"Confirmed formats: {len(result.confirmed_discoveries)} (score {result.total_score})",
    ]

    if result.framework_confidence:
        lines.append("")
        ranked = sorted(result.framework_confidence.items(), key=lambda item: -item[1])
        for name, confidence in ranked:
            lines.append(f"- **{name}** ({confidence})")

    if result.recommendations:
        lines.extend(["", "Recommendations:"])
        for slot, value in result.recommendations.items():
            lines.append(f"- {slot}: {value}")

    context = result.project_context
    if context.project_name:
        lines.extend(["", f"Project: {context.project_name}"])
        if context.project_goal:
            lines.append(f"> {context.project_goal}")
        if context.manifest_grade:
            lines.append(f"Manifest quality: {context.manifest_grade.tier.value}")

    return "\n".join(lines)
