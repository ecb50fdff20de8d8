"""Revision-plan rubrics per editing mode."""

from __future__ import annotations

from typing import Any

from prowriter.schemas import RevisionMode, RevisionPlanRequest

BASE_RUBRIC = (
    "Clarity beats beauty; rewrite anything that is pretty but unclear",
    "Show, don't tell (behavior + concrete detail + consequence)",
    "Prefer active voice and strong verbs; cut unnecessary adverbs",
    "Use simple language whenever possible; avoid inflated phrasing",
    "Cut filler and redundant qualifiers aggressively",
    "Avoid clichés completely",
    "Every sentence must do work (action, tension, character, necessary info, or change)",
    "Maintain continuity and avoid inventing new facts",
    "Ensure cause-and-effect is clear at the paragraph level",
    "Remove decorative metaphor that does not clarify meaning",
)

MODE_RUBRIC: dict[RevisionMode, tuple[str, ...]] = {
    RevisionMode.HUMANIZE: (
        "Replace generic reactions with character-specific behavior and subtext",
        "Avoid melodrama; keep emotional shifts motivated by events",
        "Keep voice consistent and avoid robotic symmetry",
    ),
    RevisionMode.MARKETABILITY: (
        "Tighten openings and transitions; remove throat-clearing",
        "Sharpen objective, obstacle, and stakes early",
        "Prioritize readability and tension over ornament",
    ),
    RevisionMode.TIGHTEN: (
        "Remove redundancy without losing meaning",
        "Compress neutral description; keep only relevant details",
        "Prefer one precise image over several weaker ones",
    ),
    RevisionMode.VOICE_MATCH: (
        "Align diction and rhythm to the chosen style constraints",
        "Apply techniques without copying phrasing",
        "Keep metaphor budget near zero unless it clarifies",
    ),
    RevisionMode.CLARITY: (
        "Disambiguate pronouns and causal links",
        "Ground setting and action so the reader can visualize sequence",
        "Replace abstract nouns with concrete actions",
    ),
    RevisionMode.DIALOGUE_PUNCHUP: (
        "Dialogue must have leverage and subtext",
        "Avoid on-the-nose exposition; hide info inside conflict",
        "Track power shifts per exchange",
    ),
    RevisionMode.PACING: (
        "Compress low-tension passages; expand high-tension turns",
        "End on change: decision, reveal, reversal, escalation",
        "Make each paragraph move the situation",
    ),
}

RISKS_TO_AVOID = (
    "Vague sensory filler",
    "Unmotivated emotional swings",
    "Abstract metaphors that do not clarify",
    "Continuity contradictions",
    "Cliché phrasing",
)

RECOMMENDED_PASSES = (
    "Continuity pass",
    "Clarity pass",
    "Pacing pass",
    "Line-level tightening pass",
)


def synthesize(mode: str | RevisionMode) -> dict[str, list[str]]:
    """Base rubric plus the mode's extension, risks and passes.

    Raises:
        ValueError: ``mode`` is not a RevisionMode value.
    """
    mode = RevisionMode(mode)
    return {
        "rubric": [*BASE_RUBRIC, *MODE_RUBRIC[mode]],
        "risks_to_avoid": list(RISKS_TO_AVOID),
        "recommended_passes": list(RECOMMENDED_PASSES),
    }


def build_revision_plan(request: RevisionPlanRequest) -> dict[str, Any]:
    """Turn a validated request into a revision_plan payload.

    Request context (constraints, audience, tone, POV, rating boundaries) is
    appended to the rubric in that fixed order.
    """
    plan = synthesize(request.mode)
    rubric = plan["rubric"]
    rubric.extend(f"Honor constraint: {c}" for c in request.constraints or [])
    if request.target_audience:
        rubric.append(f"Write for the target audience: {request.target_audience}")
    if request.tone:
        rubric.append(f"Keep the tone: {request.tone}")
    if request.pov:
        rubric.append(f"Stay in POV: {request.pov}")
    if request.rating_boundaries:
        rubric.append(f"Respect rating boundaries: {request.rating_boundaries}")

    return {
        "schema_version": request.schema_version,
        "mode": RevisionMode(request.mode).value,
        **plan,
    }
