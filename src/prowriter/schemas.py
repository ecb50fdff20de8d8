"""Payload schemas for every artifact type, plus request shapes.

Each ``ArtifactType`` maps to exactly one pydantic model. ``validate_payload``
is the single entry point the store uses before writing a revision.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic import ValidationError as PydanticValidationError

from prowriter.core.errors import ValidationError


class ArtifactType(str, Enum):
    STYLE_PROFILE = "style_profile"
    CHARACTER_SHEET = "character_sheet"
    DRAFT_DIRECTIVE = "draft_directive"
    REVISION_PLAN = "revision_plan"
    QUALITY_REPORT = "quality_report"
    FREEFORM_NOTE = "freeform_note"


class Deliverable(str, Enum):
    SCENE = "scene"
    CHAPTER = "chapter"
    COLD_OPEN = "cold_open"
    SYNOPSIS = "synopsis"
    PITCH = "pitch"
    QUERY_LETTER = "query_letter"
    OUTLINE = "outline"


class Tense(str, Enum):
    PAST = "past"
    PRESENT = "present"


class Severity(str, Enum):
    INFO = "info"
    WARN = "warn"
    ERROR = "error"


class IssueCategory(str, Enum):
    COHERENCE = "coherence"
    CLARITY = "clarity"
    CONTINUITY = "continuity"
    MARKETABILITY = "marketability"
    STYLE_ALIGNMENT = "style_alignment"
    FILLER = "filler"
    RHYTHM = "rhythm"
    DIALOGUE = "dialogue"


class RevisionMode(str, Enum):
    HUMANIZE = "humanize"
    MARKETABILITY = "marketability"
    TIGHTEN = "tighten"
    VOICE_MATCH = "voice_match"
    CLARITY = "clarity"
    DIALOGUE_PUNCHUP = "dialogue_punchup"
    PACING = "pacing"


Label = Annotated[str, Field(min_length=1, max_length=200)]
Short = Annotated[str, Field(min_length=1, max_length=500)]
Medium = Annotated[str, Field(min_length=1, max_length=1500)]
Long = Annotated[str, Field(min_length=1, max_length=4000)]
# JSON integers only: no bools, no numeric strings
SchemaVersion = Annotated[int, Field(ge=1, strict=True)]
Count = Annotated[int, Field(ge=0, strict=True)]


class _Payload(BaseModel):
    """Unknown keys are dropped, matching what gets persisted."""

    model_config = ConfigDict(extra="ignore")


# ---------------------------------------------------------------------------
# Style profile
# ---------------------------------------------------------------------------


class Rhythm(_Payload):
    sentence_length_bias: Short | None = None
    punctuation_habits: Annotated[str, Field(min_length=1, max_length=1000)] | None = None
    paragraphing: Annotated[str, Field(min_length=1, max_length=1000)] | None = None


class Diction(_Payload):
    # "register" would shadow BaseModel.register
    register_: Short | None = Field(default=None, alias="register")
    concreteness_bias: Short | None = None
    verb_energy: Short | None = None
    adjective_policy: Short | None = None


class ImageryAndMetaphor(_Payload):
    purpose: Medium | None = None
    when_used: Medium | None = None
    how_used: Medium | None = None
    metaphor_budget: Short | None = None
    disallowed: list[Label] | None = None


class DescriptionStrategy(_Payload):
    focus: Medium | None = None
    omissions: Medium | None = None
    pacing: Medium | None = None


class ThemeHandling(_Payload):
    approach: Medium | None = None
    recurrence_signals: Medium | None = None


class PovBehavior(_Payload):
    distance: Annotated[str, Field(min_length=1, max_length=1000)] | None = None
    interiority: Annotated[str, Field(min_length=1, max_length=1000)] | None = None
    reliability: Annotated[str, Field(min_length=1, max_length=1000)] | None = None


class DialogueBehavior(_Payload):
    subtext_rules: Medium | None = None
    escalation_patterns: Medium | None = None
    exposition_hiding: Medium | None = None


class StyleConstraints(_Payload):
    must_avoid: list[Label] | None = None
    must_include: list[Label] | None = None
    rating_boundaries: Annotated[str, Field(min_length=1, max_length=300)] | None = None


class ApplicationRule(_Payload):
    why: Annotated[str, Field(min_length=1, max_length=1200)]
    when: Annotated[str, Field(min_length=1, max_length=1200)]
    how: Annotated[str, Field(min_length=1, max_length=1200)]


class StyleProfile(_Payload):
    schema_version: SchemaVersion
    label: Label
    influences: list[Label] | None = None
    rhythm: Rhythm | None = None
    diction: Diction | None = None
    imagery_and_metaphor: ImageryAndMetaphor | None = None
    description_strategy: DescriptionStrategy | None = None
    theme_handling: ThemeHandling | None = None
    pov_behavior: PovBehavior | None = None
    dialogue_behavior: DialogueBehavior | None = None
    constraints: StyleConstraints | None = None
    application_rules: list[ApplicationRule] | None = None


# ---------------------------------------------------------------------------
# Character sheet
# ---------------------------------------------------------------------------


class CharacterRelationship(_Payload):
    other_name: Label
    relationship: Short


class CharacterSheet(_Payload):
    schema_version: SchemaVersion
    name: Label
    role_in_story: Short | None = None
    pronouns: Annotated[str, Field(min_length=1, max_length=50)] | None = None
    age: Annotated[int, Field(ge=0, le=130, strict=True)] | None = None
    physical: Annotated[str, Field(min_length=1, max_length=2000)] | None = None
    voice: Annotated[str, Field(min_length=1, max_length=2000)] | None = None
    background: Long | None = None
    wants: list[Short] | None = None
    fears: list[Short] | None = None
    contradictions: list[Short] | None = None
    relationships: list[CharacterRelationship] | None = None
    notes: Annotated[str, Field(min_length=1, max_length=6000)] | None = None


# ---------------------------------------------------------------------------
# Draft directive
# ---------------------------------------------------------------------------


class Beat(_Payload):
    purpose: Short
    event: Annotated[str, Field(min_length=1, max_length=2000)]
    outcome: Annotated[str, Field(min_length=1, max_length=1000)] | None = None


Brief = Annotated[str, Field(min_length=1, max_length=1200)]
Rule = Annotated[str, Field(min_length=1, max_length=400)]


class DraftDirective(_Payload):
    schema_version: SchemaVersion
    deliverable: Deliverable
    pov: Label
    tense: Tense
    target_length_min: Annotated[int, Field(ge=1, strict=True)] | None = None
    target_length_max: Annotated[int, Field(ge=1, strict=True)] | None = None
    objective: Brief
    conflict: Brief
    stakes: Brief
    beats: Annotated[list[Beat], Field(min_length=1)]
    dialogue_intent: Brief | None = None
    style_constraints: list[Rule] | None = None
    must_include: list[Rule] | None = None
    must_avoid: list[Rule] | None = None
    continuity_requirements: list[Annotated[str, Field(min_length=1, max_length=600)]] | None = None

    @model_validator(mode="after")
    def _length_bounds(self) -> DraftDirective:
        lo, hi = self.target_length_min, self.target_length_max
        if lo is not None and hi is not None and lo > hi:
            raise ValueError("target_length_min must not exceed target_length_max")
        return self


# ---------------------------------------------------------------------------
# Revision plan
# ---------------------------------------------------------------------------


class RevisionPlanRequest(_Payload):
    schema_version: SchemaVersion
    mode: RevisionMode
    constraints: list[Rule] | None = None
    target_audience: Label | None = None
    tone: Label | None = None
    pov: Label | None = None
    rating_boundaries: Annotated[str, Field(min_length=1, max_length=300)] | None = None


class RevisionPlan(_Payload):
    schema_version: SchemaVersion
    mode: RevisionMode
    rubric: Annotated[list[Annotated[str, Field(min_length=1, max_length=600)]], Field(min_length=1)]
    risks_to_avoid: list[Rule] | None = None
    recommended_passes: list[Rule] | None = None


# ---------------------------------------------------------------------------
# Quality report
# ---------------------------------------------------------------------------


class ProseDiagnosticRequest(_Payload):
    schema_version: SchemaVersion
    text: Annotated[str, Field(min_length=1, max_length=200000)]
    directive_name: Label | None = None
    style_profile_name: Label | None = None


class QualityMetrics(_Payload):
    word_count: Count
    sentence_count: Count
    avg_sentence_words: Annotated[float, Field(ge=0)]
    adverb_like_count: Count
    vague_word_count: Count
    filler_phrase_count: Count
    metaphor_marker_count: Count
    dialogue_ratio: Annotated[float, Field(ge=0, le=1)]
    readability_flesch: float | None = None


class QualityIssue(_Payload):
    severity: Severity
    category: IssueCategory
    message: Brief


class QualityReportMeta(_Payload):
    directive_name: Label | None = None
    style_profile_name: Label | None = None


class QualityReport(_Payload):
    schema_version: SchemaVersion
    metrics: QualityMetrics
    issues: list[QualityIssue]
    meta: QualityReportMeta | None = None
    # Heuristic scan output and optionally cleaned text, stored verbatim
    deai: dict[str, Any] | None = None
    cleaned_text: str | None = None


# ---------------------------------------------------------------------------
# Freeform note and request envelopes
# ---------------------------------------------------------------------------


class FreeformNote(BaseModel):
    """Any object with a schema_version; extra keys are kept."""

    model_config = ConfigDict(extra="allow")

    schema_version: SchemaVersion


class ProjectCreate(_Payload):
    name: Label | None = None


class ArtifactUpsert(BaseModel):
    schema_version: SchemaVersion
    payload: Any


def _model_for(artifact_type: ArtifactType) -> type[BaseModel]:
    if artifact_type is ArtifactType.STYLE_PROFILE:
        return StyleProfile
    if artifact_type is ArtifactType.CHARACTER_SHEET:
        return CharacterSheet
    if artifact_type is ArtifactType.DRAFT_DIRECTIVE:
        return DraftDirective
    if artifact_type is ArtifactType.REVISION_PLAN:
        return RevisionPlan
    if artifact_type is ArtifactType.QUALITY_REPORT:
        return QualityReport
    if artifact_type is ArtifactType.FREEFORM_NOTE:
        return FreeformNote
    raise ValidationError(f"Unknown artifact type: {artifact_type}")


def parse_artifact_type(value: str | ArtifactType) -> ArtifactType:
    """Coerce a string to ArtifactType, raising ValidationError if unknown."""
    try:
        return ArtifactType(value)
    except ValueError:
        allowed = ", ".join(t.value for t in ArtifactType)
        raise ValidationError(f"Invalid artifact type '{value}'. Expected one of: {allowed}") from None


def parse_model(model: type[BaseModel], data: Any, what: str) -> BaseModel:
    """Validate ``data`` against ``model``, converting pydantic errors."""
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(
            f"Invalid {what}: {e.error_count()} error(s)",
            errors=e.errors(include_url=False, include_context=False),
        ) from e


def validate_payload(artifact_type: str | ArtifactType, payload: Any) -> dict[str, Any]:
    """Validate a payload for its artifact type and return the normalised dict.

    Typed payloads drop optional fields left as None. Freeform notes are
    stored exactly as given, nulls included.

    Raises:
        ValidationError: unknown type or payload that does not fit the schema.
    """
    artifact_type = parse_artifact_type(artifact_type)
    model = parse_model(_model_for(artifact_type), payload, artifact_type.value.replace("_", " "))
    if isinstance(model, FreeformNote):
        return model.model_dump(mode="json")
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)
