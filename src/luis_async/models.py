"""Recognition result models parsed from LUIS prediction responses."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Intent:
    """A scored intent, e.g. ``Intent(name="BookFlight", score=0.97)``."""

    name: str
    score: float | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Intent":
        return cls(name=data.get("intent", ""), score=data.get("score"))


@dataclass(frozen=True)
class Entity:
    """A recognized span of the utterance.

    Attributes:
        type: Entity type name, e.g. 'City' or 'builtin.datetimeV2.date'.
        raw_value: The text LUIS recognized.
        canonical_values: Resolved forms (list entity synonyms, dates,
            numbers), when LUIS returned any.
        start_index: Offset of the span in the query.
        end_index: Offset of the last character of the span.
        score: Recognition score for machine-learned entities.
    """

    type: str
    raw_value: str
    canonical_values: tuple[str, ...] | None = None
    start_index: int | None = None
    end_index: int | None = None
    score: float | None = None

    @property
    def value(self) -> str:
        """Canonical form when one exists, otherwise the recognized text."""
        if self.canonical_values:
            return self.canonical_values[0]
        return self.raw_value

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Entity":
        return cls(
            type=data.get("type", ""),
            raw_value=data.get("entity", ""),
            canonical_values=_parse_resolution(data.get("resolution")),
            start_index=data.get("startIndex"),
            end_index=data.get("endIndex"),
            score=data.get("score"),
        )


@dataclass(frozen=True)
class DialogState:
    """Dialog continuation data returned for apps with action parameters."""

    context_id: str | None = None
    status: str | None = None
    prompt: str | None = None
    parameter_name: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DialogState":
        return cls(
            context_id=data.get("contextId"),
            status=data.get("status"),
            prompt=data.get("prompt"),
            parameter_name=data.get("parameterName"),
        )


@dataclass(frozen=True)
class RecognitionResult:
    """Structured LUIS response.

    Only the top intent and the entity list are interpreted; the full
    document stays available in ``raw``.
    """

    query: str | None = None
    top_intent: Intent | None = None
    intents: tuple[Intent, ...] = ()
    entities: tuple[Entity, ...] = ()
    dialog: DialogState | None = None
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_json(cls, payload: dict[str, Any]) -> "RecognitionResult":
        """Create a result from a decoded LUIS v2 response body.

        Args:
            payload: Decoded JSON document.

        Returns:
            RecognitionResult instance. Missing sections become empty values.
        """
        top = payload.get("topScoringIntent")
        dialog = payload.get("dialog")
        return cls(
            query=payload.get("query"),
            top_intent=Intent.from_dict(top) if top else None,
            intents=tuple(Intent.from_dict(item) for item in payload.get("intents") or ()),
            entities=tuple(Entity.from_dict(item) for item in payload.get("entities") or ()),
            dialog=DialogState.from_dict(dialog) if dialog else None,
            raw=payload,
        )


def _parse_resolution(resolution: Any) -> tuple[str, ...] | None:
    if not isinstance(resolution, dict):
        return None

    values = resolution.get("values")
    if isinstance(values, list):
        resolved = []
        for item in values:
            if isinstance(item, str):
                resolved.append(item)
            elif isinstance(item, dict):
                # datetimeV2 resolutions carry objects instead of strings
                candidate = item.get("value") or item.get("timex")
                if candidate is not None:
                    resolved.append(str(candidate))
            elif item is not None:
                resolved.append(str(item))
        return tuple(resolved)

    value = resolution.get("value")
    if value is not None:
        return (str(value),)

    return None
