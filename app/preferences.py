"""Preference parsing and normalization.

Raw preferences arrive as loosely typed tokens (``"quick"``, ``"laugh,dark"``).
:func:`normalize_preferences` maps them onto the canonical catalog values in
:mod:`app.vocabulary`. Unknown tokens never raise: they simply contribute no
constraint.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from .utils import dedupe, fold_token, parse_leading_int, split_tokens
from .vocabulary import (
    ANY_TOKEN,
    CONTENT_TYPES,
    DURATIONS,
    ERAS,
    LANGUAGES,
    MOODS,
    EraRange,
    LanguageFilter,
)

MULTI_VALUE_PARAMS = ("moods", "languages", "eras", "exclude", "excludeIds", "exclude_ids")


class PreferenceRequest(BaseModel):
    """Raw recommendation preferences as supplied by a client."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    duration: str | None = Field(
        default=None,
        validation_alias=AliasChoices("duration", "time"),
    )
    moods: tuple[str, ...] = Field(default=())
    content_type: str | None = Field(
        default=None,
        validation_alias=AliasChoices("content_type", "contentType"),
    )
    languages: tuple[str, ...] = Field(default=())
    eras: tuple[str, ...] = Field(default=())
    exclude_ids: tuple[str, ...] = Field(
        default=(),
        validation_alias=AliasChoices("exclude_ids", "excludeIds", "exclude"),
    )

    @field_validator("duration", "content_type", mode="before")
    @classmethod
    def _coerce_single(cls, value: object) -> str | None:
        # Several values for a single-choice field name no known choice.
        tokens = split_tokens(value)
        return tokens[0] if len(tokens) == 1 else None

    @field_validator("moods", "languages", "eras", "exclude_ids", mode="before")
    @classmethod
    def _coerce_tokens(cls, value: object) -> tuple[str, ...]:
        return tuple(split_tokens(value))

    @classmethod
    def from_query(cls, params: Mapping[str, Any]) -> "PreferenceRequest":
        """Build a request from query parameters, merging repeated keys."""

        getlist = getattr(params, "getlist", None)
        payload: dict[str, Any] = {}
        for key in params.keys():
            if key in MULTI_VALUE_PARAMS and callable(getlist):
                payload[key] = list(getlist(key))
            else:
                payload[key] = params[key]
        return cls.model_validate(payload)


@dataclass(frozen=True)
class NormalizedPreferences:
    """Canonical constraints ready for the filter composer."""

    duration: str | None = None
    moods: tuple[str, ...] = ()
    content_type: str | None = None
    languages: tuple[LanguageFilter, ...] = ()
    eras: tuple[EraRange, ...] = ()
    exclude_ids: tuple[int, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (
            self.duration
            or self.moods
            or self.content_type
            or self.languages
            or self.eras
            or self.exclude_ids
        )

    def to_request(self) -> PreferenceRequest:
        """Express these constraints as a request using canonical values."""

        return PreferenceRequest(
            duration=self.duration,
            moods=self.moods,
            content_type=self.content_type,
            languages=tuple(entry.token for entry in self.languages),
            eras=tuple(entry.token for entry in self.eras),
            exclude_ids=tuple(str(value) for value in self.exclude_ids),
        )


def normalize_duration(token: str | None) -> str | None:
    if not token:
        return None
    return DURATIONS.get(fold_token(token))


def normalize_moods(tokens: Iterable[str]) -> tuple[str, ...]:
    known = (MOODS.get(fold_token(token)) for token in tokens)
    return dedupe(mood for mood in known if mood)


def normalize_content_type(token: str | None) -> str | None:
    if not token or fold_token(token) == ANY_TOKEN:
        return None
    return CONTENT_TYPES.get(fold_token(token))


def normalize_languages(tokens: Iterable[str]) -> tuple[LanguageFilter, ...]:
    keys = (fold_token(token) for token in tokens)
    return dedupe(LANGUAGES[key] for key in keys if key != ANY_TOKEN and key in LANGUAGES)


def normalize_eras(tokens: Iterable[str]) -> tuple[EraRange, ...]:
    keys = (fold_token(token) for token in tokens)
    return dedupe(ERAS[key] for key in keys if key in ERAS)


def normalize_exclude_ids(values: Iterable[object]) -> tuple[int, ...]:
    parsed = (parse_leading_int(value) for value in values)
    return dedupe(value for value in parsed if value is not None)


def normalize_preferences(request: PreferenceRequest) -> NormalizedPreferences:
    """Map a raw request onto canonical constraints."""

    return NormalizedPreferences(
        duration=normalize_duration(request.duration),
        moods=normalize_moods(request.moods),
        content_type=normalize_content_type(request.content_type),
        languages=normalize_languages(request.languages),
        eras=normalize_eras(request.eras),
        exclude_ids=normalize_exclude_ids(request.exclude_ids),
    )
