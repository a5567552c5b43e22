"""Forms validating the JSON payloads accepted by the outlinker API.

Each form receives the decoded request body as its ``data``. List-valued
inputs (keywords, URLs) may be sent either as JSON arrays or as newline or
comma separated strings.
"""

from __future__ import annotations

import re
from typing import Any

from django import forms

from .engine.prompts import PromptProfile
from .engine.types import SearchConfig

MAX_CONTENT_CHARS = 200_000
MAX_KEYWORDS = 3
MAX_CONTEXT_URLS = 20

_SPLIT_RE = re.compile(r'[\n,]+')


def _as_items(value: Any) -> list[str]:
    if value in (None, ''):
        return []
    if isinstance(value, str):
        raw_items = _SPLIT_RE.split(value)
    elif isinstance(value, (list, tuple)):
        raw_items = [str(item) for item in value if item is not None]
    else:
        raise forms.ValidationError('Expected a list or a newline separated string.')
    return [item.strip() for item in raw_items if item.strip()]


class KeywordListField(forms.Field):
    """Up to three guidance phrases, deduplicated case-insensitively."""

    def to_python(self, value: Any) -> list[str]:
        keywords: list[str] = []
        seen: set[str] = set()
        for item in _as_items(value):
            key = item.lower()
            if key in seen:
                continue
            seen.add(key)
            keywords.append(item)
        return keywords

    def validate(self, value: list[str]) -> None:
        super().validate(value)
        if len(value) > MAX_KEYWORDS:
            raise forms.ValidationError(f'Provide at most {MAX_KEYWORDS} keywords.')


class URLListField(forms.Field):
    """A list of absolute http(s) URLs."""

    def to_python(self, value: Any) -> list[str]:
        url_field = forms.URLField()
        urls: list[str] = []
        for index, item in enumerate(_as_items(value), start=1):
            try:
                cleaned = url_field.clean(item)
            except forms.ValidationError as exc:
                raise forms.ValidationError(f'URL {index} is invalid: {exc.messages[0]}') from exc
            if cleaned not in urls:
                urls.append(cleaned)
        return urls

    def validate(self, value: list[str]) -> None:
        super().validate(value)
        if len(value) > MAX_CONTEXT_URLS:
            raise forms.ValidationError(f'Provide at most {MAX_CONTEXT_URLS} URLs.')


class ProfileFormMixin:
    """Parse the optional writer profile object."""

    def clean_profile(self) -> PromptProfile | None:
        value = self.cleaned_data.get('profile')  # type: ignore[attr-defined]
        if value in (None, ''):
            return None
        if not isinstance(value, dict):
            raise forms.ValidationError('Profile must be a JSON object.')
        return PromptProfile.from_dict(value)


class ExternalLinkForm(ProfileFormMixin, forms.Form):
    """Request for external link suggestions."""

    content = forms.CharField(max_length=MAX_CONTENT_CHARS, help_text='Article HTML or plain text.')
    keywords = KeywordListField(required=False, help_text='Up to three guidance phrases.')
    search_config = forms.JSONField(required=False)
    max_suggestions = forms.IntegerField(required=False, min_value=1, max_value=8)
    profile = forms.JSONField(required=False)

    def clean_search_config(self) -> SearchConfig | None:
        value = self.cleaned_data.get('search_config')
        if value in (None, ''):
            return None
        if not isinstance(value, dict):
            raise forms.ValidationError('Search config must be a JSON object.')
        return SearchConfig.from_dict(value)


class InternalLinkForm(ProfileFormMixin, forms.Form):
    """Request for internal link targets picked from the website context."""

    content = forms.CharField(max_length=MAX_CONTENT_CHARS)
    profile = forms.JSONField()

    def clean(self) -> dict[str, Any]:  # type: ignore[override]
        cleaned_data = super().clean()
        profile = cleaned_data.get('profile')
        if 'profile' not in self.errors and not (profile and profile.website_context):
            self.add_error('profile', 'A website context is required for internal linking.')
        return cleaned_data


class WebsiteContextForm(forms.Form):
    """Request to summarize a set of site pages."""

    urls = URLListField()
