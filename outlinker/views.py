"""JSON API views for the outlinker app.

Each view decodes a JSON body, validates it with the matching form and
delegates to :mod:`outlinker.services`. Engine failures are translated into
JSON error responses: rate limits become 429, other upstream failures 502.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Type

from django import forms
from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST

from . import services
from .engine.errors import EngineError, FallbackInvocationFailure, GenerationRateLimited
from .forms import ExternalLinkForm, InternalLinkForm, WebsiteContextForm

logger = logging.getLogger(__name__)

# camelCase aliases accepted from browser clients
FIELD_ALIASES = {
    'searchConfig': 'search_config',
    'maxSuggestions': 'max_suggestions',
}


@csrf_exempt
@require_POST
def external_links(request: HttpRequest) -> JsonResponse:
    """Suggest authoritative external links for the submitted content.

    An empty suggestion list is a successful response. A failure of the
    last available search strategy is reported as an error.
    """

    form, error = _bind(request, ExternalLinkForm)
    if error is not None:
        return error

    data = form.cleaned_data
    try:
        suggestions = services.external_link_suggestions(
            data['content'],
            data['keywords'],
            search_config=data['search_config'],
            profile=data['profile'],
            max_suggestions=data['max_suggestions'],
        )
    except EngineError as exc:
        return _engine_error(exc)

    payload = [suggestion.to_dict() for suggestion in suggestions]
    return JsonResponse({'suggestions': payload, 'count': len(payload)})


@csrf_exempt
@require_POST
def internal_links(request: HttpRequest) -> JsonResponse:
    """Pick internal link targets from the profile's website context."""

    form, error = _bind(request, InternalLinkForm)
    if error is not None:
        return error

    try:
        urls = services.internal_link_targets(form.cleaned_data['content'], form.cleaned_data['profile'])
    except EngineError as exc:
        return _engine_error(exc)
    return JsonResponse({'urls': urls})


@csrf_exempt
@require_POST
def website_context(request: HttpRequest) -> JsonResponse:
    """Summarize up to twenty site pages into a website context block."""

    form, error = _bind(request, WebsiteContextForm)
    if error is not None:
        return error

    try:
        context = services.website_context(form.cleaned_data['urls'])
    except EngineError as exc:
        return _engine_error(exc)
    return JsonResponse({'context': context})


def _bind(request: HttpRequest, form_class: Type[forms.Form]) -> tuple[Any, JsonResponse | None]:
    """Decode the JSON body and bind it to ``form_class``.

    Parameters
    ----------
    request:
        The incoming POST request.
    form_class:
        The form validating the payload.

    Returns
    -------
    tuple
        The bound form and ``None`` when valid; otherwise ``None`` and a
        400 response describing the problem.
    """

    try:
        payload = json.loads(request.body or b'{}')
    except (ValueError, UnicodeDecodeError):
        return None, JsonResponse({'detail': 'Request body must be valid JSON.'}, status=400)
    if not isinstance(payload, dict):
        return None, JsonResponse({'detail': 'Request body must be a JSON object.'}, status=400)

    data: Dict[str, Any] = {FIELD_ALIASES.get(key, key): value for key, value in payload.items()}
    form = form_class(data)
    if not form.is_valid():
        errors = {field: list(messages) for field, messages in form.errors.items()}
        return None, JsonResponse({'detail': 'Invalid request.', 'errors': errors}, status=400)
    return form, None


def _engine_error(exc: EngineError) -> JsonResponse:
    rate_limited = isinstance(exc, GenerationRateLimited) or (
        isinstance(exc, FallbackInvocationFailure) and isinstance(exc.__cause__, GenerationRateLimited)
    )
    if rate_limited:
        logger.warning('Generative service rate limited: %s', exc)
        response = JsonResponse(
            {'detail': 'The AI service is rate limited. Please wait a moment and try again.'},
            status=429,
        )
        response['Retry-After'] = '60'
        return response

    logger.error('Link engine failure: %s', exc)
    return JsonResponse({'detail': str(exc) or 'Link suggestion failed.'}, status=502)
