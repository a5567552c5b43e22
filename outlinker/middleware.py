from __future__ import annotations

import math
import time
from typing import Callable

from django.conf import settings
from django.core.cache import caches
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.urls import Resolver404, resolve

DEFAULT_THROTTLE_LIMIT = 30  # requests
DEFAULT_THROTTLE_WINDOW = 60  # seconds
DEFAULT_THROTTLE_KEY_PREFIX = 'outlinker:throttle'


class SlidingWindowRateThrottle:
    """Per-IP, per-route sliding-window limiter backed by the cache.

    Routes listed in ``THROTTLED_ROUTES`` share ``THROTTLE_LIMIT`` unless
    ``THROTTLE_ROUTE_LIMITS`` names a tighter one.
    """

    def __init__(
        self,
        get_response: Callable[[HttpRequest], HttpResponse],
        *,
        limit: int | None = None,
        window: int | None = None,
        cache_alias: str = 'default',
        key_prefix: str | None = None,
    ) -> None:
        self.get_response = get_response
        self.limit = limit or getattr(settings, 'THROTTLE_LIMIT', DEFAULT_THROTTLE_LIMIT)
        self.window = window or getattr(settings, 'THROTTLE_WINDOW', DEFAULT_THROTTLE_WINDOW)
        self.cache = caches[cache_alias]
        self.key_prefix = key_prefix or getattr(settings, 'THROTTLE_KEY_PREFIX', DEFAULT_THROTTLE_KEY_PREFIX)

    def __call__(self, request: HttpRequest) -> HttpResponse:
        if request.method != 'POST':
            return self.get_response(request)

        route_name = self._route_name(request)
        if route_name is None or route_name not in getattr(settings, 'THROTTLED_ROUTES', []):
            return self.get_response(request)

        limit = getattr(settings, 'THROTTLE_ROUTE_LIMITS', {}).get(route_name, self.limit)
        cache_key = self._build_cache_key(request, route_name)
        now = time.time()
        bucket = [timestamp for timestamp in self.cache.get(cache_key, []) if timestamp > now - self.window]

        if len(bucket) >= limit:
            retry_after = max(1, math.ceil(bucket[0] + self.window - now))
            return self._reject(route_name, retry_after)

        bucket.append(now)
        self.cache.set(cache_key, bucket, timeout=self.window)
        return self.get_response(request)

    def _route_name(self, request: HttpRequest) -> str | None:
        try:
            match = resolve(request.path_info)
        except Resolver404:
            return None
        if match.url_name is None:
            return None
        return f"{match.namespace}:{match.url_name}" if match.namespace else match.url_name

    def _build_cache_key(self, request: HttpRequest, route_name: str) -> str:
        ip = self._get_client_ip(request)
        return f"{self.key_prefix}:{route_name}:{ip}"

    def _get_client_ip(self, request: HttpRequest) -> str:
        header = getattr(settings, 'THROTTLE_IP_HEADER', 'HTTP_X_FORWARDED_FOR')
        if header in request.META:
            return request.META[header].split(',')[0].strip()
        return request.META.get('REMOTE_ADDR', '0.0.0.0')

    def _reject(self, route_name: str, retry_after: int) -> HttpResponse:
        payload = {
            'detail': 'Rate limit exceeded. Try again shortly.',
            'route': route_name,
        }
        response = JsonResponse(payload, status=429)
        response['Retry-After'] = str(retry_after)
        return response


def sliding_window_rate_throttle(get_response: Callable[[HttpRequest], HttpResponse]) -> SlidingWindowRateThrottle:
    return SlidingWindowRateThrottle(get_response)
