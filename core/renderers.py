"""
Core — Response Renderer

Successful responses leave the API in the envelope the modal clients
expect:
  { "success": true, "data": ..., "meta": ... }

Paginated list responses move their counters into ``meta``; payloads
that already carry ``success`` (and every error response) pass through.

@file core/renderers.py
"""

from rest_framework.renderers import JSONRenderer

PAGINATION_KEYS = ('count', 'next', 'previous', 'page_size', 'total_pages')


def envelope(data):
    if isinstance(data, dict) and 'success' in data:
        return data
    if isinstance(data, dict) and 'results' in data:
        return {
            'success': True,
            'data': data['results'],
            'meta': {key: data.get(key) for key in PAGINATION_KEYS},
        }
    return {'success': True, 'data': data}


class StandardJSONRenderer(JSONRenderer):

    def render(self, data, accepted_media_type=None, renderer_context=None):
        response = (renderer_context or {}).get('response')
        if response is not None and response.status_code >= 400:
            return super().render(data, accepted_media_type, renderer_context)
        if response is not None and response.status_code == 204:
            return b''
        return super().render(envelope(data), accepted_media_type, renderer_context)
