"""
Core — Response Renderer

Success envelope for every JSON response:

  { "success": true, "data": ..., "meta": {count, page_size, next, previous} }

"meta" is only present on paginated lists. Error bodies are built by
core.exceptions.standard_exception_handler and rendered untouched.

@file core/renderers.py
"""

from rest_framework import status
from rest_framework.renderers import JSONRenderer

PAGINATION_KEYS = ('count', 'page_size', 'next', 'previous')


class StandardJSONRenderer(JSONRenderer):

    def render(self, data, accepted_media_type=None, renderer_context=None):
        response = (renderer_context or {}).get('response')

        if response is not None:
            if response.status_code == status.HTTP_204_NO_CONTENT:
                return b''
            if response.status_code >= 400:
                return super().render(data, accepted_media_type, renderer_context)

        # Auth views build their own envelope.
        if isinstance(data, dict) and 'success' in data:
            return super().render(data, accepted_media_type, renderer_context)

        if isinstance(data, dict) and 'results' in data:
            envelope = {
                'success': True,
                'data': data['results'],
                'meta': {key: data.get(key) for key in PAGINATION_KEYS},
            }
        else:
            envelope = {'success': True, 'data': data}

        return super().render(envelope, accepted_media_type, renderer_context)
