"""
Modal Forms — Views

@file modal_forms/views.py
"""

from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from cascade.validation import to_int

from .context import build_modal_context
from .services import FormValidationService


class FormValidationView(APIView):
    """
    POST forms/<form_name>/validate/

    Runs the modal's rules without saving anything. The optional
    ``editing_record_id`` field identifies the record being edited so
    its own port is not reported as taken.
    """

    permission_classes = [IsAuthenticated]

    def post(self, request, form_name):
        data = dict(request.data.items()) if hasattr(request.data, 'items') else {}
        editing_record_id = data.pop('editing_record_id', None)
        context = build_modal_context(request.user, editing_record_id=to_int(editing_record_id))
        errors = FormValidationService.validate(form_name, data, context)
        return Response({
            'success': True,
            'data': {'valid': not errors, 'errors': errors},
        })
