# lifecycle_peek/views.py

from __future__ import annotations

import logging

from rest_framework import status
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .errors import LifecyclePeekError
from .services import get_service

logger = logging.getLogger(__name__)


def _truthy(value: str) -> bool:
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


class LifecycleDiagramView(APIView):
    """
    GET /lifecycle-peek/endpoint/?object_class=<label>&object_id=<pk>

    Optional:
    - stimuli_to_hide=a,b
    - hide_internal_stimuli=0|1 (defaults to configuration)

    Returns the rendered diagram fragment for one object.
    """

    permission_classes = [IsAuthenticated]

    def get(self, request):
        class_name = (request.query_params.get("object_class") or "").strip()
        object_id = (request.query_params.get("object_id") or "").strip()

        if not class_name or not object_id:
            raise ValidationError("object_class and object_id query parameters are required.")

        service = get_service()

        try:
            eligible = service.is_eligible_class(class_name)
        except LookupError:
            raise ValidationError({"object_class": f"Unknown class: {class_name}"})

        if not eligible:
            raise ValidationError({"object_class": f"Lifecycle not available for {class_name}."})

        model = service.metadata.get_class(class_name)
        try:
            obj = service.get_object(class_name, object_id)
        except (model.DoesNotExist, ValueError):
            raise NotFound("Object not found")

        stimuli_to_hide = [
            s.strip()
            for s in (request.query_params.get("stimuli_to_hide") or "").split(",")
            if s.strip()
        ]
        hide_internal = request.query_params.get("hide_internal_stimuli")

        try:
            content = service.render_diagram(
                obj,
                stimuli_to_hide=stimuli_to_hide,
                hide_internal_stimuli=None if hide_internal is None else _truthy(hide_internal),
            )
        except LifecyclePeekError as e:
            logger.exception("Lifecycle rendering failed for %s #%s", class_name, object_id)
            return Response({"detail": str(e)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        context = service.context_for(obj)
        return Response(
            {
                "object_class": context.object_class,
                "object_id": context.object_id,
                "object_state": context.current_state,
                "content": content,
            }
        )


class EligibleClassesView(APIView):
    """
    GET /lifecycle-peek/classes/

    Classes with a lifecycle and their state attribute code.
    """

    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response({"classes": get_service().enum_eligible_classes()})
