# lifecycle_peek/middleware.py

from django.utils.deprecation import MiddlewareMixin

from .conf import get_settings
from .variants import ExecutionContext


REQUEST_ATTR = "lifecycle_peek_context"


def execution_context_for(request) -> ExecutionContext:
    """
    Which surface renders this request. Falls back to the path when the
    middleware has not run (e.g. RequestFactory requests in tests).
    """
    flag = getattr(request, REQUEST_ATTR, None)
    if flag is not None:
        return ExecutionContext(flag)

    path = getattr(request, "path", "") or ""
    for prefix in get_settings().portal_path_prefixes:
        if path.startswith(prefix):
            return ExecutionContext.PORTAL
    return ExecutionContext.CONSOLE


class ExecutionContextMiddleware(MiddlewareMixin):
    """
    Tags every request with the surface it belongs to (console or portal).

    Must tolerate any request; it never rejects or redirects.
    """

    def process_request(self, request):
        setattr(request, REQUEST_ATTR, execution_context_for(request))
        return None
