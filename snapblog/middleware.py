"""
Request middleware for snapblog.
"""
OVERRIDABLE_METHODS = {"PUT", "PATCH", "DELETE"}


class MethodOverrideMiddleware:
    """
    Let HTML forms issue PUT/PATCH/DELETE.

    A POST carrying a ``_method`` form field (or an
    ``X-HTTP-Method-Override`` header) is dispatched as that method.

    The switch happens in ``process_view`` and the middleware must sit after
    CsrfViewMiddleware: the CSRF check only reads the form token from POSTs,
    so it has to see the request before the method changes.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        return self.get_response(request)

    def process_view(self, request, view_func, view_args, view_kwargs):
        if request.method != "POST":
            return None
        override = (
            request.POST.get("_method")
            or request.META.get("HTTP_X_HTTP_METHOD_OVERRIDE", "")
        ).upper()
        if override in OVERRIDABLE_METHODS:
            request.method = override
        return None
