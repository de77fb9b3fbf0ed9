# lifecycle_peek/errors.py


class LifecyclePeekError(Exception):
    pass


class WidgetStateError(LifecyclePeekError):
    """
    Operation not allowed in the widget's current state.
    """


class WidgetDestroyedError(WidgetStateError):
    pass
