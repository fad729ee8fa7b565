class EditorError(Exception):
    """
    Base class for every user-recoverable editor error.
    The UI catches these at the button handlers and shows them in a message box.
    """
    title = "Error"


class NoImageLoaded(EditorError):
    title = "No Image"


class LoadFailure(EditorError, OSError):
    title = "Error"


class SaveFailure(EditorError, OSError):
    title = "Error"


class InvalidDimensions(EditorError, ValueError):
    title = "Error"


class DimensionsExceedBounds(EditorError, ValueError):
    title = "Error"


class EmptyHistory(EditorError):
    title = "Undo"

    def __init__(self, message="No more steps to undo."):
        super().__init__(message)


class EmptyRedo(EditorError):
    title = "Redo"

    def __init__(self, message="No more steps to redo."):
        super().__init__(message)
