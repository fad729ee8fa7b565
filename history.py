import logging

from errors import EmptyHistory, EmptyRedo, NoImageLoaded

logger = logging.getLogger(__name__)

GRAYSCALE = "grayscale"
FLIP = "flip"


def _readonly(image):
    if image is None:
        return None
    view = image.view()
    view.flags.writeable = False
    return view


class EditHistory:
    """
    Owns the loaded image, the image currently displayed, and full-snapshot
    undo/redo stacks.

    Every edit is computed from the original image, not from the current one,
    so edits do not compose: brightness after blur discards the blur.
    Undo/redo replay stored snapshots and never touch the toggle flags.
    """

    def __init__(self):
        self._original = None
        self._current = None
        self._undo_stack = []
        self._redo_stack = []
        self._flags = {GRAYSCALE: False, FLIP: False}

    @property
    def has_image(self):
        return self._original is not None

    @property
    def original(self):
        return _readonly(self._original)

    @property
    def current(self):
        return _readonly(self._current)

    @property
    def undo_depth(self):
        return len(self._undo_stack)

    @property
    def redo_depth(self):
        return len(self._redo_stack)

    @property
    def grayscale_active(self):
        return self._flags[GRAYSCALE]

    @property
    def flip_active(self):
        return self._flags[FLIP]

    def load_new(self, image):
        """Reset all state around a freshly loaded image."""
        self._undo_stack = [image.copy()]
        self._redo_stack = []
        self._original = image.copy()
        self._current = image.copy()
        for flag in self._flags:
            self._flags[flag] = False
        logger.debug("History reset for %s image", image.shape)

    def apply_edit(self, operation):
        """
        Run operation(original) and make the result the current image.
        The previous current image is pushed onto the undo stack and the redo
        stack is cleared. If operation raises, no state changes.
        """
        self._require_image()
        result = operation(self._original.copy())
        self._commit(result)
        return self.current

    def toggle(self, flag, transform):
        """
        Flip a binary state against the original image.
        Active -> revert to a copy of the original without recomputing.
        Inactive -> current becomes transform(original).
        """
        self._require_image()
        active = self._flags[flag]
        if active:
            result = self._original.copy()
        else:
            result = transform(self._original.copy())
        self._commit(result)
        self._flags[flag] = not active
        logger.debug("Toggle %s -> %s", flag, not active)
        return self.current

    def undo(self):
        if len(self._undo_stack) <= 1:
            raise EmptyHistory()

        if self._current is not None:
            self._redo_stack.append(self._current.copy())
        self._undo_stack.pop()
        self._current = self._undo_stack[-1].copy()
        logger.debug("Undo: %d undo / %d redo", len(self._undo_stack), len(self._redo_stack))
        return self.current

    def redo(self):
        if not self._redo_stack:
            raise EmptyRedo()

        self._undo_stack.append(self._current.copy())
        self._current = self._redo_stack.pop()
        logger.debug("Redo: %d undo / %d redo", len(self._undo_stack), len(self._redo_stack))
        return self.current

    def _require_image(self):
        if self._original is None:
            raise NoImageLoaded("No image loaded.")

    def _commit(self, result):
        snapshot = self._current if self._current is not None else self._original
        self._undo_stack.append(snapshot.copy())
        self._redo_stack = []
        self._current = result
