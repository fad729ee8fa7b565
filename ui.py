import logging
from pathlib import Path

import cv2
import numpy as np
from PySide6.QtWidgets import (QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QGridLayout,
                               QLabel, QPushButton, QSlider, QGroupBox, QScrollArea, QFileDialog,
                               QLineEdit, QMessageBox, QTextEdit)
from PySide6.QtCore import Qt
from PySide6.QtGui import QImage, QPixmap, QAction, QWheelEvent, QPainter
from PySide6.QtWidgets import QGraphicsView, QGraphicsScene, QGraphicsPixmapItem

from errors import EditorError, EmptyHistory, EmptyRedo, NoImageLoaded
from history import EditHistory
from processors import FilterRegistry, run_filter
from utils import default_save_path, describe_image_file, format_image_info, read_image, write_image

logger = logging.getLogger(__name__)

WINDOW_TITLE = "snapedit"
OPEN_FILTER = "Image Files (*.png *.jpg *.bmp *.jpeg);;All Files (*.*)"
SAVE_FILTER = "PNG Image (*.png);;JPEG Image (*.jpg *.jpeg);;Bitmap Image (*.bmp);;All Files (*.*)"


def to_qimage(cv_img):
    """Convert a BGR or single-channel uint8 array into a QImage that owns its pixels."""
    height, width = cv_img.shape[:2]
    if cv_img.ndim == 2:
        data = np.require(cv_img, np.uint8, ["C_CONTIGUOUS", "WRITEABLE"])
        q_img = QImage(data.data, width, height, data.strides[0], QImage.Format_Grayscale8)
    else:
        data = np.ascontiguousarray(cv2.cvtColor(cv_img, cv2.COLOR_BGR2RGB))
        q_img = QImage(data.data, width, height, data.strides[0], QImage.Format_RGB888)
    # Detach from the numpy buffer
    return q_img.copy()


class ImageGraphicsView(QGraphicsView):
    """QGraphicsView that fits the image on load and zooms with the mouse wheel."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setRenderHint(QPainter.Antialiasing)
        self.setRenderHint(QPainter.SmoothPixmapTransform)
        self.setDragMode(QGraphicsView.ScrollHandDrag)
        self.setTransformationAnchor(QGraphicsView.AnchorUnderMouse)
        self.setMinimumSize(300, 300)

        self.scene = QGraphicsScene(self)
        self.setScene(self.scene)
        self.pixmap_item = QGraphicsPixmapItem()
        self.scene.addItem(self.pixmap_item)

    def set_image(self, cv_img, reset_view=True):
        if cv_img is None: return

        height, width = cv_img.shape[:2]
        self.pixmap_item.setPixmap(QPixmap.fromImage(to_qimage(cv_img)))
        self.scene.setSceneRect(0, 0, width, height)

        if reset_view:
            self.fitInView(self.pixmap_item, Qt.KeepAspectRatio)

    def wheelEvent(self, event: QWheelEvent):
        zoom_in_factor = 1.25
        zoom_out_factor = 1 / zoom_in_factor

        scale_factor = zoom_in_factor if event.angleDelta().y() > 0 else zoom_out_factor

        self.scale(scale_factor, scale_factor)


class MainWindow(QMainWindow):
    def __init__(self):
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)
        self.resize(1200, 800)

        self.history = EditHistory()
        self.filter_inputs = {} # filter name -> {param name: widget}

        self.init_ui()
        self.setup_shortcuts()

    def setup_shortcuts(self):
        self.undo_action = QAction("Undo", self)
        self.undo_action.setShortcut("Ctrl+Z")
        self.undo_action.triggered.connect(self.undo)
        self.addAction(self.undo_action)

        self.redo_action = QAction("Redo", self)
        self.redo_action.setShortcut("Ctrl+Y")
        self.redo_action.triggered.connect(self.redo)
        self.addAction(self.redo_action)

    def init_ui(self):
        main_widget = QWidget()
        self.setCentralWidget(main_widget)
        main_layout = QHBoxLayout(main_widget)

        # --- Left Sidebar (Controls) ---
        sidebar = QScrollArea()
        sidebar.setWidgetResizable(True)
        sidebar.setMinimumWidth(320)
        sidebar_content = QWidget()
        sidebar_layout = QVBoxLayout(sidebar_content)
        sidebar_layout.setAlignment(Qt.AlignTop)

        # 1. File Group
        file_group = QGroupBox("File Operations")
        file_layout = QGridLayout()
        btn_load = QPushButton("Browse...")
        btn_load.clicked.connect(self.load_image)
        btn_save = QPushButton("Save")
        btn_save.clicked.connect(self.save_image)
        file_layout.addWidget(btn_load, 0, 0)
        file_layout.addWidget(btn_save, 0, 1)

        self.btn_undo = QPushButton("Undo")
        self.btn_undo.clicked.connect(self.undo)
        self.btn_redo = QPushButton("Redo")
        self.btn_redo.clicked.connect(self.redo)
        file_layout.addWidget(self.btn_undo, 1, 0)
        file_layout.addWidget(self.btn_redo, 1, 1)

        file_group.setLayout(file_layout)
        sidebar_layout.addWidget(file_group)

        # 2. One row per editor operation
        edit_group = QGroupBox("Edits")
        edit_layout = QGridLayout()
        row = 0
        for name in FilterRegistry.get_filter_names():
            row = self.add_filter_controls(edit_layout, FilterRegistry.get_filter(name), row)
        edit_group.setLayout(edit_layout)
        sidebar_layout.addWidget(edit_group)

        # 3. Image info
        info_group = QGroupBox("Image Info")
        info_layout = QVBoxLayout()
        self.info_text = QTextEdit()
        self.info_text.setReadOnly(True)
        self.info_text.setMaximumHeight(140)
        info_layout.addWidget(self.info_text)
        info_group.setLayout(info_layout)
        sidebar_layout.addWidget(info_group)

        sidebar.setWidget(sidebar_content)
        main_layout.addWidget(sidebar)

        self.image_view = ImageGraphicsView()
        main_layout.addWidget(self.image_view, stretch=1)

        self.status_lbl = QLabel("Ready")
        self.statusBar().addWidget(self.status_lbl)

    def add_filter_controls(self, layout, processor, row):
        inputs = {}
        for p in processor.get_params():
            layout.addWidget(QLabel(p['label']), row, 0)
            if p['type'] == 'int':
                slider = QSlider(Qt.Horizontal)
                slider.setRange(p.get('min', 0), p.get('max', 100))
                slider.setValue(p['default'])
                val_lbl = QLabel(str(p['default']))
                slider.valueChanged.connect(lambda v, lbl=val_lbl: lbl.setText(str(v)))
                layout.addWidget(slider, row, 1)
                layout.addWidget(val_lbl, row, 2)
                inputs[p['name']] = slider
            else:
                edit = QLineEdit(str(p['default']))
                layout.addWidget(edit, row, 1, 1, 2)
                inputs[p['name']] = edit
            row += 1

        btn = QPushButton(processor.name)
        btn.setToolTip(processor.description)
        btn.clicked.connect(lambda: self.apply_filter(processor.name))
        layout.addWidget(btn, row, 0, 1, 3)
        self.filter_inputs[processor.name] = inputs
        return row + 1

    def get_params(self, name):
        params = {}
        for p_name, widget in self.filter_inputs[name].items():
            if isinstance(widget, QSlider):
                params[p_name] = widget.value()
            elif isinstance(widget, QLineEdit):
                params[p_name] = widget.text()
        return params

    def show_error(self, error):
        logger.warning("%s: %s", type(error).__name__, error)
        if isinstance(error, (EmptyHistory, EmptyRedo)):
            QMessageBox.information(self, error.title, str(error))
        else:
            QMessageBox.warning(self, error.title, str(error))

    def display_current(self, reset_view=False):
        self.image_view.set_image(self.history.current, reset_view=reset_view)

    def apply_filter(self, name):
        processor = FilterRegistry.get_filter(name)
        try:
            run_filter(self.history, processor, self.get_params(name))
        except NoImageLoaded:
            return
        except EditorError as e:
            self.show_error(e)
            return
        self.display_current()
        self.status_lbl.setText(f"{name} applied")

    def undo(self):
        try:
            self.history.undo()
        except EditorError as e:
            self.show_error(e)
            return
        self.display_current()
        self.status_lbl.setText("Undo")

    def redo(self):
        try:
            self.history.redo()
        except EditorError as e:
            self.show_error(e)
            return
        self.display_current()
        self.status_lbl.setText("Redo")

    def load_image(self):
        path, _ = QFileDialog.getOpenFileName(self, "Open Image", str(Path.home()), OPEN_FILTER)
        if not path: return
        try:
            img = read_image(path)
        except EditorError as e:
            self.show_error(e)
            return

        self.history.load_new(img)
        self.display_current(reset_view=True)
        self.info_text.setHtml(format_image_info(describe_image_file(path, img)))
        self.status_lbl.setText(f"Loaded {path}")

    def save_image(self):
        if not self.history.has_image:
            QMessageBox.warning(self, "Error", "No processed image to save.")
            return
        path, _ = QFileDialog.getSaveFileName(self, "Save Image", str(default_save_path()), SAVE_FILTER)
        if not path: return
        try:
            write_image(path, self.history.current)
        except EditorError as e:
            self.show_error(e)
            return
        QMessageBox.information(self, "Success", "Image saved successfully.")
        self.status_lbl.setText(f"Saved {path}")
