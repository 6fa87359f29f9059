from PyQt6.QtWidgets import QDoubleSpinBox
from PyQt6.QtCore import Qt, pyqtSignal

from ..theme.styles import COLOR_ACCENT, COLOR_BORDER, COLOR_HOVER, COLOR_INPUT_BG, COLOR_TEXT_PRIMARY


class ScrubberInput(QDoubleSpinBox):
    """
    Champ numérique à glisser (décalage de la trace en secondes).
    `value_committed` n'est émis qu'au relâchement ou à la validation clavier.
    """

    value_committed = pyqtSignal(float)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setButtonSymbols(QDoubleSpinBox.ButtonSymbols.NoButtons)
        self.setCursor(Qt.CursorShape.SizeHorCursor)
        self.setDecimals(1)
        self.setStyleSheet(f"""
            QDoubleSpinBox {{
                background-color: {COLOR_INPUT_BG};
                color: {COLOR_TEXT_PRIMARY};
                border: 1px solid {COLOR_BORDER};
                padding: 4px;
                selection-background-color: {COLOR_ACCENT};
                font-weight: bold;
            }}
            QDoubleSpinBox:hover {{
                border-color: {COLOR_ACCENT};
                background-color: {COLOR_HOVER};
            }}
        """)
        self.last_x = 0.0
        self.dragging = False
        self.editingFinished.connect(self._commit)

    def mousePressEvent(self, event):
        if event.button() == Qt.MouseButton.LeftButton:
            self.dragging = True
            self.last_x = event.globalPosition().x()
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event):
        if not self.dragging:
            super().mouseMoveEvent(event)
            return

        delta = event.globalPosition().x() - self.last_x
        self.last_x = event.globalPosition().x()

        # Shift pour la précision
        step = self.singleStep()
        if event.modifiers() & Qt.KeyboardModifier.ShiftModifier:
            step /= 10

        self.setValue(self.value() + delta * step)
        event.accept()

    def mouseReleaseEvent(self, event):
        if self.dragging:
            self.dragging = False
            self._commit()
        super().mouseReleaseEvent(event)

    def _commit(self):
        self.value_committed.emit(self.value())
