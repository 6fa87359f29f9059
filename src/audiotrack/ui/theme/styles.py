"""Styles QSS pour AudioTrack.
Palette sombre, accent cyan (couleur de la trace) et vert (marqueur de lecture).
"""

# Palette de couleurs
COLOR_BACKGROUND = "#1e1e1e"
COLOR_PANEL = "#252525"
COLOR_ACCENT = "#00a3b8"  # Cyan de la trace, assombri
COLOR_ACCENT_RUNNER = "#10b981"  # Vert du marqueur
COLOR_TEXT_PRIMARY = "#e0e0e0"
COLOR_TEXT_SECONDARY = "#9a9a9a"
COLOR_BORDER = "#3a3a3a"
COLOR_HOVER = "#333333"
COLOR_PRESSED = "#1a1a1a"
COLOR_INPUT_BG = "#181818"

# Forme d'onde
WAVEFORM_BACKGROUND_TOP = "#1a1f24"
WAVEFORM_BACKGROUND_BOTTOM = "#101316"
WAVEFORM_GRID = "#2a2f35"
WAVEFORM_MIDLINE = "#3f4750"
WAVEFORM_FILL = "#0f6e7a"
WAVEFORM_STROKE = "#00E5FF"

WINDOW_STYLE = f"""
QMainWindow {{
    background-color: {COLOR_BACKGROUND};
    color: {COLOR_TEXT_PRIMARY};
}}
QWidget {{
    background-color: {COLOR_BACKGROUND};
    color: {COLOR_TEXT_PRIMARY};
    font-family: 'Segoe UI', 'Roboto', 'Inter', sans-serif;
    font-size: 13px;
}}
QDockWidget::title {{
    text-align: left;
    background: {COLOR_PANEL};
    padding: 8px 12px;
    font-weight: bold;
    border-bottom: 1px solid {COLOR_BORDER};
}}
QStatusBar {{
    background-color: {COLOR_PANEL};
    color: {COLOR_TEXT_SECONDARY};
    border-top: 1px solid {COLOR_BORDER};
}}
"""

BUTTON_STYLE = f"""
QPushButton {{
    background-color: {COLOR_ACCENT};
    color: white;
    border: 1px solid {COLOR_BORDER};
    padding: 8px 14px;
    font-weight: 700;
}}
QPushButton:hover {{
    background-color: #00bcd4;
}}
QPushButton:pressed {{
    background-color: #007a8a;
}}
QPushButton:disabled {{
    background-color: {COLOR_PANEL};
    color: {COLOR_TEXT_SECONDARY};
}}
"""

BUTTON_SECONDARY_STYLE = f"""
QPushButton {{
    background-color: {COLOR_PANEL};
    color: {COLOR_TEXT_PRIMARY};
    border: 1px solid {COLOR_BORDER};
    padding: 8px 14px;
    font-weight: 600;
}}
QPushButton:hover {{
    background-color: {COLOR_HOVER};
    border-color: #5a5a5a;
}}
QPushButton:pressed {{
    background-color: {COLOR_PRESSED};
}}
"""

GROUPBOX_STYLE = f"""
QGroupBox {{
    border: 1px solid {COLOR_BORDER};
    margin-top: 16px;
    padding: 18px 12px 12px 12px;
    font-weight: 700;
    color: {COLOR_TEXT_SECONDARY};
    background-color: {COLOR_PANEL};
}}
QGroupBox::title {{
    subcontrol-origin: margin;
    left: 10px;
    padding: 0 5px;
    color: {COLOR_ACCENT};
    background-color: {COLOR_PANEL};
}}
"""

LABEL_STYLE = f"""
QLabel {{
    color: {COLOR_TEXT_PRIMARY};
    background-color: transparent;
}}
"""

LABEL_MUTED_STYLE = f"""
QLabel {{
    color: {COLOR_TEXT_SECONDARY};
    background-color: transparent;
    font-style: italic;
}}
"""

LABEL_LOADED_STYLE = f"""
QLabel {{
    color: {COLOR_ACCENT_RUNNER};
    background-color: transparent;
    font-weight: bold;
}}
"""

READOUT_VALUE_STYLE = f"""
QLabel {{
    color: {COLOR_TEXT_PRIMARY};
    background-color: transparent;
    font-family: 'Consolas', 'DejaVu Sans Mono', monospace;
    font-size: 18px;
    font-weight: 700;
}}
"""

SLIDER_STYLE = f"""
QSlider::groove:horizontal {{
    height: 6px;
    background: {COLOR_INPUT_BG};
    border: 1px solid {COLOR_BORDER};
}}
QSlider::sub-page:horizontal {{
    background: {COLOR_ACCENT};
}}
QSlider::handle:horizontal {{
    background: {COLOR_ACCENT_RUNNER};
    width: 12px;
    margin: -5px 0;
    border-radius: 6px;
}}
"""

PROGRESS_BAR_STYLE = f"""
QProgressBar {{
    border: none;
    text-align: center;
    background-color: {COLOR_INPUT_BG};
    color: white;
    height: 8px;
}}
QProgressBar::chunk {{
    background: qlineargradient(x1:0, y1:0, x2:1, y2:0, stop:0 {COLOR_ACCENT}, stop:1 {COLOR_ACCENT_RUNNER});
}}
"""
