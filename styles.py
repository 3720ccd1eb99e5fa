"""
styles.py

Application stylesheets - Light and Dark themes.
"""

LIGHT_STYLE = """
/* === Light Theme === */
/* Accent: #5256e3 (indigo, matches the default import fill) */

QMainWindow {
    background-color: #ffffff;
}

QWidget {
    background-color: #ffffff;
    color: #1e293b;
    font-family: "Segoe UI", "SF Pro Display", sans-serif;
    font-size: 13px;
}

/* === Toolbar === */
QToolBar {
    background-color: #f8fafc;
    border: none;
    border-bottom: 1px solid #e2e8f0;
    padding: 2px 3px;
    spacing: 2px;
}

QToolButton {
    background-color: transparent;
    border: 1px solid transparent;
    border-radius: 4px;
    padding: 4px 8px;
}

QToolButton:hover {
    background-color: #e0e7ff;
    border-color: #c7d2fe;
}

QToolButton:disabled {
    color: #94a3b8;
}

/* === Inputs === */
QLineEdit {
    background-color: #ffffff;
    border: 1px solid #cbd5e1;
    border-radius: 4px;
    padding: 4px 6px;
}

QLineEdit:focus {
    border-color: #5256e3;
}

QPushButton {
    background-color: #5256e3;
    color: #ffffff;
    border: none;
    border-radius: 4px;
    padding: 5px 14px;
}

QPushButton:hover {
    background-color: #4338ca;
}

QPushButton:disabled {
    background-color: #cbd5e1;
    color: #f8fafc;
}

/* === Node tree === */
QTreeWidget {
    background-color: #ffffff;
    border: 1px solid #e2e8f0;
    alternate-background-color: #f8fafc;
}

QTreeWidget::item:selected {
    background-color: #e0e7ff;
    color: #1e293b;
}

QHeaderView::section {
    background-color: #f1f5f9;
    border: none;
    border-bottom: 1px solid #e2e8f0;
    padding: 4px 6px;
}

/* === Canvas === */
QGraphicsView {
    background-color: #f1f5f9;
    border: 1px solid #e2e8f0;
}

QStatusBar {
    background-color: #f8fafc;
    border-top: 1px solid #e2e8f0;
}
"""

DARK_STYLE = """
/* === Dark Theme === */

QMainWindow {
    background-color: #1e1e1e;
}

QWidget {
    background-color: #252526;
    color: #cccccc;
    font-family: "Segoe UI", "SF Pro Display", sans-serif;
    font-size: 13px;
}

/* === Toolbar === */
QToolBar {
    background-color: #333333;
    border: none;
    border-bottom: 1px solid #404040;
    padding: 2px 3px;
    spacing: 2px;
}

QToolButton {
    background-color: transparent;
    border: 1px solid transparent;
    border-radius: 4px;
    padding: 4px 8px;
}

QToolButton:hover {
    background-color: #094771;
}

QToolButton:disabled {
    color: #6b6b6b;
}

/* === Inputs === */
QLineEdit {
    background-color: #3c3c3c;
    border: 1px solid #505050;
    border-radius: 4px;
    padding: 4px 6px;
}

QLineEdit:focus {
    border-color: #0078d4;
}

QPushButton {
    background-color: #0e639c;
    color: #ffffff;
    border: none;
    border-radius: 4px;
    padding: 5px 14px;
}

QPushButton:hover {
    background-color: #1177bb;
}

QPushButton:disabled {
    background-color: #3a3a3a;
    color: #6b6b6b;
}

/* === Node tree === */
QTreeWidget {
    background-color: #1e1e1e;
    border: 1px solid #404040;
    alternate-background-color: #232323;
}

QTreeWidget::item:selected {
    background-color: #094771;
    color: #ffffff;
}

QHeaderView::section {
    background-color: #2d2d30;
    border: none;
    border-bottom: 1px solid #404040;
    padding: 4px 6px;
}

/* === Canvas === */
QGraphicsView {
    background-color: #1e1e1e;
    border: 1px solid #404040;
}

QStatusBar {
    background-color: #007acc;
    color: #ffffff;
}
"""

# Style registry for easy access
STYLES = {
    "Light": LIGHT_STYLE,
    "Dark": DARK_STYLE,
}

DEFAULT_STYLE = "Light"
