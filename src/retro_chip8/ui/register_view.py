"""
最小限のレジスタダンプを表示するウィジェット。
Machine.get_debug_state() の内容（MEM[PC], PC, SP, I, スタック, V0..VF, タイマー）をそのまま表示します。
"""
from typing import Dict, Optional

from PySide6.QtWidgets import QWidget, QVBoxLayout, QGridLayout, QLabel, QGroupBox
from PySide6.QtCore import Qt

from retro_chip8.machine import DebugState
from retro_chip8.ui.fonts import get_monospace_font_family

_GROUP_STYLE = """
    QGroupBox { font-weight: bold; border: 1px solid #222; border-radius: 4px; margin-top: 20px; color: #EEE; }
    QGroupBox::title { subcontrol-origin: margin; left: 10px; color: #00AAAA; }
"""

# @intent:responsibility DebugStateを受け取り、レジスタダンプを表示します。表示専用で実行には影響しません。
class RegisterView(QWidget):
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setStyleSheet("background-color: #121212; color: #BBBBBB;")
        self._value_style = f"font-family: '{get_monospace_font_family()}', monospace; color: #FFD700;"
        self._labels: Dict[str, QLabel] = {}
        self._state: Optional[DebugState] = None

        layout = QVBoxLayout(self)
        layout.setContentsMargins(5, 5, 5, 5)
        layout.addWidget(self._create_group("Pointers", ["MEM[PC]", "PC", "SP", "I", "STACK"], columns=1))
        layout.addWidget(self._create_group("General", [f"V{n:X}" for n in range(16)], columns=2))
        layout.addWidget(self._create_group("Timers", ["DT", "ST", "STATE"], columns=1))
        layout.addStretch()

    def _create_group(self, title: str, names, columns: int) -> QGroupBox:
        group_box = QGroupBox(title)
        group_box.setStyleSheet(_GROUP_STYLE)
        grid = QGridLayout(group_box)
        grid.setSpacing(3)
        for index, name in enumerate(names):
            row, col = divmod(index, columns)
            value = QLabel("--")
            value.setStyleSheet(self._value_style)
            value.setAlignment(Qt.AlignRight)
            grid.addWidget(QLabel(f"{name}:"), row, col * 2)
            grid.addWidget(value, row, col * 2 + 1)
            self._labels[name] = value
        return group_box

    # @intent:responsibility 最新のDebugStateで表示値を更新します。
    def update_state(self, state: DebugState) -> None:
        self._state = state
        values = state.as_dict()
        for n, value in enumerate(state.v):
            self._labels[f"V{n:X}"].setText(f"0x{value:02X}")
        for name in ("MEM[PC]", "PC", "SP", "I", "STACK", "DT", "ST", "STATE"):
            self._labels[name].setText(str(values[name]))

    @property
    def state(self) -> Optional[DebugState]:
        return self._state

    def get_register_text(self, name: str) -> str:
        return self._labels[name].text()
