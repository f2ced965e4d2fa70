# src/retro_chip8/ui/main_window.py
"""
メインウィンドウの実装。
Machineを所有し、QTimerによるスケジューリング、キー入力、ROMのロード、画面とレジスタの更新を行います。
"""
import logging
from typing import Optional

from PySide6.QtWidgets import (
    QMainWindow, QApplication, QDockWidget, QToolBar, QLabel, QFileDialog, QMessageBox
)
from PySide6.QtGui import QPalette, QColor, QAction, QKeyEvent, QCloseEvent
from PySide6.QtCore import Qt, QTimer, Slot

from retro_chip8.common.errors import Chip8Error
from retro_chip8.config.builder import MachineBuilder
from retro_chip8.config.models import MachineConfig
from retro_chip8.machine import Machine
from .keymap import KeyMapper
from .register_view import RegisterView
from .screen_view import ScreenView
from .fonts import get_monospace_font_family

logger = logging.getLogger(__name__)

# @intent:constant 画面更新（スケジューリングコールバック）の間隔。約60fps。
FRAME_INTERVAL_MS = 16


# @intent:responsibility アプリケーションのメインウィンドウを定義し、Machineとホスト側のUIを接続します。
class MainWindow(QMainWindow):
    def __init__(self, config: Optional[MachineConfig] = None, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Retro CHIP-8")

        self._config = config if config is not None else MachineConfig()
        self.machine: Machine = MachineBuilder().build_machine(self._config)
        self._key_mapper = KeyMapper(self._config.key_map)
        self._cycles_per_tick = max(1, round(self._config.cpu_hz * FRAME_INTERVAL_MS / 1000))

        self._set_dark_theme()
        self._create_toolbar()
        self._create_views()

        self._timer = QTimer(self)
        self._timer.setInterval(FRAME_INTERVAL_MS)
        self._timer.timeout.connect(self._on_tick)

        self._update_ui_state()
        self._refresh_views()

    @property
    def cycles_per_tick(self) -> int:
        return self._cycles_per_tick

    # @intent:responsibility 実行制御用のツールバーを作成します。
    def _create_toolbar(self):
        toolbar = QToolBar("Main Toolbar")
        self.addToolBar(toolbar)

        self.load_rom_action = QAction("Load ROM...", self)
        self.load_rom_action.setShortcut("Ctrl+O")
        self.load_rom_action.triggered.connect(self._load_rom_dialog)
        toolbar.addAction(self.load_rom_action)

        self.run_action = QAction("Run", self)
        self.run_action.triggered.connect(self.run_machine)
        toolbar.addAction(self.run_action)

        self.stop_action = QAction("Stop", self)
        self.stop_action.triggered.connect(self.stop_machine)
        toolbar.addAction(self.stop_action)

        self.step_action = QAction("Step", self)
        self.step_action.setShortcut("F10")
        self.step_action.triggered.connect(self.step_machine)
        toolbar.addAction(self.step_action)

        self.reset_action = QAction("Reset", self)
        self.reset_action.triggered.connect(self.reset_machine)
        toolbar.addAction(self.reset_action)

    def _create_views(self):
        self.screen_view = ScreenView(scale=self._config.display_scale)
        self.setCentralWidget(self.screen_view)

        status_dock = QDockWidget("Registers", self)
        status_dock.setAllowedAreas(Qt.RightDockWidgetArea)
        self.register_view = RegisterView()
        status_dock.setWidget(self.register_view)
        self.addDockWidget(Qt.RightDockWidgetArea, status_dock)

        self.status_label = QLabel("No ROM loaded")
        self.statusBar().addWidget(self.status_label)

    # @intent:responsibility 実行状態に応じてUIコンポーネントの有効/無効を切り替えます。
    def _update_ui_state(self):
        is_running = self.machine.is_running
        self.load_rom_action.setEnabled(not is_running)
        self.run_action.setEnabled(not is_running)
        self.step_action.setEnabled(not is_running)
        self.stop_action.setEnabled(is_running)

    def _refresh_views(self):
        self.screen_view.update_frame(self.machine.get_frame())
        self.register_view.update_state(self.machine.get_debug_state())
        sound = " [BEEP]" if self.machine.sound_active else ""
        self.status_label.setText(f"{self.machine.state.value}{sound}")

    @Slot()
    def run_machine(self):
        self.machine.start()
        self._timer.start()
        self._update_ui_state()

    @Slot()
    def stop_machine(self):
        self.machine.stop()
        self._timer.stop()
        self._update_ui_state()
        self._refresh_views()

    # @intent:responsibility 停止中のMachineを1命令だけ実行し、表示を更新します。
    @Slot()
    def step_machine(self):
        try:
            self.machine.force_single_step()
        except Chip8Error as e:
            self._update_ui_state()
            QMessageBox.critical(self, "Machine halted", str(e))
        self._refresh_views()

    @Slot()
    def reset_machine(self):
        self.machine.reset()
        self._refresh_views()

    # @intent:responsibility スケジューリングコールバック。1フレーム分の命令を実行し、表示を更新します。
    @Slot()
    def _on_tick(self):
        try:
            self.machine.run_cycles(self._cycles_per_tick)
        except Chip8Error as e:
            self._timer.stop()
            self._update_ui_state()
            QMessageBox.critical(self, "Machine halted", str(e))
        self._refresh_views()

    # @intent:responsibility ROMファイルを読み込み、Machineをリセットしてロードします。
    def load_rom(self, file_name: str) -> None:
        self.machine.load_rom_file(file_name)
        self.status_label.setText(f"Loaded {file_name}")
        self._refresh_views()

    @Slot()
    def _load_rom_dialog(self):
        file_name, _ = QFileDialog.getOpenFileName(self, "Open CHIP-8 ROM", "", "CHIP-8 ROMs (*.ch8 *.c8);;All Files (*)")
        if file_name:
            try:
                self.load_rom(file_name)
            except Chip8Error as e:
                QMessageBox.critical(self, "Error", f"Failed to load ROM: {e}")

    # @intent:responsibility ホストのキー入力をCHIP-8のキーパッドに変換して入力します。
    def keyPressEvent(self, event: QKeyEvent):
        if not self._forward_key(event, True):
            super().keyPressEvent(event)

    def keyReleaseEvent(self, event: QKeyEvent):
        if not self._forward_key(event, False):
            super().keyReleaseEvent(event)

    def _forward_key(self, event: QKeyEvent, pressed: bool) -> bool:
        if event.isAutoRepeat():
            return True
        key = self._key_mapper.translate(event.text())
        if key is None:
            return False
        self.machine.set_key_state(key, pressed)
        return True

    # @intent:responsibility アプリケーションにダークテーマを適用します。
    def _set_dark_theme(self):
        dark_palette = QPalette()
        dark_palette.setColor(QPalette.Window, QColor(29, 29, 29))
        dark_palette.setColor(QPalette.WindowText, QColor(224, 224, 224))
        dark_palette.setColor(QPalette.Base, QColor(30, 30, 30))
        dark_palette.setColor(QPalette.Text, QColor(224, 224, 224))
        dark_palette.setColor(QPalette.Button, QColor(53, 53, 53))
        dark_palette.setColor(QPalette.ButtonText, QColor(224, 224, 224))
        dark_palette.setColor(QPalette.Highlight, QColor(42, 130, 218))
        QApplication.setPalette(dark_palette)

        font_family = get_monospace_font_family()
        self.setStyleSheet(f"""
            QWidget {{ font-family: '{font_family}', monospace; font-size: 10pt; }}
            QMainWindow, QToolBar {{ background-color: #1D1D1D; border: none; }}
            QDockWidget::title {{ text-align: left; background: #101010; padding: 4px; font-weight: bold; }}
        """)

    def closeEvent(self, event: QCloseEvent):
        self._timer.stop()
        self.machine.stop()
        event.accept()
