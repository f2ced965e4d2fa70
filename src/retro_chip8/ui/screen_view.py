"""
Screen View モジュール。

Machineから取得したFrame（64x32の2色ビットマップ）を、拡大・ドット表示で描画します。
"""
from typing import Optional

from PySide6.QtWidgets import QWidget
from PySide6.QtCore import QSize
from PySide6.QtGui import QPainter, QColor, QImage, QPaintEvent

from retro_chip8.hardware.frame_buffer import Frame, SCREEN_WIDTH, SCREEN_HEIGHT

# @intent:responsibility フレームバッファの内容を拡大表示するウィジェット。
class ScreenView(QWidget):
    def __init__(self, scale: int = 10, parent=None):
        super().__init__(parent)
        self._scale = scale
        self._frame: Optional[Frame] = None
        self._image: Optional[QImage] = None
        self.setFixedSize(self.sizeHint())

    def sizeHint(self) -> QSize:
        return QSize(SCREEN_WIDTH * self._scale, SCREEN_HEIGHT * self._scale)

    @property
    def frame(self) -> Optional[Frame]:
        return self._frame

    # @intent:responsibility 新しいFrameを受け取り、再描画を要求します。
    def update_frame(self, frame: Frame) -> None:
        self._frame = frame
        self._image = self.frame_to_image(frame)
        self.update()

    # @intent:responsibility FrameをRGB888のQImageに変換します。
    @staticmethod
    def frame_to_image(frame: Frame) -> QImage:
        data = frame.to_rgb_bytes()
        image = QImage(data, frame.width, frame.height, frame.width * 3, QImage.Format_RGB888)
        # QImageは元のバッファを参照するため、コピーして所有権を持たせる
        return image.copy()

    def paintEvent(self, event: QPaintEvent) -> None:
        painter = QPainter(self)
        if self._image is None:
            painter.fillRect(self.rect(), QColor(0xDD, 0xDD, 0xDD))
        else:
            # 拡大時の補間は行わない（ドットをそのまま拡大する）
            painter.setRenderHint(QPainter.SmoothPixmapTransform, False)
            painter.drawImage(self.rect(), self._image)
        painter.end()
