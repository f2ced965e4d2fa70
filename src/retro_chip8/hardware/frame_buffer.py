# retro_chip8/hardware/frame_buffer.py
"""
Hardware Layer (フレームバッファ)

64x32のモノクロ画素グリッドと、XORによるスプライト描画・衝突判定を提供します。
描画結果は読み取り専用の2色ビットマップ (Frame) としてレンダリング側に公開されます。
"""
from dataclasses import dataclass
from typing import Sequence, Tuple

SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32
MAX_SPRITE_ROWS = 15

# @intent:constant 背景色と前景色のグレーレベル。
DEFAULT_PALETTE: Tuple[int, int] = (0xDD, 0x44)


# @intent:responsibility ある時点の画面内容を不変の2色ビットマップとして保持します。
@dataclass(frozen=True)
class Frame:
    width: int
    height: int
    pixels: Tuple[Tuple[bool, ...], ...]  # pixels[y][x]
    palette: Tuple[int, int] = DEFAULT_PALETTE

    def is_set(self, x: int, y: int) -> bool:
        return self.pixels[y][x]

    # @intent:responsibility 指定座標の表示色（グレーレベル）を返します。
    def color_at(self, x: int, y: int) -> int:
        return self.palette[1] if self.pixels[y][x] else self.palette[0]

    def lit_count(self) -> int:
        return sum(sum(row) for row in self.pixels)

    # @intent:responsibility RGB888形式のバイト列（行優先）に変換します。描画ライブラリへの受け渡しに使用します。
    def to_rgb_bytes(self) -> bytes:
        out = bytearray()
        for row in self.pixels:
            for lit in row:
                c = self.palette[1] if lit else self.palette[0]
                out += bytes((c, c, c))
        return bytes(out)


# @intent:responsibility 画素状態を保持し、スプライトのXOR描画を行います。
class FrameBuffer:
    """
    64x32のフレームバッファ。

    wrap=False の場合、画面外（x >= 64 または y >= 32）に描かれる画素は表示領域の外として破棄され、
    衝突判定にも寄与しません。wrap=True の場合は座標を幅・高さで剰余して反対側に回り込みます。
    """
    def __init__(self, width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT,
                 wrap: bool = False, palette: Tuple[int, int] = DEFAULT_PALETTE):
        self._width = width
        self._height = height
        self._wrap = wrap
        self._palette = palette
        self._pixels = bytearray(width * height)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def wrap(self) -> bool:
        return self._wrap

    def reset(self) -> None:
        self.clear_screen()

    # @intent:responsibility 全画素を背景（未点灯）に戻します。
    def clear_screen(self) -> None:
        self._pixels = bytearray(self._width * self._height)

    def get_pixel(self, x: int, y: int) -> bool:
        return self._pixels[y * self._width + x] == 1

    # @intent:responsibility スプライトを (x, y) を左上としてXOR描画し、衝突フラグを返します。
    # @intent:pre-condition rowsは最大15バイト。各バイトのMSBが最も左の画素です。
    # @intent:post-condition 点灯していた画素が消灯した場合は1、それ以外は0を返します。
    def draw_sprite(self, x: int, y: int, rows: Sequence[int]) -> int:
        if len(rows) > MAX_SPRITE_ROWS:
            raise ValueError(f"Sprite height {len(rows)} exceeds {MAX_SPRITE_ROWS} rows.")
        collision = 0
        for row, byte in enumerate(rows):
            py = y + row
            for bit in range(8):
                px = x + bit
                if self._wrap:
                    px %= self._width
                    py_w = py % self._height
                else:
                    py_w = py
                    if not (0 <= px < self._width and 0 <= py_w < self._height):
                        continue
                sprite_bit = (byte >> (7 - bit)) & 0x01
                index = py_w * self._width + px
                previous = self._pixels[index]
                if previous and sprite_bit:
                    collision = 1
                self._pixels[index] = previous ^ sprite_bit
        return collision

    # @intent:responsibility 現在の画面内容を読み取り専用のFrameとして返します。
    def get_frame(self) -> Frame:
        w = self._width
        pixels = tuple(
            tuple(self._pixels[y * w + x] == 1 for x in range(w))
            for y in range(self._height)
        )
        return Frame(width=w, height=self._height, pixels=pixels, palette=self._palette)
