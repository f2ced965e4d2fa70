# retro_chip8/hardware/memory.py
"""
Hardware Layer (メモリ)

CHIP-8の4KBアドレス空間を表現します。
0x000-0x1FF はインタプリタ領域として予約され、リセット時に組み込みフォントが配置されます。

    0x000________0x050_______0x200_______________0xFFF
    | FONT SET  |  reserved  |  Program / Data   |
    |___________|____________|___________________|
"""
from typing import Iterable, List

from retro_chip8.common.errors import OutOfBoundsError

MEMORY_SIZE = 0x1000
FONT_ADDRESS = 0x000
GLYPH_SIZE = 5  # 1グリフあたりのバイト数

# @intent:constant 16進数字 0-F の組み込みフォント (16グリフ x 5バイト)。
FONT_SET = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
])


# @intent:responsibility 境界チェック付きの4096バイトのメモリ空間を提供します。
class Memory:
    """
    CHIP-8のメインメモリ。
    全てのアクセスはアドレス範囲 [0x000, 0xFFF] でチェックされ、範囲外は OutOfBoundsError となります。
    """
    def __init__(self):
        self._memory = bytearray(MEMORY_SIZE)
        self._size = MEMORY_SIZE
        self.reset()

    # @intent:responsibility 全バイトをクリアし、フォントデータを 0x000 から書き込みます。
    def reset(self) -> None:
        self._memory = bytearray(self._size)
        self._memory[FONT_ADDRESS:FONT_ADDRESS + len(FONT_SET)] = FONT_SET

    # @intent:responsibility アドレスが有効範囲内であることを検証します。
    def _check_address(self, address: int) -> None:
        if not 0 <= address < self._size:
            raise OutOfBoundsError(address)

    # @intent:responsibility 指定されたアドレスから8bitのデータを読み出します。
    # @intent:pre-condition アドレスは [0x000, 0xFFF] の範囲内である必要があります。
    def read_byte(self, address: int) -> int:
        self._check_address(address)
        return self._memory[address]

    # @intent:responsibility 指定されたアドレスに8bitのデータを書き込みます。
    # @intent:rationale 値の範囲外はエラーにせず [0, 255] にクランプします。アドレス範囲外のみが致命的エラーです。
    def write_byte(self, address: int, value: int) -> None:
        self._check_address(address)
        self._memory[address] = max(0x00, min(0xFF, value))

    # @intent:responsibility 連続したバイト列を offset から書き込みます。
    # @intent:post-condition 範囲外にはみ出す場合は1バイトも書き込まずに OutOfBoundsError を送出します（all-or-nothing）。
    def load_block(self, offset: int, data: Iterable[int]) -> None:
        data = list(data)
        if not data:
            self._check_address(offset)
            return
        self._check_address(offset)
        self._check_address(offset + len(data) - 1)
        for i, value in enumerate(data):
            self.write_byte(offset + i, value)

    # @intent:responsibility offset から length バイトを読み出します。スプライトの取得に使用されます。
    def read_block(self, offset: int, length: int) -> List[int]:
        return [self.read_byte(offset + i) for i in range(length)]

    def get_size(self) -> int:
        return self._size
