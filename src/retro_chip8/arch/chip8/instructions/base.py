# src/retro_chip8/arch/chip8/instructions/base.py
"""
CHIP-8命令実装用の共通ユーティリティ。
"""
from typing import List

from retro_chip8.core.snapshot import Operation

# @intent:map 命令語の上位ニブルごとに、ディスパッチキーを得るためのマスク。
# 0x8xyN, 0x5xy0, 0x9xy0 は下位ニブルで、0xEx__, 0xFx__ は下位バイトで命令が決まる。
PATTERN_MASKS = {
    0x0: 0xFFFF,
    0x5: 0xF00F,
    0x8: 0xF00F,
    0x9: 0xF00F,
    0xE: 0xF0FF,
    0xF: 0xF0FF,
}


# @intent:utility_function 命令語からディスパッチキー（オペランド部分を除いた命令パターン）を求めます。
def dispatch_pattern(opcode: int) -> int:
    return opcode & PATTERN_MASKS.get(opcode >> 12, 0xF000)


# @intent:utility_function 命令語の上位・下位バイトを結合します（ビッグエンディアン）。
def make_word(high: int, low: int) -> int:
    return ((high & 0xFF) << 8) | (low & 0xFF)


def reg(x: int) -> str:
    return f"V{x:X}"


def imm(kk: int) -> str:
    return f"#{kk:02X}"


def addr(nnn: int) -> str:
    return f"${nnn:03X}"


# @intent:utility_function Operationを生成します。パターンは命令語から算出されます。
def make_operation(opcode: int, mnemonic: str, operands: List[str]) -> Operation:
    return Operation(opcode, dispatch_pattern(opcode), mnemonic, operands)
