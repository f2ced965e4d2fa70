# src/retro_chip8/arch/chip8/peripherals.py
"""
CPUが排他的に所有する周辺ハードウェアの束。
"""
import random
from dataclasses import dataclass, field

from retro_chip8.hardware.frame_buffer import FrameBuffer
from retro_chip8.hardware.keypad import Keypad
from retro_chip8.hardware.memory import Memory
from retro_chip8.hardware.stack import Stack
from retro_chip8.hardware.timer import Timer


# @intent:responsibility 命令の実行関数に渡される、CPU所有のハードウェア一式を保持します。
# @intent:rationale 他CPU実装のBusに相当する役割で、実行関数のシグネチャを (state, hw, op) に揃えます。
@dataclass
class Chip8Peripherals:
    memory: Memory = field(default_factory=Memory)
    stack: Stack = field(default_factory=Stack)
    frame_buffer: FrameBuffer = field(default_factory=FrameBuffer)
    keypad: Keypad = field(default_factory=Keypad)
    delay_timer: Timer = field(default_factory=Timer)
    sound_timer: Timer = field(default_factory=Timer)
    rng: random.Random = field(default_factory=random.Random)

    # @intent:responsibility 全ハードウェアを初期状態に戻します（フォントの再ロードを含む）。
    def reset(self) -> None:
        self.memory.reset()
        self.stack.reset()
        self.frame_buffer.reset()
        self.keypad.reset()
        self.delay_timer.reset()
        self.sound_timer.reset()
