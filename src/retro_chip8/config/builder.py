import random
import time
from typing import Callable

from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.arch.chip8.peripherals import Chip8Peripherals
from retro_chip8.hardware.frame_buffer import FrameBuffer
from retro_chip8.hardware.stack import Stack
from retro_chip8.machine import Machine
from .models import MachineConfig

# @intent:responsibility システム構成（Config）に基づいて、周辺ハードウェア、CPU、Machineを生成・接続します。
class MachineBuilder:
    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock

    def build_peripherals(self, config: MachineConfig) -> Chip8Peripherals:
        return Chip8Peripherals(
            stack=Stack(max_depth=config.stack_depth),
            frame_buffer=FrameBuffer(
                wrap=config.sprite_wrap,
                palette=(config.palette.background, config.palette.foreground),
            ),
            rng=random.Random(config.random_seed),
        )

    def build_machine(self, config: MachineConfig) -> Machine:
        cpu = Chip8Cpu(
            self.build_peripherals(config),
            timer_hz=config.timer_hz,
            clock=self._clock,
        )
        return Machine(cpu)
