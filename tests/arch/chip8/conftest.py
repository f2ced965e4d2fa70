import random

import pytest

from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.arch.chip8.peripherals import Chip8Peripherals
from retro_chip8.core.state import PROGRAM_START


class FakeClock:
    """step() 間のタイマー駆動をテストから制御するための時計。"""
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()

@pytest.fixture
def cpu(clock):
    return Chip8Cpu(Chip8Peripherals(rng=random.Random(1234)), clock=clock)

@pytest.fixture
def load():
    """命令語の並びを0x200から書き込むヘルパー。"""
    def _load(cpu, *words, address=PROGRAM_START):
        data = b"".join(word.to_bytes(2, "big") for word in words)
        cpu.peripherals.memory.load_block(address, data)
    return _load
