from dataclasses import dataclass, field
from typing import Optional

from retro_chip8.common.types import KeyMap

# @intent:data_structure 標準的な 1234/QWER/ASDF/ZXCV 配列と CHIP-8 の16進キーパッドの対応。
DEFAULT_KEY_MAP: KeyMap = {
    "1": 0x1, "2": 0x2, "3": 0x3, "4": 0xC,
    "Q": 0x4, "W": 0x5, "E": 0x6, "R": 0xD,
    "A": 0x7, "S": 0x8, "D": 0x9, "F": 0xE,
    "Z": 0xA, "X": 0x0, "C": 0xB, "V": 0xF,
}

@dataclass
class DisplayPalette:
    background: int = 0xDD
    foreground: int = 0x44

@dataclass
class MachineConfig:
    cpu_hz: int = 700
    timer_hz: int = 60
    sprite_wrap: bool = False
    stack_depth: int = 16
    random_seed: Optional[int] = None
    display_scale: int = 10
    palette: DisplayPalette = field(default_factory=DisplayPalette)
    key_map: KeyMap = field(default_factory=lambda: dict(DEFAULT_KEY_MAP))
