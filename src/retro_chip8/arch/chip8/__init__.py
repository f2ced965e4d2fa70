"""
CHIP-8 Architecture Package
"""
from .cpu import Chip8Cpu
from .peripherals import Chip8Peripherals
