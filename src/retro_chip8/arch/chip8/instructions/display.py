# src/retro_chip8/arch/chip8/instructions/display.py
"""
画面命令（CLS, DRW）の実装。
"""
from retro_chip8.core.snapshot import Operation
from retro_chip8.core.state import Chip8CpuState, VF
from retro_chip8.arch.chip8.peripherals import Chip8Peripherals
from .base import make_operation, reg


# --- CLS (00E0) ---
def decode_cls(opcode: int) -> Operation:
    return make_operation(opcode, "CLS", [])

def execute_cls(state: Chip8CpuState, hw: Chip8Peripherals, op: Operation) -> None:
    hw.frame_buffer.clear_screen()


# --- DRW Vx, Vy, n (Dxyn) ---
def decode_drw(opcode: int) -> Operation:
    return make_operation(opcode, "DRW", [reg((opcode >> 8) & 0xF), reg((opcode >> 4) & 0xF), f"{opcode & 0xF:X}"])

# @intent:responsibility I から n バイトのスプライトを読み出し (Vx, Vy) に描画し、衝突フラグを VF に設定します。
def execute_drw(state: Chip8CpuState, hw: Chip8Peripherals, op: Operation) -> None:
    rows = hw.memory.read_block(state.i, op.n)
    collision = hw.frame_buffer.draw_sprite(state.v[op.x], state.v[op.y], rows)
    state.set_v(VF, collision)
