# src/retro_chip8/arch/chip8/instructions/alu.py
"""
算術論理演算命令の実装。

全ての結果は8bitで剰余されます。VFへのフラグ書き込みは結果の格納後に行うため、
Vx に VF を指定した場合はフラグ値が残ります。
"""
from retro_chip8.core.snapshot import Operation
from retro_chip8.core.state import Chip8CpuState, VF
from retro_chip8.arch.chip8.peripherals import Chip8Peripherals
from .base import make_operation, reg, imm


def _decode_xy(opcode: int, mnemonic: str) -> Operation:
    return make_operation(opcode, mnemonic, [reg((opcode >> 8) & 0xF), reg((opcode >> 4) & 0xF)])


# --- ADD Vx, byte (7xkk) ---
def decode_add_imm(opcode: int) -> Operation:
    return make_operation(opcode, "ADD", [reg((opcode >> 8) & 0xF), imm(opcode & 0xFF)])

# @intent:responsibility Vx に即値を加算します。キャリーフラグは変化しません。
def execute_add_imm(state: Chip8CpuState, hw: Chip8Peripherals, op: Operation) -> None:
    state.set_v(op.x, state.v[op.x] + op.kk)


# --- OR Vx, Vy (8xy1) ---
def decode_or(opcode: int) -> Operation:
    return _decode_xy(opcode, "OR")

def execute_or(state: Chip8CpuState, hw: Chip8Peripherals, op: Operation) -> None:
    state.set_v(op.x, state.v[op.x] | state.v[op.y])


# --- AND Vx, Vy (8xy2) ---
def decode_and(opcode: int) -> Operation:
    return _decode_xy(opcode, "AND")

def execute_and(state: Chip8CpuState, hw: Chip8Peripherals, op: Operation) -> None:
    state.set_v(op.x, state.v[op.x] & state.v[op.y])


# --- XOR Vx, Vy (8xy3) ---
def decode_xor(opcode: int) -> Operation:
    return _decode_xy(opcode, "XOR")

def execute_xor(state: Chip8CpuState, hw: Chip8Peripherals, op: Operation) -> None:
    state.set_v(op.x, state.v[op.x] ^ state.v[op.y])


# --- ADD Vx, Vy (8xy4) ---
def decode_add_reg(opcode: int) -> Operation:
    return _decode_xy(opcode, "ADD")

# @intent:responsibility Vx + Vy を Vx に格納し、255を超えた場合 VF=1、それ以外は VF=0 とします。
def execute_add_reg(state: Chip8CpuState, hw: Chip8Peripherals, op: Operation) -> None:
    res = state.v[op.x] + state.v[op.y]
    state.set_v(op.x, res)
    state.set_v(VF, 1 if res > 0xFF else 0)


# --- SUB Vx, Vy (8xy5) ---
def decode_sub(opcode: int) -> Operation:
    return _decode_xy(opcode, "SUB")

# @intent:responsibility Vx - Vy を Vx に格納します。ボローが発生した場合 VF=0、それ以外は VF=1 です。
def execute_sub(state: Chip8CpuState, hw: Chip8Peripherals, op: Operation) -> None:
    v1, v2 = state.v[op.x], state.v[op.y]
    state.set_v(op.x, v1 - v2)
    state.set_v(VF, 0 if v1 < v2 else 1)


# --- SHR Vx, Vy (8xy6) ---
def decode_shr(opcode: int) -> Operation:
    return _decode_xy(opcode, "SHR")

# @intent:responsibility Vy を1bit右シフトした値を Vx に格納し、シフトアウトされたbitを VF に設定します。
def execute_shr(state: Chip8CpuState, hw: Chip8Peripherals, op: Operation) -> None:
    value = state.v[op.y]
    state.set_v(op.x, value >> 1)
    state.set_v(VF, value & 0x01)


# --- SUBN Vx, Vy (8xy7) ---
def decode_subn(opcode: int) -> Operation:
    return _decode_xy(opcode, "SUBN")

def execute_subn(state: Chip8CpuState, hw: Chip8Peripherals, op: Operation) -> None:
    v1, v2 = state.v[op.x], state.v[op.y]
    state.set_v(op.x, v2 - v1)
    state.set_v(VF, 0 if v2 < v1 else 1)


# --- SHL Vx, Vy (8xyE) ---
def decode_shl(opcode: int) -> Operation:
    return _decode_xy(opcode, "SHL")

# @intent:responsibility Vy を1bit左シフトした値を Vx に格納し、シフトアウトされた最上位bitを VF に設定します。
def execute_shl(state: Chip8CpuState, hw: Chip8Peripherals, op: Operation) -> None:
    value = state.v[op.y]
    state.set_v(op.x, value << 1)
    state.set_v(VF, 1 if value & 0x80 else 0)


# --- RND Vx, byte (Cxkk) ---
def decode_rnd(opcode: int) -> Operation:
    return make_operation(opcode, "RND", [reg((opcode >> 8) & 0xF), imm(opcode & 0xFF)])

def execute_rnd(state: Chip8CpuState, hw: Chip8Peripherals, op: Operation) -> None:
    state.set_v(op.x, hw.rng.randint(0x00, 0xFF) & op.kk)
