# src/retro_chip8/arch/chip8/instructions/load.py
"""
ロード/ストア命令（レジスタ、インデックス、タイマー、メモリ間転送）の実装。
"""
from retro_chip8.core.snapshot import Operation
from retro_chip8.core.state import Chip8CpuState
from retro_chip8.arch.chip8.peripherals import Chip8Peripherals
from retro_chip8.hardware.memory import FONT_ADDRESS, GLYPH_SIZE
from .base import make_operation, reg, imm, addr


def _x(opcode: int) -> str:
    return reg((opcode >> 8) & 0xF)


# --- LD Vx, byte (6xkk) ---
def decode_ld_imm(opcode: int) -> Operation:
    return make_operation(opcode, "LD", [_x(opcode), imm(opcode & 0xFF)])

def execute_ld_imm(state: Chip8CpuState, hw: Chip8Peripherals, op: Operation) -> None:
    state.set_v(op.x, op.kk)


# --- LD Vx, Vy (8xy0) ---
def decode_ld_reg(opcode: int) -> Operation:
    return make_operation(opcode, "LD", [_x(opcode), reg((opcode >> 4) & 0xF)])

def execute_ld_reg(state: Chip8CpuState, hw: Chip8Peripherals, op: Operation) -> None:
    state.set_v(op.x, state.v[op.y])


# --- LD I, addr (Annn) ---
def decode_ld_i(opcode: int) -> Operation:
    return make_operation(opcode, "LD", ["I", addr(opcode & 0x0FFF)])

def execute_ld_i(state: Chip8CpuState, hw: Chip8Peripherals, op: Operation) -> None:
    state.set_i(op.nnn)


# --- LD Vx, DT (Fx07) ---
def decode_ld_vx_dt(opcode: int) -> Operation:
    return make_operation(opcode, "LD", [_x(opcode), "DT"])

def execute_ld_vx_dt(state: Chip8CpuState, hw: Chip8Peripherals, op: Operation) -> None:
    state.set_v(op.x, hw.delay_timer.get_value())


# --- LD Vx, K (Fx0A) ---
def decode_ld_vx_k(opcode: int) -> Operation:
    return make_operation(opcode, "LD", [_x(opcode), "K"])

# @intent:responsibility キー入力待ちを開始します。
# @intent:post-condition PCをこの命令自身に戻し、待機が解決されるまでPCが進まないようにします。
#                       Vxへの格納とPCの前進はCPUのキー入力解決処理が行います。
def execute_ld_vx_k(state: Chip8CpuState, hw: Chip8Peripherals, op: Operation) -> None:
    state.set_pc(state.pc - op.length)
    hw.keypad.begin_await()


# --- LD DT, Vx (Fx15) ---
def decode_ld_dt_vx(opcode: int) -> Operation:
    return make_operation(opcode, "LD", ["DT", _x(opcode)])

def execute_ld_dt_vx(state: Chip8CpuState, hw: Chip8Peripherals, op: Operation) -> None:
    hw.delay_timer.set_value(state.v[op.x])


# --- LD ST, Vx (Fx18) ---
def decode_ld_st_vx(opcode: int) -> Operation:
    return make_operation(opcode, "LD", ["ST", _x(opcode)])

def execute_ld_st_vx(state: Chip8CpuState, hw: Chip8Peripherals, op: Operation) -> None:
    hw.sound_timer.set_value(state.v[op.x])


# --- ADD I, Vx (Fx1E) ---
def decode_add_i(opcode: int) -> Operation:
    return make_operation(opcode, "ADD", ["I", _x(opcode)])

def execute_add_i(state: Chip8CpuState, hw: Chip8Peripherals, op: Operation) -> None:
    state.set_i(state.i + state.v[op.x])


# --- LD F, Vx (Fx29) ---
def decode_ld_f(opcode: int) -> Operation:
    return make_operation(opcode, "LD", ["F", _x(opcode)])

# @intent:responsibility Vx の数字に対応するフォントグリフのアドレスを I に設定します。
def execute_ld_f(state: Chip8CpuState, hw: Chip8Peripherals, op: Operation) -> None:
    state.set_i(FONT_ADDRESS + state.v[op.x] * GLYPH_SIZE)


# --- LD B, Vx (Fx33) ---
def decode_ld_b(opcode: int) -> Operation:
    return make_operation(opcode, "LD", ["B", _x(opcode)])

# @intent:responsibility Vx のBCD表現（百の位、十の位、一の位）を I, I+1, I+2 に格納します。
def execute_ld_b(state: Chip8CpuState, hw: Chip8Peripherals, op: Operation) -> None:
    value = state.v[op.x]
    hw.memory.load_block(state.i, [value // 100, (value // 10) % 10, value % 10])


# --- LD [I], Vx (Fx55) ---
def decode_ld_mem_vx(opcode: int) -> Operation:
    return make_operation(opcode, "LD", ["[I]", _x(opcode)])

# @intent:responsibility V0..Vx を I から始まるメモリに格納し、I を x+1 進めます。
# @intent:post-condition 範囲外にはみ出す場合は1バイトも書き込まず、I も変化しません（Fx33と同じ）。
def execute_ld_mem_vx(state: Chip8CpuState, hw: Chip8Peripherals, op: Operation) -> None:
    hw.memory.load_block(state.i, state.v[:op.x + 1])
    state.set_i(state.i + op.x + 1)


# --- LD Vx, [I] (Fx65) ---
def decode_ld_vx_mem(opcode: int) -> Operation:
    return make_operation(opcode, "LD", [_x(opcode), "[I]"])

# @intent:responsibility I から始まるメモリを V0..Vx に読み込み、I を x+1 進めます。
# @intent:post-condition 範囲外にはみ出す場合はレジスタを変更しません。
def execute_ld_vx_mem(state: Chip8CpuState, hw: Chip8Peripherals, op: Operation) -> None:
    for n, value in enumerate(hw.memory.read_block(state.i, op.x + 1)):
        state.set_v(n, value)
    state.set_i(state.i + op.x + 1)
