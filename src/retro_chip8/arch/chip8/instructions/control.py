# src/retro_chip8/arch/chip8/instructions/control.py
"""
制御命令（ジャンプ、サブルーチン、条件スキップ）の実装。

PCは実行前に次の命令（+2）へ進められています。アドレス空間の範囲チェックは実行後にCPUが行うため、
スキップ命令とRETはPCをマスクせずに設定します。ジャンプ系の命令は絶対アドレスでPCを上書きします。
"""
from retro_chip8.core.snapshot import Operation
from retro_chip8.core.state import Chip8CpuState
from retro_chip8.arch.chip8.peripherals import Chip8Peripherals
from .base import make_operation, reg, imm, addr


# @intent:utility_function 次の命令をスキップします。
def skip_next(state: Chip8CpuState) -> None:
    state.pc += 2


# --- RET (00EE) ---
def decode_ret(opcode: int) -> Operation:
    return make_operation(opcode, "RET", [])

# @intent:responsibility スタックから戻りアドレスを取り出してPCに設定します。
def execute_ret(state: Chip8CpuState, hw: Chip8Peripherals, op: Operation) -> None:
    state.pc = hw.stack.pop()
    state.sp = hw.stack.sp


# --- JP addr (1nnn) ---
def decode_jp(opcode: int) -> Operation:
    return make_operation(opcode, "JP", [addr(opcode & 0x0FFF)])

def execute_jp(state: Chip8CpuState, hw: Chip8Peripherals, op: Operation) -> None:
    state.set_pc(op.nnn)


# --- CALL addr (2nnn) ---
def decode_call(opcode: int) -> Operation:
    return make_operation(opcode, "CALL", [addr(opcode & 0x0FFF)])

# @intent:responsibility 戻りアドレス（CALLの次の命令）をスタックに積み、サブルーチンへジャンプします。
# @intent:rationale 実行前にPCは次の命令を指しているため、その値をそのまま戻りアドレスとします。
def execute_call(state: Chip8CpuState, hw: Chip8Peripherals, op: Operation) -> None:
    hw.stack.push(state.pc)
    state.sp = hw.stack.sp
    state.set_pc(op.nnn)


# --- SE Vx, byte (3xkk) ---
def decode_se_imm(opcode: int) -> Operation:
    return make_operation(opcode, "SE", [reg((opcode >> 8) & 0xF), imm(opcode & 0xFF)])

def execute_se_imm(state: Chip8CpuState, hw: Chip8Peripherals, op: Operation) -> None:
    if state.v[op.x] == op.kk:
        skip_next(state)


# --- SNE Vx, byte (4xkk) ---
def decode_sne_imm(opcode: int) -> Operation:
    return make_operation(opcode, "SNE", [reg((opcode >> 8) & 0xF), imm(opcode & 0xFF)])

def execute_sne_imm(state: Chip8CpuState, hw: Chip8Peripherals, op: Operation) -> None:
    if state.v[op.x] != op.kk:
        skip_next(state)


# --- SE Vx, Vy (5xy0) ---
def decode_se_reg(opcode: int) -> Operation:
    return make_operation(opcode, "SE", [reg((opcode >> 8) & 0xF), reg((opcode >> 4) & 0xF)])

def execute_se_reg(state: Chip8CpuState, hw: Chip8Peripherals, op: Operation) -> None:
    if state.v[op.x] == state.v[op.y]:
        skip_next(state)


# --- SNE Vx, Vy (9xy0) ---
def decode_sne_reg(opcode: int) -> Operation:
    return make_operation(opcode, "SNE", [reg((opcode >> 8) & 0xF), reg((opcode >> 4) & 0xF)])

def execute_sne_reg(state: Chip8CpuState, hw: Chip8Peripherals, op: Operation) -> None:
    if state.v[op.x] != state.v[op.y]:
        skip_next(state)


# --- JP V0, addr (Bnnn) ---
def decode_jp_v0(opcode: int) -> Operation:
    return make_operation(opcode, "JP", ["V0", addr(opcode & 0x0FFF)])

def execute_jp_v0(state: Chip8CpuState, hw: Chip8Peripherals, op: Operation) -> None:
    state.set_pc(state.v[0] + op.nnn)


# --- SKP Vx (Ex9E) ---
def decode_skp(opcode: int) -> Operation:
    return make_operation(opcode, "SKP", [reg((opcode >> 8) & 0xF)])

# @intent:responsibility キーVxが押されていれば次の命令をスキップします。
# @intent:rationale Vxの上位ニブルは無視し、下位4bitをキー番号として扱います。
def execute_skp(state: Chip8CpuState, hw: Chip8Peripherals, op: Operation) -> None:
    if hw.keypad.is_pressed(state.v[op.x] & 0x0F):
        skip_next(state)


# --- SKNP Vx (ExA1) ---
def decode_sknp(opcode: int) -> Operation:
    return make_operation(opcode, "SKNP", [reg((opcode >> 8) & 0xF)])

def execute_sknp(state: Chip8CpuState, hw: Chip8Peripherals, op: Operation) -> None:
    if not hw.keypad.is_pressed(state.v[op.x] & 0x0F):
        skip_next(state)
