# retro_chip8/core/state.py
"""
Core Layer (CPU状態)

このモジュールは、CHIP-8 CPUのレジスタファイルを保持するデータ構造を定義します。
"""
from dataclasses import dataclass, field

# @intent:constant プログラムのエントリアドレス。リセット時のPCの初期値です。
PROGRAM_START = 0x200

# @intent:constant フラグ（キャリー/ボロー/衝突）レジスタとして使用されるVFのインデックス。
VF = 0xF

NUM_REGISTERS = 16

# @intent:constant 12bitアドレス空間の最上位アドレス。
ADDRESS_MASK = 0x0FFF


# @intent:responsibility CHIP-8のレジスタ状態（V0..VF, I, PC, SP）を保持します。
# @intent:rationale 汎用レジスタは固定長のbytearrayとし、0-255の範囲外の値を保持できないようにします。
#                  I, PC は値の設定時に set_i / set_pc を経由して各ビット幅でマスクします。
@dataclass
class Chip8CpuState:
    """
    CHIP-8 CPUのレジスタ状態を保持するデータクラス。
    """
    v: bytearray = field(default_factory=lambda: bytearray(NUM_REGISTERS))  # V0..VF (8bit)
    i: int = 0x0000            # Index Register (16bit)
    pc: int = PROGRAM_START    # Program Counter (12bit address space)
    sp: int = 0x00             # Stack Pointer (8bit)

    def __post_init__(self):
        if len(self.v) != NUM_REGISTERS:
            raise ValueError(f"Register file must contain exactly {NUM_REGISTERS} registers.")
        self.v = bytearray(self.v)

    # @intent:utility_function 汎用レジスタVxに8bitにマスクした値を設定します。
    def set_v(self, x: int, value: int) -> None:
        self.v[x] = value & 0xFF

    # @intent:utility_function インデックスレジスタIに16bitにマスクした値を設定します。
    def set_i(self, value: int) -> None:
        self.i = value & 0xFFFF

    # @intent:utility_function PCに12bit（アドレス空間）にマスクした値を設定します。
    def set_pc(self, value: int) -> None:
        self.pc = value & ADDRESS_MASK

    # @intent:responsibility Snapshot用に、元の状態と共有部分を持たない独立したコピーを返します。
    def copy(self) -> "Chip8CpuState":
        return Chip8CpuState(v=bytearray(self.v), i=self.i, pc=self.pc, sp=self.sp)
