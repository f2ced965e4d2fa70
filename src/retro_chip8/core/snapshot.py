# retro_chip8/core/snapshot.py
"""
実行状態の不変スナップショット

このモジュールは、1命令の実行結果を記録した不変のデータ構造を定義します。
UIへの情報提供と、デバッグ時の状態記録に用いる責務を負います。
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from retro_chip8.core.state import Chip8CpuState


# @intent:responsibility CPUの実行状態（通常実行中か、キー入力待ちか）を定義します。
class ExecutionState(Enum):
    RUNNING = "RUNNING"
    AWAITING_KEY = "AWAITING_KEY"


# @intent:responsibility デコードされた命令の詳細を記録します。
@dataclass(frozen=True) # 不変データ構造
class Operation:
    """
    デコードされた命令の詳細（命令語、ニーモニック、オペランド）を記録するデータクラス。
    オペランドのニブル（x, y, n, kk, nnn）は命令語から算出されます。
    """
    opcode: int # 例: 0x6A2F
    pattern: int # ディスパッチキー。例: 0x6000
    mnemonic: str # 例: "LD"
    operands: List[str] = field(default_factory=list) # 例: ["VA", "#2F"]
    length: int = 2 # 命令のバイト長 (CHIP-8では常に2)

    @property
    def opcode_hex(self) -> str:
        return f"{self.opcode:04X}"

    @property
    def x(self) -> int:
        return (self.opcode >> 8) & 0x0F

    @property
    def y(self) -> int:
        return (self.opcode >> 4) & 0x0F

    @property
    def n(self) -> int:
        return self.opcode & 0x000F

    @property
    def kk(self) -> int:
        return self.opcode & 0x00FF

    @property
    def nnn(self) -> int:
        return self.opcode & 0x0FFF


# @intent:responsibility 実行に関するメタデータを記録します。
@dataclass(frozen=True) # 不変データ構造
class Metadata:
    """
    実行に関するメタデータ（累計実行命令数、表示用の命令文字列）を記録するデータクラス。
    """
    step_count: int
    symbol_info: Optional[str] = None # 例: "LD VA, #2F"


# @intent:responsibility ある一時点におけるCPUの状態を不変に記録します。
@dataclass(frozen=True) # 不変データ構造
class Snapshot:
    """
    1ステップ実行後のCPU状態を記録した不変のデータ構造。
    stateは生成時にコピーされるため、以降のCPUの実行による影響を受けません。
    """
    state: Chip8CpuState
    operation: Optional[Operation]
    metadata: Metadata
    execution_state: ExecutionState = ExecutionState.RUNNING
