# retro_chip8/machine.py
"""
Machine (ファサード)

CPUを所有し、外部のホスト（UI、レンダリング、ファイル選択）に対して
実行/停止、キー入力、ROMロード、フレーム取得の操作を公開します。
停止中はいかなる命令も実行されないことを保証します。
"""
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple, Union

from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.common.errors import OutOfBoundsError, StackOverflowError
from retro_chip8.core.snapshot import ExecutionState, Snapshot
from retro_chip8.core.state import PROGRAM_START
from retro_chip8.hardware.frame_buffer import Frame
from retro_chip8.loader.loader import RomLoader

logger = logging.getLogger(__name__)


# @intent:responsibility Machineのライフサイクル状態を定義します。
class MachineState(Enum):
    INITIALIZED = "INITIALIZED"
    RUNNING = "RUNNING"
    HALTED = "HALTED"


# @intent:responsibility 表示用の最小限のレジスタダンプです。参考情報であり、実行には影響しません。
@dataclass(frozen=True)
class DebugState:
    pc: int
    sp: int
    i: int
    v: Tuple[int, ...]
    opcode_at_pc: Optional[int]
    delay_timer: int
    sound_timer: int
    execution_state: ExecutionState
    stack: Tuple[int, ...] = ()  # 戻りアドレス（底から順）

    def as_dict(self) -> Dict[str, object]:
        opcode = "----" if self.opcode_at_pc is None else f"{self.opcode_at_pc:04X}"
        return {
            "MEM[PC]": opcode,
            "PC": f"0x{self.pc:03X}",
            "SP": f"0x{self.sp:02X}",
            "I": f"0x{self.i:04X}",
            "V": [f"V{n:X} : 0x{value:02X}" for n, value in enumerate(self.v)],
            "DT": self.delay_timer,
            "ST": self.sound_timer,
            "STATE": self.execution_state.value,
            "STACK": " ".join(f"{address:03X}" for address in self.stack) or "--",
        }


# @intent:responsibility CHIP-8仮想マシンの外部向けAPIを提供します。
class Machine:
    """
    CHIP-8仮想マシンのファサード。

    ホストは自身のスケジューリングで step() を繰り返し呼び出します。
    メモリ範囲外アクセスやスタックオーバーフローは致命的エラーとして扱われ、
    Machineを HALTED に遷移させた上でホストに再送出されます。
    """
    def __init__(self, cpu: Optional[Chip8Cpu] = None, rom_loader: Optional[RomLoader] = None):
        self._cpu = cpu if cpu is not None else Chip8Cpu()
        self._rom_loader = rom_loader if rom_loader is not None else RomLoader()
        self._state = MachineState.INITIALIZED

    @property
    def state(self) -> MachineState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state is MachineState.RUNNING

    @property
    def cpu(self) -> Chip8Cpu:
        return self._cpu

    # @intent:responsibility サウンドタイマーが動作中かどうかを返します。ホストはこれでブザー音を制御します。
    @property
    def sound_active(self) -> bool:
        return self._cpu.peripherals.sound_timer.is_active()

    # @intent:responsibility 全ての状態（レジスタ、メモリ、スタック、画面、キー、タイマー）を初期化します。
    # @intent:rationale 実行/停止の状態はホストの操作によるものなので、リセットでは変更しません。
    def reset(self) -> None:
        self._cpu.reset()

    def start(self) -> None:
        self._state = MachineState.RUNNING

    def stop(self) -> None:
        self._state = MachineState.HALTED

    # @intent:responsibility 実行中であれば1命令進めます。停止中は何もせずNoneを返します。
    # @intent:post-condition 致命的エラー発生時はHALTEDに遷移し、例外をホストへ再送出します。
    def step(self) -> Optional[Snapshot]:
        if not self.is_running:
            return None
        return self._step_cpu()

    # @intent:responsibility 実行/停止の状態に関わらず1命令だけ実行します（ホストのステップ実行用）。
    # @intent:post-condition Machineの状態は変更しません。致命的エラーの場合のみHALTEDに遷移します。
    def force_single_step(self) -> Snapshot:
        return self._step_cpu()

    def _step_cpu(self) -> Snapshot:
        try:
            return self._cpu.step()
        except (OutOfBoundsError, StackOverflowError) as e:
            self._state = MachineState.HALTED
            logger.error("Machine halted at PC=%#05x: %s", self._cpu.get_state().pc, e)
            raise

    # @intent:responsibility 最大 count ステップ実行し、最後のSnapshotを返します。途中で停止した場合はそこで終了します。
    def run_cycles(self, count: int) -> Optional[Snapshot]:
        snapshot = None
        for _ in range(count):
            if not self.is_running:
                break
            snapshot = self.step()
        return snapshot

    # @intent:responsibility プログラムをエントリアドレス(0x200)から書き込みます。
    # @intent:post-condition メモリに収まらない場合は何も書き込まずに OutOfBoundsError を送出します。
    def load_program(self, data: Iterable[int]) -> None:
        data = bytes(data)
        self._cpu.peripherals.memory.load_block(PROGRAM_START, data)
        logger.info("Loaded %d bytes at %#05x", len(data), PROGRAM_START)

    # @intent:responsibility ROMイメージを検証し、リセットした上でロードします。
    def load_rom(self, data: bytes) -> None:
        self._rom_loader.validate(data)
        self.reset()
        self.load_program(data)

    def load_rom_file(self, path: Union[str, Path]) -> None:
        self.load_rom(self._rom_loader.load_rom_file(path))

    # @intent:responsibility キーの状態遷移を1つ入力します。
    # @intent:rationale 停止中はキー状態の更新のみ行い、保留中のキー入力待ちは次に実行される step() で解決されます。
    def set_key_state(self, key: int, pressed: bool) -> None:
        self._cpu.set_key_state(key, pressed, resolve=self.is_running)

    # @intent:responsibility レンダリング用に、読み取り専用の64x32の2色ビットマップを返します。
    def get_frame(self) -> Frame:
        return self._cpu.peripherals.frame_buffer.get_frame()

    def get_debug_state(self) -> DebugState:
        state = self._cpu.get_state()
        hw = self._cpu.peripherals
        try:
            opcode = (hw.memory.read_byte(state.pc) << 8) | hw.memory.read_byte(state.pc + 1)
        except OutOfBoundsError:
            opcode = None
        return DebugState(
            pc=state.pc,
            sp=state.sp,
            i=state.i,
            v=tuple(state.v),
            opcode_at_pc=opcode,
            delay_timer=hw.delay_timer.get_value(),
            sound_timer=hw.sound_timer.get_value(),
            execution_state=self._cpu.execution_state,
            stack=tuple(hw.stack.entries()),
        )
