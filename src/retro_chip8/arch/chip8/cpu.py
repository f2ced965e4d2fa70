# src/retro_chip8/arch/chip8/cpu.py
"""
CHIP-8 CPUエミュレーションの中心モジュール。
"""
import time
from typing import Callable, Optional

from retro_chip8.core.cpu import AbstractCpu
from retro_chip8.core.snapshot import Operation, Snapshot, ExecutionState
from retro_chip8.core.state import Chip8CpuState, PROGRAM_START, ADDRESS_MASK
from retro_chip8.common.errors import Chip8Error, OutOfBoundsError
from retro_chip8.arch.chip8.peripherals import Chip8Peripherals
from retro_chip8.arch.chip8.instructions import decode_opcode, execute_instruction
from retro_chip8.arch.chip8.instructions.base import make_word

DEFAULT_TIMER_HZ = 60


# @intent:responsibility CHIP-8 CPUの具体的なエミュレーションロジック（フェッチ、デコード、実行）を提供します。
class Chip8Cpu(AbstractCpu):
    """
    CHIP-8 CPUをエミュレートするクラス。

    メモリ、スタック、フレームバッファ、キーパッド、2つのタイマーを排他的に所有します。
    タイマーは命令の実行速度とは独立した60Hzの論理クロックで駆動され、
    step() の先頭で経過時間を確認し、1/60秒以上経過していれば1回だけデクリメントされます。
    """
    def __init__(self, peripherals: Optional[Chip8Peripherals] = None,
                 timer_hz: int = DEFAULT_TIMER_HZ,
                 clock: Callable[[], float] = time.monotonic):
        self._hw = peripherals if peripherals is not None else Chip8Peripherals()
        self._timer_period = 1.0 / timer_hz
        self._clock = clock
        self._last_timer_tick = clock()
        self._execution_state = ExecutionState.RUNNING
        self._await_register = 0
        self._instruction_pc = PROGRAM_START
        super().__init__()
        self._hw.reset()

    # @intent:responsibility CHIP-8の初期状態を生成します。PCはプログラムのエントリアドレスです。
    def _create_initial_state(self) -> Chip8CpuState:
        return Chip8CpuState(pc=PROGRAM_START)

    # @intent:responsibility レジスタと全ハードウェアを初期化します（フォントの再ロード、画面クリアを含む）。
    def reset(self) -> None:
        super().reset()
        self._hw.reset()
        self._execution_state = ExecutionState.RUNNING
        self._await_register = 0
        self._instruction_pc = PROGRAM_START
        self._last_timer_tick = self._clock()

    @property
    def peripherals(self) -> Chip8Peripherals:
        return self._hw

    @property
    def execution_state(self) -> ExecutionState:
        return self._execution_state

    # @intent:responsibility 60Hzの論理クロックに従って両タイマーを進めます。
    # @intent:rationale 経過時間が閾値に満たなければ何もしません。遅延しても追いつき処理はせず、1ステップにつき最大1回です。
    def _before_step(self) -> None:
        now = self._clock()
        if now - self._last_timer_tick < self._timer_period:
            return
        self._hw.delay_timer.tick()
        self._hw.sound_timer.tick()
        self._last_timer_tick = now

    # @intent:responsibility キー入力待ちの場合、ラッチ済みのキーがあれば解決し、なければPCを進めずに戻ります。
    def _handle_wait(self) -> Optional[Snapshot]:
        if self._execution_state is not ExecutionState.AWAITING_KEY:
            return None
        self.resolve_pending_key()
        return self._create_snapshot(None)

    # @intent:responsibility メモリから次の命令語（2バイト、ビッグエンディアン）をフェッチします。
    def _fetch(self) -> int:
        memory = self._hw.memory
        pc = self._state.pc
        return make_word(memory.read_byte(pc), memory.read_byte(pc + 1))

    # @intent:responsibility 命令語をデコードし、Operationオブジェクトを返します。
    def _decode(self, opcode: int) -> Operation:
        return decode_opcode(opcode)

    # @intent:responsibility 実行前に命令自身のアドレスを記録し、PCを次の命令へ進めます。
    # @intent:rationale 最終アドレスの命令では一時的に0x1000を指しますが、マスクはせず実行後の範囲チェックに委ねます。
    #                  末尾の分岐命令（JP, RET など）はこれにより正しく実行できます。
    def _update_pc(self, operation: Operation) -> None:
        self._instruction_pc = self._state.pc
        self._state.pc += operation.length

    # @intent:responsibility Operationを実行し、状態を更新します。
    # @intent:post-condition 実行によりキー入力待ちが開始された場合、実行状態をAWAITING_KEYに遷移させます。
    # @intent:post-condition 致命的エラーの場合、PCは失敗した命令を指したまま例外が送出されます。
    def _execute(self, operation: Operation) -> None:
        try:
            execute_instruction(operation, self._state, self._hw)
            if self._state.pc > ADDRESS_MASK:
                raise OutOfBoundsError(
                    self._state.pc, f"Program counter {self._state.pc:#05x} runs past the end of memory."
                )
        except Chip8Error:
            self._state.pc = self._instruction_pc
            raise
        if self._hw.keypad.is_awaiting:
            self._execution_state = ExecutionState.AWAITING_KEY
            self._await_register = operation.x

    def _get_execution_state(self) -> ExecutionState:
        return self._execution_state

    # @intent:responsibility キーの状態遷移を受け取り、キー入力待ち中であれば保留中のFx0A命令を同期的に解決します。
    # @intent:rationale step()を再帰的に呼び出さず、resolve_pending_key() という単一の経路で解決します。
    def set_key_state(self, key: int, pressed: bool, resolve: bool = True) -> None:
        self._hw.keypad.set_key_state(key, pressed)
        if resolve:
            self.resolve_pending_key()

    # @intent:responsibility ラッチされたキーでFx0A命令を完了させます。
    # @intent:post-condition Vx にキー番号を格納し、PCを1命令分だけ進め、RUNNINGに戻ります。解決した場合はTrueを返します。
    # @intent:rationale PCはマスクしません。Fx0Aが最終アドレスにある場合、次のフェッチが OutOfBoundsError となります。
    def resolve_pending_key(self) -> bool:
        if self._execution_state is not ExecutionState.AWAITING_KEY:
            return False
        key = self._hw.keypad.take_pending_key()
        if key is None:
            return False
        self._state.set_v(self._await_register, key)
        self._state.pc += 2
        self._execution_state = ExecutionState.RUNNING
        return True
