# retro_chip8/core/cpu.py
"""
Core Layer (抽象CPU)

このモジュールは、CPUの基本的な状態管理と命令サイクルの駆動に関する抽象化を提供します。
具体的な命令の振る舞いはInstruction Layerに移譲されます。
"""
from abc import ABC, abstractmethod
from typing import Optional

from retro_chip8.core.snapshot import Snapshot, Operation, Metadata, ExecutionState
from retro_chip8.core.state import Chip8CpuState

# @intent:responsibility 抽象CPUの基本機能とインターフェースを定義します。
class AbstractCpu(ABC):
    """
    CPUエミュレーションの基底となる抽象クラス。
    基本的な状態管理と、命令サイクル（フェッチ→デコード→PC更新→実行）の骨格を提供します。
    """
    def __init__(self):
        self._state: Chip8CpuState = self._create_initial_state()
        self._step_count: int = 0
        # @intent:rationale Stateオブジェクトの直接操作を避けるため、protectedな命名規則を採用。
        #                  外部からのアクセスは`get_state()`メソッドを介して行う。

    # @intent:responsibility 初期状態のレジスタファイルを生成します。
    @abstractmethod
    def _create_initial_state(self) -> Chip8CpuState:
        pass

    # @intent:responsibility CPUをリセットし、初期状態に戻します。
    def reset(self) -> None:
        self._state = self._create_initial_state()
        self._step_count = 0

    # @intent:responsibility 現在のCPUの状態を返します。
    def get_state(self) -> Chip8CpuState:
        return self._state

    @property
    def step_count(self) -> int:
        return self._step_count

    # @intent:responsibility 現在のPCから命令語をフェッチします。PCは変更しません。
    @abstractmethod
    def _fetch(self) -> int:
        pass

    # @intent:responsibility フェッチした命令語を解析し、Operationオブジェクトに変換します。
    @abstractmethod
    def _decode(self, opcode: int) -> Operation:
        pass

    # @intent:responsibility デコードされた命令を実行し、CPUの状態を更新します。
    @abstractmethod
    def _execute(self, operation: Operation) -> None:
        pass

    # @intent:responsibility CPUを1命令サイクル進め、その結果のスナップショットを返します。
    # @intent:rationale Template Methodパターンを採用し、共通の実行フロー
    #                  （前処理→待機判定→フェッチ→デコード→PC更新→実行→Snapshot生成）を定義します。
    #                  アーキテクチャ固有の振る舞い（タイマー、キー入力待ちなど）はフックメソッドで対応します。
    def step(self) -> Snapshot:
        """
        CPUを1命令サイクル進め、その時点でのCPU状態を含むSnapshotオブジェクトを返します。
        """
        # 1. 前処理 (Hook)
        self._before_step()

        # 2. 待機判定 (Hook)
        wait_snapshot = self._handle_wait()
        if wait_snapshot:
            return wait_snapshot

        # 3. フェッチ
        opcode = self._fetch()

        # 4. デコード
        operation = self._decode(opcode)

        # 5. PC更新 (Hook)
        # 実行前にPCを次の命令へ進め、分岐命令は絶対アドレスで上書きする
        self._update_pc(operation)

        # 6. 実行
        self._execute(operation)

        # 7. 後処理 & Snapshot生成
        self._step_count += 1
        return self._create_snapshot(operation)

    # @intent:responsibility 各ステップの最初に呼ばれる前処理。デフォルトは何もしない。
    def _before_step(self) -> None:
        pass

    # @intent:responsibility 命令を実行できない待機状態の場合の処理を行います。
    # @intent:return 待機中であればその状態のSnapshot、そうでなければNone。
    def _handle_wait(self) -> Optional[Snapshot]:
        return None

    # @intent:responsibility 命令実行前にPCを更新します。デフォルトは命令長分進める。
    def _update_pc(self, operation: Operation) -> None:
        self._state.set_pc(self._state.pc + operation.length)

    # @intent:responsibility スナップショットを生成します。
    def _create_snapshot(self, operation: Optional[Operation]) -> Snapshot:
        symbol_info = None
        if operation is not None:
            symbol_info = operation.mnemonic
            if operation.operands:
                symbol_info += " " + ", ".join(operation.operands)

        return Snapshot(
            state=self._state.copy(),
            operation=operation,
            metadata=Metadata(step_count=self._step_count, symbol_info=symbol_info),
            execution_state=self._get_execution_state(),
        )

    # @intent:responsibility Snapshotに記録する実行状態を返します。デフォルトは常にRUNNING。
    def _get_execution_state(self) -> ExecutionState:
        return ExecutionState.RUNNING
