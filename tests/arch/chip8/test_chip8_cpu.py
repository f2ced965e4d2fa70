"""
Chip8Cpu の命令サイクル、タイマー駆動、キー入力待ちのテスト。
"""
import logging

import pytest

from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.common.errors import OutOfBoundsError, StackOverflowError
from retro_chip8.core.snapshot import ExecutionState

# @intent:test_suite Chip8Cpu の step() の振る舞いを検証します。

class TestStep:
    def test_snapshot_contents(self, cpu, load):
        load(cpu, 0x6A2F)
        snapshot = cpu.step()
        assert snapshot.operation.mnemonic == "LD"
        assert snapshot.metadata.symbol_info == "LD VA, #2F"
        assert snapshot.metadata.step_count == 1
        assert snapshot.state.pc == 0x202
        assert snapshot.state.v[0xA] == 0x2F
        assert snapshot.execution_state is ExecutionState.RUNNING

    # @intent:test_case_snapshot Snapshot の state はその後の実行の影響を受けないことを検証します。
    def test_snapshot_state_is_independent(self, cpu, load):
        load(cpu, 0x6001, 0x6002)
        first = cpu.step()
        cpu.step()
        assert first.state.v[0] == 0x01
        assert cpu.get_state().v[0] == 0x02

    def test_unknown_opcode_is_noop(self, cpu, load, caplog):
        load(cpu, 0x5001, 0x0123, 0xE0FF)
        before = bytes(cpu.get_state().v)
        with caplog.at_level(logging.DEBUG, logger="retro_chip8.arch.chip8.instructions"):
            for _ in range(3):
                snapshot = cpu.step()
        assert snapshot.operation.mnemonic == "UNKNOWN"
        assert cpu.get_state().pc == 0x206
        assert bytes(cpu.get_state().v) == before
        assert "5001" in caplog.text

    def test_fetch_past_end_of_memory(self, cpu):
        cpu.get_state().set_pc(0xFFF)
        with pytest.raises(OutOfBoundsError):
            cpu.step()

    def test_stack_overflow(self, cpu, load):
        load(cpu, 0x2200)
        for _ in range(16):
            cpu.step()
        with pytest.raises(StackOverflowError):
            cpu.step()

    def test_reset(self, cpu, load):
        load(cpu, 0x6005, 0xA000, 0xD005)
        for _ in range(3):
            cpu.step()
        cpu.reset()
        state = cpu.get_state()
        assert state.pc == 0x200
        assert list(state.v) == [0] * 16
        assert cpu.step_count == 0
        assert cpu.peripherals.frame_buffer.get_frame().lit_count() == 0
        assert cpu.peripherals.memory.read_byte(0x200) == 0x00
        assert cpu.peripherals.memory.read_byte(0x000) == 0xF0


class TestTimerClock:
    # @intent:test_case_timer タイマーは1/60秒経過時のみ、1ステップにつき最大1回減算されることを検証します。
    def test_timers_tick_at_60hz(self, cpu, load, clock):
        load(cpu, 0x600A, 0xF015, 0xF018, 0x1206)
        for _ in range(3):
            cpu.step()
        dt = cpu.peripherals.delay_timer
        st = cpu.peripherals.sound_timer
        assert dt.get_value() == 10
        assert st.get_value() == 10

        cpu.step()
        assert dt.get_value() == 10

        clock.advance(0.02)
        cpu.step()
        assert dt.get_value() == 9
        assert st.get_value() == 9

        cpu.step()
        assert dt.get_value() == 9

    def test_no_catch_up(self, cpu, load, clock):
        load(cpu, 0x600A, 0xF015, 0x1204)
        cpu.step()
        cpu.step()
        clock.advance(5.0)
        cpu.step()
        assert cpu.peripherals.delay_timer.get_value() == 9

    def test_timer_floor(self, cpu, load, clock):
        load(cpu, 0x6001, 0xF015, 0x1204)
        cpu.step()
        cpu.step()
        for _ in range(3):
            clock.advance(0.02)
            cpu.step()
        assert cpu.peripherals.delay_timer.get_value() == 0

    def test_custom_rate(self, clock, load):
        cpu = Chip8Cpu(timer_hz=10, clock=clock)
        load(cpu, 0x600A, 0xF015, 0x1204)
        cpu.step()
        cpu.step()
        clock.advance(0.05)
        cpu.step()
        assert cpu.peripherals.delay_timer.get_value() == 10
        clock.advance(0.06)
        cpu.step()
        assert cpu.peripherals.delay_timer.get_value() == 9


class TestAwaitKey:
    # @intent:test_case_await Fx0A はキーが押されるまでPCを進めないことを検証します。
    def test_blocks_until_key(self, cpu, load):
        load(cpu, 0xF30A, 0x6001)
        snapshot = cpu.step()
        assert snapshot.execution_state is ExecutionState.AWAITING_KEY
        for _ in range(5):
            snapshot = cpu.step()
            assert cpu.get_state().pc == 0x200
            assert snapshot.execution_state is ExecutionState.AWAITING_KEY
        assert cpu.step_count == 1

    def test_key_resolves_synchronously(self, cpu, load):
        load(cpu, 0xF30A, 0x6001)
        cpu.step()
        cpu.set_key_state(0x7, True)
        state = cpu.get_state()
        assert state.v[3] == 0x7
        assert state.pc == 0x202
        assert cpu.execution_state is ExecutionState.RUNNING

        cpu.step()
        assert state.v[0] == 0x01

    # @intent:test_case_await 1回の待機につき解決はちょうど1回であることを検証します。
    def test_resolved_exactly_once(self, cpu, load):
        load(cpu, 0xF30A, 0x6001)
        cpu.step()
        cpu.set_key_state(0x7, True)
        cpu.set_key_state(0x7, True)
        cpu.set_key_state(0x7, False)
        cpu.set_key_state(0x8, True)
        state = cpu.get_state()
        assert state.v[3] == 0x7
        assert state.pc == 0x202

    def test_key_held_before_await_is_ignored(self, cpu, load):
        load(cpu, 0xF30A)
        cpu.set_key_state(0x4, True)
        cpu.step()
        cpu.set_key_state(0x4, True)
        assert cpu.execution_state is ExecutionState.AWAITING_KEY
        cpu.set_key_state(0x4, False)
        cpu.set_key_state(0x4, True)
        assert cpu.get_state().v[3] == 0x4

    def test_deferred_resolution_on_step(self, cpu, load):
        load(cpu, 0xF30A, 0x6001)
        cpu.step()
        cpu.set_key_state(0xB, True, resolve=False)
        assert cpu.get_state().pc == 0x200
        cpu.step()
        assert cpu.get_state().v[3] == 0xB
        assert cpu.get_state().pc == 0x202
        assert cpu.execution_state is ExecutionState.RUNNING

    def test_timers_run_while_waiting(self, cpu, load, clock):
        load(cpu, 0x6005, 0xF015, 0xF30A)
        for _ in range(3):
            cpu.step()
        clock.advance(0.02)
        cpu.step()
        assert cpu.peripherals.delay_timer.get_value() == 4

    def test_release_does_not_resolve(self, cpu, load):
        load(cpu, 0xF30A)
        cpu.step()
        cpu.set_key_state(0x1, False)
        assert cpu.execution_state is ExecutionState.AWAITING_KEY


class TestFatalErrorProgramCounter:
    # @intent:test_case_fatal 致命的エラーの後、PCは失敗した命令を指したままであることを検証します。
    def test_stack_overflow_keeps_pc_on_call(self, cpu, load):
        load(cpu, 0x2200)
        for _ in range(16):
            cpu.step()
        with pytest.raises(StackOverflowError):
            cpu.step()
        state = cpu.get_state()
        assert state.pc == 0x200
        assert state.sp == 16

    def test_store_out_of_bounds_keeps_pc(self, cpu, load):
        cpu.get_state().set_i(0xFFE)
        load(cpu, 0x6001, 0xF255)
        cpu.step()
        with pytest.raises(OutOfBoundsError):
            cpu.step()
        assert cpu.get_state().pc == 0x202

    def test_failed_instruction_is_retried(self, cpu, load):
        state = cpu.get_state()
        state.set_i(0xFFF)
        load(cpu, 0xF133, 0xA300, 0xF133)
        with pytest.raises(OutOfBoundsError):
            cpu.step()
        assert state.pc == 0x200
        state.set_i(0x300)
        cpu.step()
        assert state.pc == 0x202


class TestEndOfMemory:
    # @intent:test_case_oob 最終アドレスの命令の後、PCは0x000に折り返さず OutOfBoundsError となることを検証します。
    def test_sequential_flow_past_end(self, cpu, load):
        load(cpu, 0x6001, address=0xFFE)
        cpu.get_state().set_pc(0xFFE)
        with pytest.raises(OutOfBoundsError, match="0x1000"):
            cpu.step()
        assert cpu.get_state().pc == 0xFFE

    def test_skip_past_end(self, cpu, load):
        load(cpu, 0x3000, address=0xFFC)
        cpu.get_state().set_pc(0xFFC)
        with pytest.raises(OutOfBoundsError):
            cpu.step()
        assert cpu.get_state().pc == 0xFFC

    def test_jump_at_last_address(self, cpu, load):
        load(cpu, 0x1200, address=0xFFE)
        cpu.get_state().set_pc(0xFFE)
        snapshot = cpu.step()
        assert snapshot.state.pc == 0x200

    def test_return_at_last_address(self, cpu, load):
        load(cpu, 0x2FFE)
        load(cpu, 0x00EE, address=0xFFE)
        cpu.step()
        cpu.step()
        assert cpu.get_state().pc == 0x202

    def test_key_wait_at_last_address(self, cpu, load):
        load(cpu, 0xF00A, address=0xFFE)
        cpu.get_state().set_pc(0xFFE)
        cpu.step()
        cpu.set_key_state(0x3, True)
        assert cpu.get_state().v[0] == 0x3
        with pytest.raises(OutOfBoundsError):
            cpu.step()
