"""
retro_chip8.core.state / snapshot モジュールのテスト。
"""
import pytest

from retro_chip8.core.snapshot import Operation, Metadata, Snapshot, ExecutionState
from retro_chip8.core.state import Chip8CpuState, PROGRAM_START


class TestChip8CpuState:
    def test_defaults(self):
        state = Chip8CpuState()
        assert list(state.v) == [0] * 16
        assert state.i == 0
        assert state.pc == PROGRAM_START
        assert state.sp == 0

    # @intent:test_case_range レジスタには範囲外の値が格納されないことを検証します。
    def test_setters_mask(self):
        state = Chip8CpuState()
        state.set_v(0, 0x1FF)
        state.set_i(0x12345)
        state.set_pc(0x1202)
        assert state.v[0] == 0xFF
        assert state.i == 0x2345
        assert state.pc == 0x202

    def test_v_rejects_out_of_range_values(self):
        state = Chip8CpuState()
        with pytest.raises(ValueError):
            state.v[0] = 256

    def test_invalid_register_count(self):
        with pytest.raises(ValueError):
            Chip8CpuState(v=bytearray(15))

    def test_copy_is_independent(self):
        state = Chip8CpuState()
        state.set_v(1, 0x42)
        clone = state.copy()
        state.set_v(1, 0x00)
        state.pc = 0x300
        assert clone.v[1] == 0x42
        assert clone.pc == PROGRAM_START


class TestOperation:
    def test_operand_fields(self):
        op = Operation(0xD12F, 0xD000, "DRW")
        assert op.x == 0x1
        assert op.y == 0x2
        assert op.n == 0xF
        assert op.kk == 0x2F
        assert op.nnn == 0x12F
        assert op.opcode_hex == "D12F"
        assert op.length == 2
        assert op.operands == []

    def test_snapshot_is_frozen(self):
        snapshot = Snapshot(Chip8CpuState(), None, Metadata(step_count=0))
        assert snapshot.execution_state is ExecutionState.RUNNING
        with pytest.raises(AttributeError):
            snapshot.metadata = Metadata(step_count=1)
