"""
CHIP-8 算術・論理命令（7xkk, 8xyN, Cxkk）のテスト。
"""
import pytest


def run(cpu, load, opcode, **registers):
    state = cpu.get_state()
    for name, value in registers.items():
        state.set_v(int(name[1:], 16), value)
    load(cpu, opcode)
    cpu.step()
    return state


# @intent:test_case_add 7xkk は8bitで桁あふれし、VFを変更しないことを検証します。
def test_add_imm_wraps_without_flag(cpu, load):
    state = run(cpu, load, 0x7001, V0=0xFF, VF=0x00)
    assert state.v[0] == 0x00
    assert state.v[0xF] == 0x00

def test_add_imm(cpu, load):
    state = run(cpu, load, 0x7A05, VA=0x10)
    assert state.v[0xA] == 0x15

@pytest.mark.parametrize("opcode, expected", [
    (0x8011, 0b1110),  # OR
    (0x8012, 0b1000),  # AND
    (0x8013, 0b0110),  # XOR
])
def test_bitwise(cpu, load, opcode, expected):
    state = run(cpu, load, opcode, V0=0b1100, V1=0b1010)
    assert state.v[0] == expected

def test_ld_reg(cpu, load):
    state = run(cpu, load, 0x8010, V0=0x00, V1=0x42)
    assert state.v[0] == 0x42
    assert state.v[1] == 0x42


class TestAddReg:
    def test_carry(self, cpu, load):
        state = run(cpu, load, 0x8014, V0=0xFF, V1=0x02)
        assert state.v[0] == 0x01
        assert state.v[0xF] == 1

    def test_no_carry(self, cpu, load):
        state = run(cpu, load, 0x8014, V0=0x10, V1=0x20, VF=1)
        assert state.v[0] == 0x30
        assert state.v[0xF] == 0

    # @intent:test_case_vf VFが加算先の場合、結果ではなくフラグが残ることを検証します。
    def test_vf_as_destination_holds_flag(self, cpu, load):
        state = run(cpu, load, 0x8F14, VF=0xFF, V1=0x01)
        assert state.v[0xF] == 1


class TestSub:
    def test_sub_no_borrow(self, cpu, load):
        state = run(cpu, load, 0x8015, V0=0x05, V1=0x03)
        assert state.v[0] == 0x02
        assert state.v[0xF] == 1

    def test_sub_borrow(self, cpu, load):
        state = run(cpu, load, 0x8015, V0=0x03, V1=0x05)
        assert state.v[0] == 0xFE
        assert state.v[0xF] == 0

    def test_sub_equal_sets_flag(self, cpu, load):
        state = run(cpu, load, 0x8015, V0=0x07, V1=0x07)
        assert state.v[0] == 0x00
        assert state.v[0xF] == 1

    def test_subn(self, cpu, load):
        state = run(cpu, load, 0x8017, V0=0x03, V1=0x05)
        assert state.v[0] == 0x02
        assert state.v[0xF] == 1

    def test_subn_borrow(self, cpu, load):
        state = run(cpu, load, 0x8017, V0=0x05, V1=0x03)
        assert state.v[0] == 0xFE
        assert state.v[0xF] == 0


class TestShift:
    # @intent:test_case_shift 8xy6/8xyE は Vy をシフトして Vx に書き込むことを検証します。
    def test_shr_uses_vy(self, cpu, load):
        state = run(cpu, load, 0x8016, V0=0xFF, V1=0x05)
        assert state.v[0] == 0x02
        assert state.v[1] == 0x05
        assert state.v[0xF] == 1

    def test_shr_flag_clear(self, cpu, load):
        state = run(cpu, load, 0x8016, V1=0x04, VF=1)
        assert state.v[0] == 0x02
        assert state.v[0xF] == 0

    def test_shl_uses_vy(self, cpu, load):
        state = run(cpu, load, 0x801E, V0=0x00, V1=0x81)
        assert state.v[0] == 0x02
        assert state.v[0xF] == 1

    def test_shl_flag_clear(self, cpu, load):
        state = run(cpu, load, 0x801E, V1=0x41, VF=1)
        assert state.v[0] == 0x82
        assert state.v[0xF] == 0


class TestRandom:
    def test_rnd_masked(self, cpu, load):
        load(cpu, *([0xC00F] * 20))
        for _ in range(20):
            cpu.step()
            assert cpu.get_state().v[0] <= 0x0F

    def test_rnd_zero_mask(self, cpu, load):
        state = run(cpu, load, 0xC000, V0=0x55)
        assert state.v[0] == 0x00
