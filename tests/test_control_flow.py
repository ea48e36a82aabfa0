"""Tests for control flow instructions."""

import pytest
from chipcore import decode, execute
from conftest import run_opcode, set_registers


class TestJump:
    """Test jump instructions."""

    def test_execute_jump(self, fresh_state):
        """1NNN - Jump to address."""
        state = run_opcode(fresh_state, 0x1ABC)
        assert state.pc == 0xABC

    def test_jump_with_offset(self, fresh_state):
        """BNNN - Jump to NNN + V0."""
        state = run_opcode(fresh_state, 0x6010)  # V0 = 0x10
        state = run_opcode(state, 0xB250)
        assert state.pc == 0x260

    def test_jump_with_offset_ignores_vx(self, fresh_state):
        """BNNN - The X nibble is part of the address, not a register."""
        state = set_registers(fresh_state, V0=0x01, V2=0x30)
        state = run_opcode(state, 0xB250)
        assert state.pc == 0x251

    def test_jump_with_offset_past_address_space(self, fresh_state):
        """BNNN - The sum is not masked to 12 bits."""
        state = set_registers(fresh_state, V0=0xFF)
        state = run_opcode(state, 0xBFFF)
        assert state.pc == 0x10FE

    def test_jump_with_offset_does_not_fall_through(self, fresh_state):
        """BNNN - Registers are untouched by the jump."""
        state = set_registers(fresh_state, V0=0x02)
        before = [int(v) for v in state.V]
        state = run_opcode(state, 0xB300)
        assert [int(v) for v in state.V] == before


class TestCall:
    """Test subroutine calls."""

    def test_call_pushes_current_pc(self, fresh_state):
        """2NNN - Push the CALL's own address, then jump."""
        state = run_opcode(fresh_state, 0x2300)

        assert state.pc == 0x300
        assert state.stack.pointer == 1
        assert state.stack.data[1] == 0x200
        assert state.stack.data[0] == 0


class TestSkipInstructions:
    """Test all skip instruction variants."""

    @pytest.mark.parametrize("opcode, registers, expected", [
        (0x3542, {"V5": 0x42}, True),    # SE V5, 0x42
        (0x3542, {"V5": 0x41}, False),
        (0x4320, {"V3": 0x10}, True),    # SNE V3, 0x20
        (0x4320, {"V3": 0x20}, False),
        (0x5120, {"V1": 0x55, "V2": 0x55}, True),    # SE V1, V2
        (0x5120, {"V1": 0x55, "V2": 0x44}, False),
        (0x9780, {"V7": 0xAA, "V8": 0xBB}, True),    # SNE V7, V8
        (0x9780, {"V7": 0xCC, "V8": 0xCC}, False),
        (0x3000, {}, True),              # V0 == 0
        (0x30FF, {"V0": 0xFF}, True),
    ])
    def test_skip_flag(self, fresh_state, opcode, registers, expected):
        """Skip instructions report the skip instead of writing PC."""
        state = set_registers(fresh_state, **registers)
        initial_pc = int(state.pc)

        state, skip = execute(state, decode(opcode))

        assert skip is expected
        assert state.pc == initial_pc

    def test_se_register_ignores_low_nibble(self, fresh_state):
        """5XYN - Decoded by top nibble only."""
        state = set_registers(fresh_state, V1=3, V2=3)
        _, skip = execute(state, decode(0x512F))
        assert skip is True

    def test_non_skip_instruction_never_skips(self, fresh_state):
        _, skip = execute(fresh_state, decode(0x6001))
        assert skip is False
