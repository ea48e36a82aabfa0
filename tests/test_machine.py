"""Tests for the stateful Machine driver."""

import io

import jax
import pytest
from chipcore import DecodeError, Machine, StackUnderflowError
from chipcore.logging import TraceLogger


def quiet_logger(level="CRITICAL", stream=None):
    return TraceLogger(log_level=level, use_colors=False, show_timestamps=False, stream=stream)


def test_initial_machine(machine):
    assert machine.state.pc == 0x200
    assert machine.steps == 0
    assert int(machine.state.memory[0x50]) == 0xF0


def test_machine_without_font():
    machine = Machine(font=None, logger=quiet_logger())
    assert int(machine.state.memory.sum()) == 0


def test_step_returns_none_and_mutates(machine):
    machine.load_rom(bytes([0x71, 0x0F, 0x81, 0x05]))
    assert machine.step() is None
    assert machine.state.V[1] == 0x0F
    machine.step()
    assert machine.state.pc == 0x204
    assert machine.steps == 2


def test_call_return_sequence(machine):
    rom = bytearray(0x104)
    rom[0:2] = bytes([0x23, 0x00])        # 0x200: CALL 0x300
    rom[0x102:0x104] = bytes([0x00, 0xEE])  # 0x302: RET
    machine.load_rom(bytes(rom))

    machine.step()
    assert machine.state.pc == 0x302
    assert machine.state.stack.pointer == 1
    machine.step()
    assert machine.state.pc == 0x202
    assert machine.state.stack.pointer == 0


def test_exact_jump_machine():
    machine = Machine(advance_after_jump=False, logger=quiet_logger())
    machine.load_rom(bytes([0x12, 0x00]))  # JP 0x200, tight loop
    machine.run(3)
    assert machine.state.pc == 0x200
    assert machine.steps == 3


def test_error_propagates_and_state_is_kept(machine):
    machine.load_rom(bytes([0x60, 0x05, 0xE0, 0x9E]))
    machine.step()
    with pytest.raises(DecodeError):
        machine.step()
    assert machine.state.pc == 0x202
    assert machine.state.V[0] == 5
    assert machine.steps == 1


def test_error_is_logged():
    stream = io.StringIO()
    machine = Machine(logger=quiet_logger("ERROR", stream))
    machine.load_rom(bytes([0x00, 0xEE]))
    with pytest.raises(StackUnderflowError):
        machine.step()
    output = stream.getvalue()
    assert "StackUnderflowError" in output
    assert "PC=0x200" in output
    assert "opcode=0x00EE" in output


def test_trace_logging():
    stream = io.StringIO()
    machine = Machine(logger=quiet_logger("DEBUG", stream))
    machine.load_rom(bytes([0x61, 0x2A]))
    machine.step()
    assert "200: 612A  LD V1, 0x2A" in stream.getvalue()


def test_run_with_progress(machine):
    machine.load_rom(bytes([0x70, 0x01] * 10))
    machine.run(10, progress=True)
    assert machine.state.V[0] == 10
    assert machine.state.pc == 0x214


def test_dump_state_logs_and_returns():
    stream = io.StringIO()
    machine = Machine(logger=quiet_logger("INFO", stream))
    machine.load_rom(bytes([0x6F, 0x01]))
    machine.step()
    snapshot = machine.dump_state()
    assert snapshot.registers[15] == 1
    assert snapshot.pc == 0x202
    assert "--- INTERPRETER DUMP ---" in stream.getvalue()
    assert "VF=01" in stream.getvalue()


def test_display_and_framebuffer(machine):
    # I = font glyph "0", draw at (0, 0)
    machine.load_rom(bytes([0xA0, 0x50, 0xD0, 0x05]))
    machine.run(2)
    assert machine.display.shape == (2048,)
    assert list(machine.framebuffer[0, :8]) == [1, 1, 1, 1, 0, 0, 0, 0]
    assert list(machine.framebuffer[1, :8]) == [1, 0, 0, 1, 0, 0, 0, 0]


def test_reset(machine):
    machine.load_rom(bytes([0x60, 0x05]))
    machine.step()
    machine.reset()
    assert machine.state.pc == 0x200
    assert machine.state.V[0] == 0
    assert machine.steps == 0
    assert int(machine.state.memory[0x200]) == 0


def test_random_seed():
    a = Machine(rng=jax.random.PRNGKey(3), logger=quiet_logger())
    b = Machine(rng=jax.random.PRNGKey(3), logger=quiet_logger())
    for m in (a, b):
        m.load_rom(bytes([0xC0, 0xFF]))
        m.step()
    assert int(a.state.V[0]) == int(b.state.V[0])


def test_disassemble(machine):
    machine.load_rom(bytes([0x00, 0xE0, 0x12, 0x00]))
    assert machine.disassemble(count=2) == [(0x200, 0x00E0, "CLS"), (0x202, 0x1200, "JP 0x200")]
