"""Main CHIP-8 execution engine."""

from typing import Sequence

import jax.numpy as jnp
import numpy as np
from chex import dataclass

from chipcore.state import EmulatorState, set_pc
from chipcore.decode import DecodedInstruction, Kind, decode
from chipcore.constants import (
    FONT_DATA, FONT_START, INSTRUCTION_SIZE, MEMORY_SIZE, PROGRAM_START, SCREEN_HEIGHT, SCREEN_WIDTH
)
from chipcore.errors import ExecutionError, MemoryAccessError
from chipcore.instructions.system import execute_clear_screen, execute_return
from chipcore.instructions.control_flow import (
    execute_jump, execute_call, execute_jump_with_offset,
    skip_if_equal_immediate, skip_if_not_equal_immediate,
    skip_if_equal_register, skip_if_not_equal_register,
)
from chipcore.instructions.alu import execute_alu_operation
from chipcore.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from chipcore.instructions.display import execute_display
from chipcore.instructions.misc import (
    execute_get_delay_timer, execute_set_delay_timer, execute_set_sound_timer, execute_add_to_index
)


EXECUTE_MAP = {
    Kind.CLS: execute_clear_screen,
    Kind.RET: execute_return,
    Kind.JP: execute_jump,
    Kind.CALL: execute_call,
    Kind.LD_VX_BYTE: execute_set,
    Kind.ADD_VX_BYTE: execute_add,
    Kind.LD_VX_VY: execute_alu_operation,
    Kind.OR_VX_VY: execute_alu_operation,
    Kind.AND_VX_VY: execute_alu_operation,
    Kind.XOR_VX_VY: execute_alu_operation,
    Kind.ADD_VX_VY: execute_alu_operation,
    Kind.SUB_VX_VY: execute_alu_operation,
    Kind.SHR_VX_VY: execute_alu_operation,
    Kind.SUBN_VX_VY: execute_alu_operation,
    Kind.SHL_VX_VY: execute_alu_operation,
    Kind.LD_I: execute_set_index,
    Kind.JP_V0: execute_jump_with_offset,
    Kind.RND_VX_BYTE: execute_random,
    Kind.DRW_VX_VY: execute_display,
    Kind.LD_VX_DT: execute_get_delay_timer,
    Kind.LD_DT_VX: execute_set_delay_timer,
    Kind.LD_ST_VX: execute_set_sound_timer,
    Kind.ADD_I_VX: execute_add_to_index,
}

SKIP_CONDITIONS = {
    Kind.SE_VX_BYTE: skip_if_equal_immediate,
    Kind.SNE_VX_BYTE: skip_if_not_equal_immediate,
    Kind.SE_VX_VY: skip_if_equal_register,
    Kind.SNE_VX_VY: skip_if_not_equal_register,
}

# Kinds whose handler writes PC itself
JUMP_KINDS = frozenset({Kind.RET, Kind.JP, Kind.CALL, Kind.JP_V0})


def execute(state: EmulatorState, instruction: DecodedInstruction) -> tuple[EmulatorState, bool]:
    """Execute single decoded instruction.

    Returns the new state and whether the stepper must skip the next
    instruction. PC is only written by RET, JP, CALL and JP_V0.
    """
    condition = SKIP_CONDITIONS.get(instruction.kind)
    if condition is not None:
        return state, condition(state, instruction)

    handler = EXECUTE_MAP.get(instruction.kind)
    if handler is None:
        raise ExecutionError(instruction.kind)
    return handler(state, instruction), False


def fetch(state: EmulatorState) -> int:
    """Fetch the big-endian opcode at PC without advancing PC."""
    pc = int(state.pc)
    if pc + 1 >= MEMORY_SIZE:
        raise MemoryAccessError(pc, f"Instruction fetch out of range: PC=0x{pc:X}")
    return (int(state.memory[pc]) << 8) | int(state.memory[pc + 1])


def advance(state: EmulatorState, instruction: DecodedInstruction, skip: bool) -> EmulatorState:
    """Move PC past the executed instruction, and past the next one on skip."""
    if instruction.kind in JUMP_KINDS and not state.advance_after_jump:
        return state
    offset = INSTRUCTION_SIZE * (2 if skip else 1)
    return set_pc(state, int(state.pc) + offset)


def step(state: EmulatorState) -> EmulatorState:
    """Run one fetch, decode, execute, advance cycle."""
    instruction = decode(fetch(state))
    state, skip = execute(state, instruction)
    return advance(state, instruction, skip)


def _write_memory(state: EmulatorState, address: int, data, what: str) -> EmulatorState:
    data = np.asarray(data, dtype=np.int64).reshape(-1) & 0xFF
    if address + len(data) > MEMORY_SIZE:
        raise MemoryAccessError(
            address + len(data) - 1,
            f"{what} of {len(data)} bytes does not fit at 0x{address:03X}",
        )
    new_memory = state.memory.at[address:address + len(data)].set(jnp.asarray(data, dtype=jnp.uint8))
    return state.replace(memory=new_memory)


def load_rom(state: EmulatorState, rom: Sequence[int]) -> EmulatorState:
    """Copy ROM bytes into memory starting at 0x200."""
    return _write_memory(state, PROGRAM_START, list(rom), "ROM")


def load_font(state: EmulatorState, table: Sequence[int] = FONT_DATA) -> EmulatorState:
    """Copy font glyph table into memory starting at 0x050."""
    return _write_memory(state, FONT_START, table, "Font table")


@dataclass(frozen=True)
class StateSnapshot:
    """Read-only copy of the CPU registers for diagnostics."""
    registers: tuple
    stack: tuple
    sp: int
    pc: int
    I: int
    delay_timer: int
    sound_timer: int

    def format(self) -> str:
        """Render the snapshot as a multi-line dump."""
        registers = " ".join(f"V{i:X}={v:02X}" for i, v in enumerate(self.registers))
        stack = " ".join(f"{v:03X}" for v in self.stack)
        return "\n".join([
            "--- INTERPRETER DUMP ---",
            f"Registers: {registers}",
            f"Stack: {stack}",
            f"Stack Pointer: {self.sp}",
            f"Program Counter: 0x{self.pc:03X}",
            f"I Register: 0x{self.I:03X}",
            f"Delay Timer: {self.delay_timer}",
            f"Sound Timer: {self.sound_timer}",
            "--- INTERPRETER DUMP ---",
        ])


def dump_state(state: EmulatorState) -> StateSnapshot:
    """Take a diagnostic snapshot; the state is not modified."""
    return StateSnapshot(
        registers=tuple(np.asarray(state.V).tolist()),
        stack=tuple(np.asarray(state.stack.data).tolist()),
        sp=int(state.stack.pointer),
        pc=int(state.pc),
        I=int(state.I),
        delay_timer=int(state.delay_timer),
        sound_timer=int(state.sound_timer),
    )


def framebuffer(state: EmulatorState) -> np.ndarray:
    """Return the display as a (height, width) array of 0/1 pixels."""
    return np.asarray(state.display).reshape(SCREEN_HEIGHT, SCREEN_WIDTH)
