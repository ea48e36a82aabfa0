"""CHIP-8 control flow instructions."""

from chipcore.state import EmulatorState, set_pc
from chipcore.decode import DecodedInstruction
from chipcore.stack import push


def execute_jump(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """1NNN - Jump to address NNN."""
    return set_pc(state, instruction.nnn)


def execute_call(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """2NNN - Call subroutine at NNN.

    The pushed return address is the address of the CALL itself; the stepper's
    advance moves past it on return.
    """
    state = state.replace(stack=push(state.stack, int(state.pc)))
    return execute_jump(state, instruction)


def execute_jump_with_offset(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """BNNN - Jump to address NNN + V0."""
    return set_pc(state, instruction.nnn + int(state.V[0]))


def make_skip_condition(condition_fn):
    """Factory for skip conditions evaluated by the stepper."""
    def skip_condition(state: EmulatorState, instruction: DecodedInstruction) -> bool:
        return bool(condition_fn(state, instruction))
    return skip_condition


skip_if_equal_immediate = make_skip_condition(
    lambda state, inst: int(state.V[inst.x]) == inst.kk
)

skip_if_not_equal_immediate = make_skip_condition(
    lambda state, inst: int(state.V[inst.x]) != inst.kk
)

skip_if_equal_register = make_skip_condition(
    lambda state, inst: int(state.V[inst.x]) == int(state.V[inst.y])
)

skip_if_not_equal_register = make_skip_condition(
    lambda state, inst: int(state.V[inst.x]) != int(state.V[inst.y])
)
