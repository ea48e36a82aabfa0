"""CHIP-8 system instructions (00E0, 00EE)."""

import jax.numpy as jnp
from chipcore.state import EmulatorState, set_pc
from chipcore.decode import DecodedInstruction
from chipcore.stack import pop


def execute_clear_screen(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00E0 - Clear display."""
    return state.replace(display=jnp.zeros_like(state.display))


def execute_return(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00EE - Return from subroutine: PC = stack[SP], then SP -= 1."""
    stack, address = pop(state.stack)
    return set_pc(state.replace(stack=stack), address)
