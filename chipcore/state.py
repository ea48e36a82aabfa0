"""CHIP-8 machine state structures."""

import jax
import jax.numpy as jnp
from flax.struct import dataclass, PyTreeNode, field

from chipcore.constants import (
    MEMORY_SIZE, NUM_REGISTERS, PROGRAM_START, DISPLAY_SIZE, STACK_SIZE, SHIFT_CARRY_MASK
)


@dataclass(frozen=True)
class StackState:
    """Return-address stack for subroutine calls.

    Slot 0 is never written by CALL: the pointer is incremented before the
    return address is stored.
    """
    data: jnp.ndarray = field(default_factory=lambda: jnp.zeros(STACK_SIZE, dtype=jnp.uint16))
    pointer: int = 0


class EmulatorState(PyTreeNode):
    """Main CHIP-8 machine state.

    Attributes:
        rng: PRNG key consumed by RND, split on every draw
        memory: 4096 bytes of addressable memory
        pc: Program counter
        display: Row-major 64x32 pixel buffer, 0 = off, 1 = on
        stack: Return-address stack
        delay_timer: Delay timer (no autonomous decrement)
        sound_timer: Sound timer (no autonomous decrement)
        V: General purpose registers V0..VF
        I: Index register
        advance_after_jump: Apply the uniform +2 advance after RET/JP/CALL/JP_V0
        shift_carry_mask: Bit of VX copied into VF by SHL
    """
    rng: jax.random.PRNGKey
    memory: jnp.ndarray = field(default_factory=lambda: jnp.zeros(MEMORY_SIZE, dtype=jnp.uint8))
    pc: jnp.ndarray = field(default_factory=lambda: jnp.astype(PROGRAM_START, jnp.uint16))
    display: jnp.ndarray = field(default_factory=lambda: jnp.zeros(DISPLAY_SIZE, dtype=jnp.uint8))
    stack: StackState = field(default_factory=StackState)
    delay_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    sound_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    V: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_REGISTERS, dtype=jnp.uint8))
    I: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint16))
    advance_after_jump: bool = field(pytree_node=False, default=True)
    shift_carry_mask: int = field(pytree_node=False, default=SHIFT_CARRY_MASK)


def create_state(
    rng: jax.random.PRNGKey = None,
    advance_after_jump: bool = True,
    shift_carry_mask: int = SHIFT_CARRY_MASK,
) -> EmulatorState:
    """Create a zeroed machine state with PC at the program start.

    Memory is left empty; install a font with ``load_font`` and a program with
    ``load_rom``.
    """
    if rng is None:
        rng = jax.random.PRNGKey(0)
    return EmulatorState(
        rng,
        advance_after_jump=advance_after_jump,
        shift_carry_mask=shift_carry_mask,
    )


def set_register(state: EmulatorState, index: int, value: int) -> EmulatorState:
    """Store ``value`` into V[index], truncated to 8 bits."""
    return state.replace(V=state.V.at[index].set(int(value) & 0xFF))


def set_flag(state: EmulatorState, value: int) -> EmulatorState:
    """Store ``value`` into VF."""
    return set_register(state, 0xF, value)


def set_pc(state: EmulatorState, address: int) -> EmulatorState:
    """Store ``address`` into PC, truncated to 16 bits."""
    return state.replace(pc=jnp.astype(int(address) & 0xFFFF, jnp.uint16))
