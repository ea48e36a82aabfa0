"""CHIP-8 register load and immediate instructions."""

import jax
import jax.numpy as jnp
from chipcore.state import EmulatorState, set_register
from chipcore.decode import DecodedInstruction


def execute_set(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """6XKK - Set VX = KK."""
    return set_register(state, instruction.x, instruction.kk)


def execute_add(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """7XKK - Add KK to VX, no carry flag."""
    return set_register(state, instruction.x, int(state.V[instruction.x]) + instruction.kk)


def execute_set_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """ANNN - Set I = NNN."""
    return state.replace(I=jnp.astype(instruction.nnn, jnp.uint16))


def execute_random(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """CXKK - Set VX = random byte & KK."""
    key, subkey = jax.random.split(state.rng)
    random_value = int(jax.random.randint(subkey, shape=(), minval=0, maxval=256))
    state = state.replace(rng=key)
    return set_register(state, instruction.x, random_value & instruction.kk)
