"""Test configuration and fixtures for CHIP-8 core tests."""

import pytest
import jax.numpy as jnp
from chipcore import create_state, decode, execute, Machine
from chipcore.logging import TraceLogger


@pytest.fixture
def fresh_state():
    """Provide a fresh machine state for each test."""
    return create_state()


@pytest.fixture
def legacy_state():
    """Provide a state with the uniform advance after jumps (default)."""
    return create_state(advance_after_jump=True)


@pytest.fixture
def exact_jump_state():
    """Provide a state that lands exactly on jump targets."""
    return create_state(advance_after_jump=False)


@pytest.fixture
def machine():
    """Provide a quiet machine with the default font installed."""
    return Machine(logger=TraceLogger(log_level="CRITICAL", use_colors=False))


def run_opcode(state, opcode):
    """Helper to decode and execute one opcode, dropping the skip flag."""
    state, _ = execute(state, decode(opcode))
    return state


def set_registers(state, **registers):
    """Helper to set registers by name, e.g. ``set_registers(state, V1=5)``."""
    V = state.V
    for name, value in registers.items():
        V = V.at[int(name[1:], 16)].set(value)
    return state.replace(V=V)


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )


def pixel(state, x, y):
    """Read one pixel from the row-major display."""
    return int(state.display[y * 64 + x])
