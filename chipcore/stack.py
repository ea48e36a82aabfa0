"""CHIP-8 stack operations."""

import jax.numpy as jnp
from chipcore.constants import STACK_SIZE, WORD_MASK
from chipcore.errors import StackOverflowError, StackUnderflowError
from chipcore.state import StackState


def push(stack: StackState, address: int) -> StackState:
    """Increment the pointer, then store address at the new top."""
    new_pointer = int(stack.pointer) + 1
    if new_pointer >= STACK_SIZE:
        raise StackOverflowError(int(stack.pointer))
    new_data = stack.data.at[new_pointer].set(jnp.astype(int(address) & WORD_MASK, jnp.uint16))
    return stack.replace(data=new_data, pointer=new_pointer)


def pop(stack: StackState) -> tuple[StackState, int]:
    """Read the address at the current pointer, then decrement it."""
    pointer = int(stack.pointer)
    if pointer <= 0:
        raise StackUnderflowError(pointer)
    address = int(stack.data[pointer])
    return stack.replace(pointer=pointer - 1), address
