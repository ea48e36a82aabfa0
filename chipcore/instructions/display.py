"""CHIP-8 display operations."""

import jax.numpy as jnp
from chipcore.state import EmulatorState, set_flag
from chipcore.decode import DecodedInstruction
from chipcore.constants import SCREEN_WIDTH, SCREEN_HEIGHT, MEMORY_SIZE
from chipcore.errors import MemoryAccessError

# Pre-computed coordinate grids, rows first to match the row-major buffer
yy, xx = jnp.meshgrid(jnp.arange(SCREEN_HEIGHT), jnp.arange(SCREEN_WIDTH), indexing='ij')


def execute_display(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """DXYN - Draw N-byte sprite from memory[I] at (VX, VY).

    Sprites are clipped at the right and bottom edges instead of wrapping.
    VF is set when any lit pixel is turned off.
    """
    sprite_x = int(state.V[instruction.x]) % SCREEN_WIDTH
    sprite_y = int(state.V[instruction.y]) % SCREEN_HEIGHT
    height = instruction.n
    index = int(state.I)

    visible_rows = min(height, SCREEN_HEIGHT - sprite_y)
    if visible_rows > 0 and index + visible_rows > MEMORY_SIZE:
        raise MemoryAccessError(
            index + visible_rows - 1,
            f"Sprite read out of range: I=0x{index:X}, {visible_rows} rows",
        )

    row_offset = yy - sprite_y
    col_offset = xx - sprite_x
    in_sprite = (row_offset >= 0) & (row_offset < visible_rows) & (col_offset >= 0) & (col_offset < 8)

    sprite_bytes = state.memory[jnp.clip(index + row_offset, 0, MEMORY_SIZE - 1)]
    bits = (sprite_bytes >> jnp.clip(7 - col_offset, 0, 7)) & 1
    sprite = jnp.where(in_sprite, bits, 0).astype(jnp.uint8).reshape(-1)

    old_display = state.display
    new_display = old_display ^ sprite
    collision = bool(jnp.any((old_display == 1) & (new_display == 0)))

    state = state.replace(display=new_display)
    return set_flag(state, int(collision))
