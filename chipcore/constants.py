"""CHIP-8 machine constants."""

import jax.numpy as jnp

MEMORY_SIZE = 4096
NUM_REGISTERS = 16
STACK_SIZE = 16

PROGRAM_START = 0x200
FONT_START = 0x050

SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32
DISPLAY_SIZE = SCREEN_WIDTH * SCREEN_HEIGHT

INSTRUCTION_SIZE = 2
FLAG_REGISTER = 0xF

BYTE_MASK = 0xFF
WORD_MASK = 0xFFFF

# Default SHL carry bit
SHIFT_CARRY_MASK = 0x10

# Conventional 4x5 hex digit glyphs, 5 bytes each
FONT_DATA = jnp.array([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
], dtype=jnp.uint8)

__all__ = [
    "MEMORY_SIZE",
    "NUM_REGISTERS",
    "STACK_SIZE",
    "PROGRAM_START",
    "FONT_START",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "DISPLAY_SIZE",
    "INSTRUCTION_SIZE",
    "FLAG_REGISTER",
    "BYTE_MASK",
    "WORD_MASK",
    "SHIFT_CARRY_MASK",
    "FONT_DATA",
]
