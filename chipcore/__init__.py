"""CHIP-8 virtual machine core."""

from chipcore.state import EmulatorState, StackState, create_state
from chipcore.emulator import (
    execute, fetch, step, load_rom, load_font, dump_state, framebuffer, StateSnapshot
)
from chipcore.decode import DecodedInstruction, Kind, decode, disassemble
from chipcore.errors import (
    Chip8Error, DecodeError, ExecutionError, StackError, StackOverflowError,
    StackUnderflowError, MemoryAccessError
)
from chipcore.machine import Machine
from chipcore.constants import *

__all__ = [
    "EmulatorState",
    "StackState",
    "create_state",
    "fetch",
    "execute",
    "step",
    "load_rom",
    "load_font",
    "dump_state",
    "framebuffer",
    "StateSnapshot",
    "DecodedInstruction",
    "Kind",
    "decode",
    "disassemble",
    "Machine",
    "Chip8Error",
    "DecodeError",
    "ExecutionError",
    "StackError",
    "StackOverflowError",
    "StackUnderflowError",
    "MemoryAccessError",
    "PROGRAM_START",
    "FONT_START",
    "FONT_DATA",
    "MEMORY_SIZE",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "STACK_SIZE",
]
