"""Stateful CHIP-8 machine driving the pure step function."""

from typing import Optional, Sequence

import jax
import numpy as np

from chipcore.state import EmulatorState, create_state
from chipcore.decode import decode, disassemble
from chipcore.emulator import (
    StateSnapshot, advance, dump_state, execute, fetch, framebuffer, load_font, load_rom
)
from chipcore.constants import FONT_DATA, SHIFT_CARRY_MASK
from chipcore.errors import Chip8Error
from chipcore.logging import TraceLogger, build_tqdm_progress_bar


class Machine:
    """A CHIP-8 core owning a single machine state.

    Every call to ``step`` replaces the owned state with the state produced by
    one fetch, decode, execute, advance cycle. Errors propagate to the caller
    after being logged.
    """

    def __init__(
        self,
        rng: Optional[jax.random.PRNGKey] = None,
        advance_after_jump: bool = True,
        shift_carry_mask: int = SHIFT_CARRY_MASK,
        font: Optional[Sequence[int]] = FONT_DATA,
        logger: Optional[TraceLogger] = None,
    ):
        """Initialize the machine.

        Args:
            rng: PRNG key for RND; defaults to ``PRNGKey(0)``
            advance_after_jump: Keep the +2 advance after RET/JP/CALL/JP_V0
            shift_carry_mask: Bit of VX copied into VF by SHL
            font: Glyph table installed at 0x050, or None to leave memory empty
            logger: Trace logger, a WARNING-level one is created if omitted
        """
        self.rng = rng
        self.advance_after_jump = advance_after_jump
        self.shift_carry_mask = shift_carry_mask
        self.font = font
        self.logger = logger or TraceLogger(log_level="WARNING")
        self.reset()

    def reset(self) -> None:
        """Recreate the initial state, reinstalling the font."""
        state = create_state(
            self.rng,
            advance_after_jump=self.advance_after_jump,
            shift_carry_mask=self.shift_carry_mask,
        )
        if self.font is not None:
            state = load_font(state, self.font)
        self._state = state
        self._steps = 0

    @property
    def state(self) -> EmulatorState:
        return self._state

    @property
    def steps(self) -> int:
        """Number of instructions executed since the last reset."""
        return self._steps

    @property
    def display(self) -> np.ndarray:
        """Flat row-major pixel buffer; any value other than 1 is off."""
        return np.asarray(self._state.display)

    @property
    def framebuffer(self) -> np.ndarray:
        return framebuffer(self._state)

    def load_rom(self, rom: Sequence[int]) -> None:
        self._state = load_rom(self._state, rom)
        self.logger.info(f"Loaded ROM ({len(rom)} bytes)")

    def load_font(self, table: Sequence[int]) -> None:
        self._state = load_font(self._state, table)

    def step(self) -> None:
        """Execute exactly one instruction."""
        state = self._state
        pc = int(state.pc)
        opcode = None
        try:
            opcode = fetch(state)
            instruction = decode(opcode)
            self.logger.log_step(self._steps, pc, opcode, instruction.mnemonic())
            state, skip = execute(state, instruction)
            state = advance(state, instruction, skip)
        except Chip8Error as e:
            where = f"PC=0x{pc:03X}" if opcode is None else f"PC=0x{pc:03X} opcode=0x{opcode:04X}"
            self.logger.error(f"{type(e).__name__} at {where}: {e}")
            raise
        self._state = state
        self._steps += 1

    def run(self, n: int, progress: bool = False) -> None:
        """Execute ``n`` instructions, optionally with a progress bar."""
        self.logger.log_run_start({
            "instructions": n,
            "start_pc": int(self._state.pc),
            "advance_after_jump": self.advance_after_jump,
            "shift_carry_mask": self.shift_carry_mask,
        })
        update, close = build_tqdm_progress_bar(n, disable=not progress)
        try:
            for i in range(n):
                self.step()
                update(i)
        finally:
            close()
        self.logger.log_run_end(n, int(self._state.pc))

    def dump_state(self) -> StateSnapshot:
        """Log and return a snapshot of the registers."""
        snapshot = dump_state(self._state)
        self.logger.log_dump(snapshot.format())
        return snapshot

    def disassemble(self, start: Optional[int] = None, count: int = 16) -> list[tuple[int, int, str]]:
        """Disassemble ``count`` words from ``start`` (defaults to PC)."""
        if start is None:
            start = int(self._state.pc)
        return disassemble(np.asarray(self._state.memory), start, count)
