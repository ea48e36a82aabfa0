"""CHIP-8 ALU operations (8xxx).

Each ``alu_*`` function maps ``(vx, vy)`` to ``(result, flag)``. A flag of
``None`` leaves VF untouched; otherwise VF is written after VX, so the flag
wins when X is F.
"""

from typing import Optional

from chipcore.state import EmulatorState, set_register, set_flag
from chipcore.decode import DecodedInstruction, Kind


def alu_set(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY0 - Set: VX = VY."""
    return vy, None


def alu_or(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY1 - Binary OR: VX |= VY."""
    return vx | vy, None


def alu_and(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY2 - Binary AND: VX &= VY."""
    return vx & vy, None


def alu_xor(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY3 - Logical XOR: VX ^= VY."""
    return vx ^ vy, None


def alu_add(vx: int, vy: int) -> tuple[int, int]:
    """8XY4 - Add: VX += VY, VF = carry."""
    result = vx + vy
    return result & 0xFF, int(result > 255)


def alu_sub_xy(vx: int, vy: int) -> tuple[int, int]:
    """8XY5 - Subtract: VX -= VY, VF = VX > VY."""
    return (vx - vy) & 0xFF, int(vx > vy)


def alu_shift_right(vx: int, vy: int) -> tuple[int, int]:
    """8XY6 - Shift right: VX >>= 1, VF = old LSB."""
    return vx >> 1, vx & 1


def alu_sub_yx(vx: int, vy: int) -> tuple[int, int]:
    """8XY7 - Subtract: VX = VY - VX, VF = VY > VX."""
    return (vy - vx) & 0xFF, int(vy > vx)


def make_shift_left(carry_mask: int):
    """8XY8 - Shift left: VX <<= 1, VF = bit ``carry_mask`` of old VX."""
    def alu_shift_left(vx: int, vy: int) -> tuple[int, int]:
        return (vx << 1) & 0xFF, int(vx & carry_mask != 0)
    return alu_shift_left


ALU_OPERATIONS = {
    Kind.LD_VX_VY: alu_set,
    Kind.OR_VX_VY: alu_or,
    Kind.AND_VX_VY: alu_and,
    Kind.XOR_VX_VY: alu_xor,
    Kind.ADD_VX_VY: alu_add,
    Kind.SUB_VX_VY: alu_sub_xy,
    Kind.SHR_VX_VY: alu_shift_right,
    Kind.SUBN_VX_VY: alu_sub_yx,
}


def execute_alu_operation(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """8XYN - ALU operations dispatcher."""
    vx = int(state.V[instruction.x])
    vy = int(state.V[instruction.y])

    if instruction.kind is Kind.SHL_VX_VY:
        operation = make_shift_left(state.shift_carry_mask)
    else:
        operation = ALU_OPERATIONS[instruction.kind]

    result, vf = operation(vx, vy)

    state = set_register(state, instruction.x, result)
    if vf is not None:
        state = set_flag(state, vf)
    return state
