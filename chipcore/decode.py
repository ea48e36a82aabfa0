"""CHIP-8 instruction decoding."""

import enum

from chex import dataclass

from chipcore.errors import DecodeError


class Kind(enum.Enum):
    """Instruction kinds understood by the decoder and executor."""
    CLS = "CLS"
    RET = "RET"
    JP = "JP"
    CALL = "CALL"
    SE_VX_BYTE = "SE_Vx_byte"
    SNE_VX_BYTE = "SNE_Vx_byte"
    SE_VX_VY = "SE_Vx_Vy"
    LD_VX_BYTE = "LD_Vx_byte"
    ADD_VX_BYTE = "ADD_Vx_byte"
    LD_VX_VY = "LD_Vx_Vy"
    OR_VX_VY = "OR_Vx_Vy"
    AND_VX_VY = "AND_Vx_Vy"
    XOR_VX_VY = "XOR_Vx_Vy"
    ADD_VX_VY = "ADD_Vx_Vy"
    SUB_VX_VY = "SUB_Vx_Vy"
    SHR_VX_VY = "SHR_Vx_Vy"
    SUBN_VX_VY = "SUBN_Vx_Vy"
    SHL_VX_VY = "SHL_Vx_Vy"
    SNE_VX_VY = "SNE_Vx_Vy"
    LD_I = "LD_I"
    JP_V0 = "JP_V0"
    RND_VX_BYTE = "RND_Vx_byte"
    DRW_VX_VY = "DRW_Vx_Vy"
    LD_VX_DT = "LD_Vx_DT"
    LD_DT_VX = "LD_DT_Vx"
    LD_ST_VX = "LD_ST_Vx"
    ADD_I_VX = "ADD_I_Vx"


# (mask, pattern, kind), first match wins
DECODE_TABLE = (
    (0xFFFF, 0x00E0, Kind.CLS),
    (0xFFFF, 0x00EE, Kind.RET),
    (0xF000, 0x1000, Kind.JP),
    (0xF000, 0x2000, Kind.CALL),
    (0xF000, 0x3000, Kind.SE_VX_BYTE),
    (0xF000, 0x4000, Kind.SNE_VX_BYTE),
    (0xF000, 0x5000, Kind.SE_VX_VY),
    (0xF000, 0x6000, Kind.LD_VX_BYTE),
    (0xF000, 0x7000, Kind.ADD_VX_BYTE),
    (0xF00F, 0x8000, Kind.LD_VX_VY),
    (0xF00F, 0x8001, Kind.OR_VX_VY),
    (0xF00F, 0x8002, Kind.AND_VX_VY),
    (0xF00F, 0x8003, Kind.XOR_VX_VY),
    (0xF00F, 0x8004, Kind.ADD_VX_VY),
    (0xF00F, 0x8005, Kind.SUB_VX_VY),
    (0xF00F, 0x8006, Kind.SHR_VX_VY),
    (0xF00F, 0x8007, Kind.SUBN_VX_VY),
    (0xF00F, 0x8008, Kind.SHL_VX_VY),
    (0xF000, 0x9000, Kind.SNE_VX_VY),
    (0xF000, 0xA000, Kind.LD_I),
    (0xF000, 0xB000, Kind.JP_V0),
    (0xF000, 0xC000, Kind.RND_VX_BYTE),
    (0xF000, 0xD000, Kind.DRW_VX_VY),
    (0xF0FF, 0xF007, Kind.LD_VX_DT),
    (0xF0FF, 0xF015, Kind.LD_DT_VX),
    (0xF0FF, 0xF018, Kind.LD_ST_VX),
    (0xF0FF, 0xF01E, Kind.ADD_I_VX),
)


@dataclass(frozen=True)
class DecodedInstruction:
    """Decoded CHIP-8 instruction with extracted operands."""
    kind: Kind
    raw: int
    n: int       # Fourth nibble (4-bit immediate)
    nnn: int     # Last 12 bits (12-bit address)
    x: int       # Second nibble (VX register)
    y: int       # Third nibble (VY register)
    kk: int      # Last byte (8-bit immediate)

    def mnemonic(self) -> str:
        """Render the instruction as a short assembly-like string."""
        return format_instruction(self)


def _resolve_kind(opcode: int) -> Kind:
    for mask, pattern, kind in DECODE_TABLE:
        if opcode & mask == pattern:
            return kind
    raise DecodeError(opcode)


def decode(opcode: int) -> DecodedInstruction:
    """Decode 16-bit opcode into kind and operand fields."""
    opcode = int(opcode)
    if not 0 <= opcode <= 0xFFFF:
        raise DecodeError(opcode)
    return DecodedInstruction(
        kind=_resolve_kind(opcode),
        raw=opcode,
        n=opcode & 0x000F,
        nnn=opcode & 0x0FFF,
        x=(opcode & 0x0F00) >> 8,
        y=(opcode & 0x00F0) >> 4,
        kk=opcode & 0x00FF,
    )


_FORMATS = {
    Kind.CLS: "CLS",
    Kind.RET: "RET",
    Kind.JP: "JP 0x{nnn:03X}",
    Kind.CALL: "CALL 0x{nnn:03X}",
    Kind.SE_VX_BYTE: "SE V{x:X}, 0x{kk:02X}",
    Kind.SNE_VX_BYTE: "SNE V{x:X}, 0x{kk:02X}",
    Kind.SE_VX_VY: "SE V{x:X}, V{y:X}",
    Kind.LD_VX_BYTE: "LD V{x:X}, 0x{kk:02X}",
    Kind.ADD_VX_BYTE: "ADD V{x:X}, 0x{kk:02X}",
    Kind.LD_VX_VY: "LD V{x:X}, V{y:X}",
    Kind.OR_VX_VY: "OR V{x:X}, V{y:X}",
    Kind.AND_VX_VY: "AND V{x:X}, V{y:X}",
    Kind.XOR_VX_VY: "XOR V{x:X}, V{y:X}",
    Kind.ADD_VX_VY: "ADD V{x:X}, V{y:X}",
    Kind.SUB_VX_VY: "SUB V{x:X}, V{y:X}",
    Kind.SHR_VX_VY: "SHR V{x:X}",
    Kind.SUBN_VX_VY: "SUBN V{x:X}, V{y:X}",
    Kind.SHL_VX_VY: "SHL V{x:X}",
    Kind.SNE_VX_VY: "SNE V{x:X}, V{y:X}",
    Kind.LD_I: "LD I, 0x{nnn:03X}",
    Kind.JP_V0: "JP V0, 0x{nnn:03X}",
    Kind.RND_VX_BYTE: "RND V{x:X}, 0x{kk:02X}",
    Kind.DRW_VX_VY: "DRW V{x:X}, V{y:X}, {n}",
    Kind.LD_VX_DT: "LD V{x:X}, DT",
    Kind.LD_DT_VX: "LD DT, V{x:X}",
    Kind.LD_ST_VX: "LD ST, V{x:X}",
    Kind.ADD_I_VX: "ADD I, V{x:X}",
}


def format_instruction(instruction: DecodedInstruction) -> str:
    """Format decoded instruction as assembly text."""
    template = _FORMATS.get(instruction.kind, instruction.kind.value)
    return template.format(
        n=instruction.n, nnn=instruction.nnn, x=instruction.x, y=instruction.y, kk=instruction.kk
    )


def disassemble(memory, start: int, count: int) -> list[tuple[int, int, str]]:
    """Decode ``count`` consecutive words starting at ``start``.

    Words that do not decode are rendered as ``DW 0xNNNN``; a trailing odd
    byte at the end of memory is ignored.
    """
    listing = []
    size = len(memory)
    for address in range(start, start + 2 * count, 2):
        if address + 1 >= size:
            break
        opcode = (int(memory[address]) << 8) | int(memory[address + 1])
        try:
            text = decode(opcode).mnemonic()
        except DecodeError:
            text = f"DW 0x{opcode:04X}"
        listing.append((address, opcode, text))
    return listing
