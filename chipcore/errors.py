"""CHIP-8 emulator errors."""


class Chip8Error(Exception):
    """Base class for all fatal emulator errors."""


class DecodeError(Chip8Error):
    """Raised when a 16-bit word matches no known instruction pattern."""

    def __init__(self, opcode: int):
        self.opcode = opcode
        if 0 <= opcode <= 0xFFFF:
            message = f"Unknown opcode: 0x{opcode:04X}"
        else:
            message = f"Opcode out of 16-bit range: {opcode}"
        super().__init__(message)


class ExecutionError(Chip8Error):
    """Raised when a decoded instruction kind has no handler."""

    def __init__(self, kind):
        self.kind = kind
        super().__init__(f"Unknown instruction: {getattr(kind, 'value', kind)}")


class StackError(Chip8Error):
    """Stack pointer left the 16-slot stack."""

    def __init__(self, pointer: int, message: str):
        self.pointer = pointer
        super().__init__(message)


class StackOverflowError(StackError):
    def __init__(self, pointer: int):
        super().__init__(pointer, f"Stack overflow: CALL with stack pointer at {pointer}")


class StackUnderflowError(StackError):
    def __init__(self, pointer: int):
        super().__init__(pointer, f"Stack underflow: RET with stack pointer at {pointer}")


class MemoryAccessError(Chip8Error):
    """Raised on reads or writes outside the 4 KiB address space."""

    def __init__(self, address: int, message: str = None):
        self.address = address
        super().__init__(message or f"Memory access out of range: 0x{address:X}")
