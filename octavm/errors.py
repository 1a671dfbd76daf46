"""Exceptions raised by the CHIP-8 virtual machine."""


class OctavmError(Exception):
    """Base class for errors raised while executing a CHIP-8 program."""


class UnknownOpcodeError(OctavmError):
    """No handler is defined for the decoded instruction."""

    def __init__(self, opcode: int):
        self.opcode = opcode
        super().__init__(f"Unknown opcode: 0x{opcode:04X}")


class AddressOutOfRangeError(OctavmError):
    """Memory access outside the address space."""

    def __init__(self, address: int, size: int):
        self.address = address
        self.size = size
        super().__init__(
            f"Address 0x{address:04X} out of range for {size}-byte memory"
        )


class StackOverflowError(OctavmError):
    """CALL with every stack slot in use."""

    def __init__(self, capacity: int):
        self.capacity = capacity
        super().__init__(f"Call stack overflow (capacity {capacity})")


class StackUnderflowError(OctavmError):
    """RET with an empty call stack."""

    def __init__(self):
        super().__init__("Call stack underflow: return without call")
