class Chip8Error(Exception):
    """Base class for everything the emulator core raises."""


class UnknownOpcode(Chip8Error):
    def __init__(self, opcode, address=None):
        self.opcode = opcode
        self.address = address
        if address is None:
            msg = "Unknown opcode: %04X" % opcode
        else:
            msg = "Unknown opcode: %04X at 0x%03X" % (opcode, address)
        super().__init__(msg)


class InvalidImageSize(Chip8Error):
    def __init__(self, size, limit):
        self.size = size
        self.limit = limit
        super().__init__("ROM is %d bytes, at most %d fit in memory" % (size, limit))


class StackOverflow(Chip8Error):
    def __init__(self, address):
        self.address = address
        super().__init__("Stack overflow on CALL at 0x%03X" % address)


class StackUnderflow(Chip8Error):
    def __init__(self, address):
        self.address = address
        super().__init__("Stack underflow on RET at 0x%03X" % address)
