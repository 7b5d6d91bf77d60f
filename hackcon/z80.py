"""Z80 instruction lengths, timings and flag effects."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

CYCLES_DJNZ = 64
CYCLES_COND_JR = 65
CYCLES_COND_RET = 66
CYCLES_COND_CALL = 67
CYCLES_BLOCK_TRANSFER = 68

_SPECIAL_CYCLES = {
    CYCLES_DJNZ: "13/8 cycles",
    CYCLES_COND_JR: "12/7 cycles",
    CYCLES_COND_RET: "11/5 cycles",
    CYCLES_COND_CALL: "17/10 cycles",
    CYCLES_BLOCK_TRANSFER: "21/16 cycles",
}

_FLAGS_UNCHANGED = 0x0000
_FLAGS_ALL = 0xFFFF
_FLAGS_INC_DEC = 0xFFFC
_FLAGS_ADD16 = 0x0FCB
_FLAGS_IN = 0xFEF8
_BIT_FLAGS_SHIFT = 0xFEFB
_BIT_FLAGS_TEST = 0xFDF8

# Flag effects of ADD, ADC, SUB, SBC, AND, XOR, OR, CP.
_ALU_FLAGS = (0xFFFF, 0xFFFF, 0xFFFF, 0xFFFF, 0xFDFA, 0xFEFA, 0xFEFA, 0xFFFF)

_STATES = "-10*"


def _load_alu_cycles(opcode: int) -> int:
    """Cycles of the 0x40-0xbf block: 8-bit loads and ALU operations."""
    if 0x70 <= opcode <= 0x77:
        return 4 if opcode == 0x76 else 7
    return 7 if opcode & 7 == 6 else 4


def _build_cycles_main() -> tuple[int, ...]:
    # 64..68 mark instructions whose timing depends on the outcome.
    low = bytes.fromhex(
        "040a070604040704" "040b070604040704"
        "400a070604040704" "0c0b070604040704"
        "410a100604040704" "410b100604040704"
        "410a0d060b0b0a04" "410b0d0604040704"
    )
    high = bytes.fromhex(
        "420a0a0a430b070b" "420a0a0043110 70b".replace(" ", "")
        + "420a0a0b430b070b" "42040a0b4300070b"
        "420a0a13430b070b" "42040a044300070b"
        "420a0a04430b070b" "42060a044300070b"
    )
    middle = tuple(_load_alu_cycles(op) for op in range(0x40, 0xC0))
    return tuple(low) + middle + tuple(high)


def _build_cycles_ed() -> tuple[int, ...]:
    table = bytes.fromhex(
        "0c0c0f14080e0809" "0c080f08080e0809"
        "0c080f08080e0809" "0c080f08080e0809"
        "0c080f08080e0812" "0c080f08080e0812"
        "0c080f08080e0808" "0c080f08080e0808"
    )
    table += bytes([8]) * 32
    table += bytes([16] * 4 + [8] * 4) * 2
    table += bytes([CYCLES_BLOCK_TRANSFER] * 4 + [8] * 4) * 2
    return tuple(table)


def _build_cycles_ddfd() -> tuple[int, ...]:
    table = [0] * 256
    for op in range(0x40, 0xC0):
        if 0x70 <= op <= 0x77:
            table[op] = 0 if op == 0x76 else 19
        elif op & 7 in (4, 5):
            table[op] = 8
        elif op & 7 == 6:
            table[op] = 19
    extras = {
        0x09: 15, 0x19: 15, 0x29: 15, 0x39: 15,
        0x21: 14, 0x22: 20, 0x23: 10, 0x24: 8, 0x25: 8, 0x26: 11,
        0x2A: 20, 0x2B: 10, 0x2C: 8, 0x2D: 8, 0x2E: 11,
        0x34: 23, 0x35: 23, 0x36: 19,
        0xE1: 14, 0xE3: 23, 0xE5: 15, 0xE9: 8, 0xF9: 10,
    }
    for op, cycles in extras.items():
        table[op] = cycles
    return tuple(table)


def _build_flags_main() -> tuple[int, ...]:
    # Two bits per flag, SZ5H3PNC from MSB to LSB: unchanged, set, reset, affected.
    table = [_FLAGS_UNCHANGED] * 256
    for op in range(0x40):
        if op & 7 in (4, 5):
            table[op] = _FLAGS_INC_DEC
        elif op & 0x0F == 9:
            table[op] = _FLAGS_ADD16
    for op in range(0x80, 0xC0):
        table[op] = _ALU_FLAGS[(op >> 3) & 7]
    for op in range(0xC6, 0x100, 8):
        table[op] = _ALU_FLAGS[(op >> 3) & 7]
    extras = {
        0x07: 0x0ECB, 0x08: _FLAGS_ALL, 0x0F: 0x0ECB, 0x17: 0x0ECB,
        0x1F: 0x0ECB, 0x27: 0xFFF3, 0x2F: 0x0DC4, 0x37: 0x0EC9,
        0x3F: _FLAGS_ADD16, 0xDB: _FLAGS_IN, 0xF1: _FLAGS_ALL,
    }
    for op, flags in extras.items():
        table[op] = flags
    return tuple(table)


def _build_flags_ed() -> tuple[int, ...]:
    table = []
    for op in range(0x40, 0x80):
        column = op & 7
        if column == 0:
            table.append(_FLAGS_IN)
        elif column == 2:
            table.append(_FLAGS_ALL)
        elif column == 4:
            table.append(0xFFF7)
        elif op in (0x57, 0x5F, 0x67, 0x6F):
            table.append(_FLAGS_IN)
        else:
            table.append(_FLAGS_UNCHANGED)
    table.extend([_FLAGS_UNCHANGED] * 32)
    block = (0x0EF8, 0xFFF4, _FLAGS_ALL, _FLAGS_ALL, 0, 0, 0, 0)
    table.extend(block[op & 7] for op in range(0xA0, 0xC0))
    return tuple(table)


def _build_lengths_main() -> tuple[int, ...]:
    # Opcodes 0x00-0x3f followed by 0xc0-0xff, indexed by opcode & 0x7f.
    digits = (
        "13111121" "11111121"
        "23111121" "21111121"
        "23311121" "21311121"
        "23311121" "21311121"
        "11333121" "11303321"
        "11323121" "11323021"
        "11313121" "11313021"
        "11313121" "11313021"
    )
    return tuple(int(d) for d in digits)


_CYCLES_MAIN = _build_cycles_main()
_CYCLES_ED = _build_cycles_ed()
_CYCLES_DDFD = _build_cycles_ddfd()
_FLAGS_MAIN = _build_flags_main()
_FLAGS_ED = _build_flags_ed()
_LENGTHS_MAIN = _build_lengths_main()


class _Peekable(Protocol):
    def peek(self, address: int) -> int: ...


@dataclass(frozen=True)
class InstructionInfo:
    """Length in bytes, cycle count (or a 64..68 marker) and flag effects.

    ``flags`` holds one character per flag in SZYHXPNC order: ``-`` unchanged,
    ``1`` set, ``0`` reset, ``*`` depends on the operation.
    """

    length: int
    cycles: int
    flags: str


def _main_length(opcode: int) -> int:
    return _LENGTHS_MAIN[opcode & 0x7F] if opcode < 0x40 or opcode >= 0xC0 else 1


def _bit_flags(opcode: int) -> int:
    if opcode < 0x40:
        return _BIT_FLAGS_SHIFT
    if opcode < 0x80:
        return _BIT_FLAGS_TEST
    return _FLAGS_UNCHANGED


def _decode_flags(bits: int) -> str:
    return "".join(_STATES[(bits >> shift) & 3] for shift in range(14, -1, -2))


def instruction_info(memory: _Peekable, address: int) -> InstructionInfo:
    """Describe the instruction starting at ``address``."""

    def byte(offset: int) -> int:
        return memory.peek(address + offset) & 0xFF

    op0 = byte(0)

    if op0 == 0xCB:
        op1 = byte(1)
        flags = _bit_flags(op1)
        length = 2
        masked = op1 & 0xC7
        if masked in (0x06, 0x86, 0xC6):
            cycles = 15
        elif masked == 0x46:
            cycles = 12
        else:
            cycles = 8
    elif op0 == 0xED:
        op1 = (byte(1) - 0x40) & 0xFF
        if op1 < 0x80:
            flags = _FLAGS_ED[op1]
            cycles = _CYCLES_ED[op1]
        else:
            flags = _FLAGS_UNCHANGED
            cycles = 8
        length = (4 if (op1 & 7) == 3 else 2) if op1 < 0x40 else 2
    elif op0 in (0xDD, 0xFD):
        op1 = byte(1)
        if op1 == 0xCB:
            op3 = byte(3)
            flags = _bit_flags(op3)
            length = 4
            cycles = 20 if (op3 & 0xC0) == 0x40 else 23
        elif op1 in (0xED, 0xDD, 0xFD) or _CYCLES_DDFD[op1] == 0:
            # The prefix executes as a NOP.
            flags = _FLAGS_UNCHANGED
            length = 1
            cycles = 4
        else:
            flags = _FLAGS_MAIN[op1]
            length = _LENGTHS_MAIN[op1 & 0x7F] + 1 if op1 < 0x40 or op1 >= 0xC0 else 2
            cycles = _CYCLES_DDFD[op1]
    else:
        flags = _FLAGS_MAIN[op0]
        length = _main_length(op0)
        cycles = _CYCLES_MAIN[op0]

    return InstructionInfo(length, cycles, _decode_flags(flags))


def instruction_length(memory: _Peekable, address: int) -> int:
    return instruction_info(memory, address).length


def cycles_text(cycles: int) -> str:
    """Describe a cycle count, expanding the conditional markers."""
    return _SPECIAL_CYCLES.get(cycles, f"{cycles} cycles")


def tooltip(memory: _Peekable, address: int) -> str:
    """Cycle count and flag effects of the instruction at ``address``."""
    info = instruction_info(memory, address)
    s, z, y, h, x, pv, n, c = info.flags
    return (
        f"{cycles_text(info.cycles)}\n"
        f"S={s} Z={z} Y={y} H={h} X={x} P/V={pv} N={n} C={c}"
    )