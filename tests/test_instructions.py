from __future__ import annotations

import pytest

from chip8emu import Op, UnknownOpcode, decode


@pytest.mark.parametrize(
    "opcode, op",
    [
        (0x00E0, Op.CLS),
        (0x00EE, Op.RET),
        (0x01E0, Op.CLS),
        (0x0FEE, Op.RET),
        (0x1234, Op.JP),
        (0x2ABC, Op.CALL),
        (0x3A12, Op.SE_VX_NN),
        (0x4A12, Op.SNE_VX_NN),
        (0x5AB0, Op.SE_VX_VY),
        (0x5AB3, Op.SE_VX_VY),
        (0x6A12, Op.LD_VX_NN),
        (0x7A12, Op.ADD_VX_NN),
        (0x8AB0, Op.LD_VX_VY),
        (0x8AB1, Op.OR),
        (0x8AB2, Op.AND),
        (0x8AB3, Op.XOR),
        (0x8AB4, Op.ADD),
        (0x8AB5, Op.SUB),
        (0x8AB6, Op.SHR),
        (0x8AB7, Op.SUBN),
        (0x8ABE, Op.SHL),
        (0x9AB0, Op.SNE_VX_VY),
        (0x9AB1, Op.SNE_VX_VY),
        (0xA123, Op.LD_I),
        (0xB123, Op.JP_V0),
        (0xCA0F, Op.RND),
        (0xDAB5, Op.DRW),
        (0xEA9E, Op.SKP),
        (0xEAA1, Op.SKNP),
        (0xFA07, Op.LD_VX_DT),
        (0xFA0A, Op.LD_VX_K),
        (0xFA15, Op.LD_DT_VX),
        (0xFA18, Op.LD_ST_VX),
        (0xFA1E, Op.ADD_I_VX),
        (0xFA29, Op.LD_F_VX),
        (0xFA33, Op.LD_B_VX),
        (0xFA55, Op.STORE),
        (0xFA65, Op.LOAD),
    ],
)
def test_decode_families(opcode: int, op: Op) -> None:
    assert decode(opcode).op is op


def test_decode_extracts_fields() -> None:
    ins = decode(0xD12F)

    assert (ins.x, ins.y, ins.n, ins.nn, ins.nnn) == (0x1, 0x2, 0xF, 0x2F, 0x12F)


@pytest.mark.parametrize(
    "opcode",
    [0x0000, 0x0123, 0x00E1, 0x8008, 0x800F, 0x8FFD, 0xE000, 0xE19F, 0xF000, 0xF066, 0xFFFF],
)
def test_decode_rejects_unknown_opcodes(opcode: int) -> None:
    with pytest.raises(UnknownOpcode) as excinfo:
        decode(opcode, 0x204)

    assert excinfo.value.opcode == opcode
    assert excinfo.value.address == 0x204
    assert "%04X" % opcode in str(excinfo.value)


def test_every_op_has_a_decode_row() -> None:
    from chip8emu.instructions import OPCODE_TABLE

    assert {op for _, _, op in OPCODE_TABLE} == set(Op)


@pytest.mark.parametrize(
    "opcode, text",
    [
        (0x00E0, "CLS"),
        (0x1ABC, "JP 0xABC"),
        (0x6A0F, "LD VA, 0x0F"),
        (0x8124, "ADD V1, V2"),
        (0xD125, "DRW V1, V2, 5"),
        (0xF355, "LD [I], V3"),
        (0xB200, "JP V0, 0x200"),
    ],
)
def test_mnemonics(opcode: int, text: str) -> None:
    assert str(decode(opcode)) == text
