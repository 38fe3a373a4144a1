import pytest

from expander.core.register import ReadOnlyRegister, RegisterFile, SimpleRegister


def test_simple_register_read_write_and_reset():
    reg = SimpleRegister(offset=0x00, reset_value=0xFF)
    assert reg.read() == 0xFF

    reg.write(0xAB)
    assert reg.read() == 0xAB

    reg.reset()
    assert reg.read() == 0xFF


def test_simple_register_masks_to_byte():
    reg = SimpleRegister(offset=0x00)
    reg.write(0x1FF)
    assert reg.read() == 0xFF


def test_read_only_register_ignores_writes():
    reg = ReadOnlyRegister(offset=0x07, reset_value=0x00)
    reg.write(0x12)
    assert reg.read() == 0x00


def test_register_file_add_duplicate_and_defaults():
    rf = RegisterFile()
    reg = SimpleRegister(offset=0x00)
    rf.add(reg)

    with pytest.raises(ValueError):
        rf.add(SimpleRegister(offset=0x00))

    assert rf.read(0x33, default_reset=0x1AA) == 0xAA
    assert rf.get_register(0x00) is reg
    assert rf.get_register(0x33) is None
    assert 0x00 in rf
    assert 0x33 not in rf


def test_register_file_write_ignores_undefined_and_resets():
    rf = RegisterFile()
    rf.add(SimpleRegister(offset=0x0A, reset_value=0x00))

    rf.write(0x0A, 0x5A)
    rf.write(0x40, 0x12)
    assert rf.read(0x0A) == 0x5A
    assert rf.read(0x40) == 0x00

    rf.reset()
    assert rf.read(0x0A) == 0x00


def test_register_file_dump_and_repr():
    rf = RegisterFile()
    rf.add(SimpleRegister(offset=0x06, name="GPPU"))
    rf.add(SimpleRegister(offset=0x00, reset_value=0xFF, name="IODIR"))

    assert rf.dump() == {"IODIR": 0xFF, "GPPU": 0x00}
    assert [reg.offset for reg in rf] == [0x00, 0x06]
    assert repr(rf.get_register(0x00)) == "SimpleRegister(IODIR@0x00=0xFF)"


def test_register_default_name():
    assert SimpleRegister(offset=0x1F).name == "REG_1F"
