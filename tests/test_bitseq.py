import pytest

from bitseq import BitSequence


def test_new_sequence_is_empty():
    seq = BitSequence()
    assert len(seq) == 0
    assert str(seq) == ""

def test_add_keeps_order():
    seq = BitSequence()
    for bit in (1, 0, 0, 1, True, False):
        seq.add(bit)
    assert len(seq) == 6
    assert str(seq) == "100110"
    assert list(seq) == [1, 0, 0, 1, 1, 0]

def test_append_puts_other_after_self():
    a = BitSequence.from_string("110")
    b = BitSequence.from_string("01")
    a.append(b)
    assert str(a) == "11001"
    assert str(b) == "01"

def test_append_is_associative():
    a, b, c = (BitSequence.from_string(s) for s in ("101", "0", "1100"))

    left = a.copy()
    left.append(b)
    left.append(c)

    bc = b.copy()
    bc.append(c)
    right = a.copy()
    right.append(bc)

    assert left == right
    assert str(left) == "10101100"

def test_append_self():
    a = BitSequence.from_string("10")
    a.append(a)
    assert str(a) == "1010"

def test_copy_is_independent():
    a = BitSequence.from_string("1")
    b = a.copy()
    b.add(0)
    assert str(a) == "1"
    assert str(b) == "10"

def test_indexing_and_startswith():
    seq = BitSequence.from_string("0110")
    assert seq[0] == 0
    assert seq[-1] == 0
    assert seq[1] == 1
    assert seq.startswith(BitSequence.from_string("01"))
    assert seq.startswith(BitSequence())
    assert not seq.startswith(BitSequence.from_string("1"))
    assert not seq.startswith(BitSequence.from_string("01101"))

def test_repr_shows_bits():
    assert repr(BitSequence([1, 0, 1])) == "BitSequence('101')"

def test_from_string_rejects_other_characters():
    with pytest.raises(ValueError):
        BitSequence.from_string("0120")

def test_equality():
    assert BitSequence([1, 0]) == BitSequence.from_string("10")
    assert BitSequence([1, 0]) != BitSequence([1, 0, 0])
    assert BitSequence() != "0"
