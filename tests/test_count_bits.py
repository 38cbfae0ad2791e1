import pytest

import count_bits
import huffman as huff


def test_reports_bit_count(tmp_path, capsys):
    path = tmp_path / "input.txt"
    path.write_text("aaaaabbcd", encoding="utf-8")

    assert count_bits.main([str(path)]) == 0
    # a:5 x 1 bit, b:2 x 2 bits, c and d 3 bits each
    assert capsys.readouterr().out.strip() == "15 bits"

@pytest.mark.parametrize("table", ["auto", "hash", "dense"])
def test_table_form_does_not_change_count(tmp_path, capsys, table):
    path = tmp_path / "input.txt"
    path.write_text("the same text every time\n", encoding="utf-8")

    assert count_bits.main([str(path), "--table", table]) == 0
    out = capsys.readouterr().out.strip()
    assert out.endswith(" bits")
    text = "the same text every time\n"
    codes = huff.generate_huffman_codes(huff.build_huffman_tree(huff.freq_table(text)))
    assert int(out.split()[0]) == len(huff.huffman_encode(text, codes))

def test_single_symbol_file(tmp_path, capsys):
    path = tmp_path / "x.txt"
    path.write_text("xxxx", encoding="utf-8")

    assert count_bits.main([str(path)]) == 0
    assert capsys.readouterr().out.strip() == "0 bits"

def test_bytes_mode_and_show_bits(tmp_path, capsys):
    path = tmp_path / "data.bin"
    path.write_bytes(b"\x00\x01")

    assert count_bits.main([str(path), "--bytes", "--show-bits"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] in ("01", "10")
    assert lines[-1] == "2 bits"

def test_show_codes_lists_every_symbol(tmp_path, capsys):
    path = tmp_path / "input.txt"
    path.write_text("abracadabra", encoding="utf-8")

    assert count_bits.main([str(path), "--show-codes"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 5 + 1
    assert lines[0].split()[0] == "'a'"

def test_empty_file_fails(tmp_path, capsys):
    path = tmp_path / "empty.txt"
    path.write_text("", encoding="utf-8")

    assert count_bits.main([str(path)]) == 1
    assert "Failed to build Huffman tree" in capsys.readouterr().err

def test_missing_file_fails(tmp_path, capsys):
    assert count_bits.main([str(tmp_path / "nope.txt")]) == 1
    assert "Failed to read file" in capsys.readouterr().err

def test_crlf_is_counted_as_two_symbols(tmp_path, capsys):
    path = tmp_path / "crlf.txt"
    path.write_bytes(b"a\r\nb")

    assert count_bits.main([str(path)]) == 0
    # a, \r, \n, b: four equal weights, 2 bits each
    assert capsys.readouterr().out.strip() == "8 bits"
