import pytest

from bencast.decoder import BencodeDecoder, decode, decode_all, raw_value_span
from bencast.errors import (InvalidInteger, KeyMustBeString, MalformedLength, TrailingData,
                            TruncatedString, UnexpectedEnd, UnknownToken)
from bencast.structure import NOTHING, BencodeDict, BencodeInt, BencodeList, BencodeString


def test_int():
    obj = decode(b"i42e")
    assert isinstance(obj, BencodeInt)
    assert obj.value == 42


def test_negative_int():
    assert decode(b"i-42e") == BencodeInt(-42)


def test_int_64bit_bounds():
    assert decode(b"i9223372036854775807e").value == 2**63 - 1
    assert decode(b"i-9223372036854775808e").value == -2**63
    with pytest.raises(InvalidInteger):
        decode(b"i9223372036854775808e")


def test_non_canonical_int_is_accepted():
    assert decode(b"i007e").value == 7
    assert decode(b"i-0e").value == 0


@pytest.mark.parametrize("raw", [b"ie", b"i-e", b"i1x2e", b"i--1e", b"i+1e"])
def test_invalid_int(raw):
    with pytest.raises(InvalidInteger):
        decode(raw)


def test_unterminated_int():
    with pytest.raises(UnexpectedEnd):
        decode(b"i42")


def test_string():
    obj = decode(b"4:spam")
    assert isinstance(obj, BencodeString)
    assert obj.value == b"spam"


def test_empty_string():
    assert decode(b"0:") == BencodeString(b"")


def test_binary_string():
    payload = b"\x00\xff\x10e:"
    assert decode(b"5:" + payload).value == payload


def test_truncated_string():
    decoder = BencodeDecoder(b"5:ab")
    with pytest.raises(TruncatedString):
        decoder.decode()
    # nothing consumed past the colon
    assert decoder.cursor.pos == 2


def test_malformed_length():
    with pytest.raises(MalformedLength):
        decode(b"4x:spam")


def test_string_length_without_colon():
    with pytest.raises(UnexpectedEnd):
        decode(b"12")


def test_list():
    obj = decode(b"l4:spami3ee")
    assert isinstance(obj, BencodeList)
    assert obj.value == [BencodeString(b"spam"), BencodeInt(3)]


def test_unterminated_list():
    with pytest.raises(UnexpectedEnd):
        decode(b"l4:spam")


def test_dict():
    obj = decode(b"d3:cow3:moo4:spaml1:a1:bee")
    assert isinstance(obj, BencodeDict)
    assert obj.value[b"cow"].value == b"moo"
    assert obj.to_python() == {b"cow": b"moo", b"spam": [b"a", b"b"]}


def test_dict_keys_need_not_be_sorted():
    obj = decode(b"d1:bi2e1:ai1ee")
    assert obj.to_python() == {b"b": 2, b"a": 1}


def test_duplicate_key_last_write_wins():
    assert decode(b"d1:ai1e1:ai2ee").to_python() == {b"a": 2}


def test_dict_key_must_be_string():
    with pytest.raises(KeyMustBeString):
        decode(b"di1ei2ee")


def test_unterminated_dict():
    with pytest.raises(UnexpectedEnd):
        decode(b"d3:key5:value")


def test_unknown_token():
    with pytest.raises(UnknownToken) as exc:
        decode(b"x")
    assert exc.value.token == ord("x")
    assert exc.value.pos == 0


def test_nul_byte_is_unknown_token():
    with pytest.raises(UnknownToken):
        decode(b"\x00")


def test_decode_past_end_yields_nothing():
    assert BencodeDecoder(b"").decode() is NOTHING


def test_trailing_data():
    with pytest.raises(TrailingData):
        decode(b"i1ei2e")


def test_decode_all():
    assert decode_all(b"i1e4:spamle") == [BencodeInt(1), BencodeString(b"spam"), BencodeList([])]


def test_nested():
    obj = decode(b"d4:listld1:xi1eee3:numi-1ee")
    assert obj.to_python() == {b"list": [{b"x": 1}], b"num": -1}


def test_raw_value_span():
    raw = b"d8:announce3:url4:infod4:name1:a6:lengthi3ee5:otheri0ee"
    assert raw_value_span(raw, b"info") == b"d4:name1:a6:lengthi3ee"
    with pytest.raises(KeyError):
        raw_value_span(raw, b"missing")
