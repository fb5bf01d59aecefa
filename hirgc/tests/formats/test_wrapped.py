import io
import pytest

from hirgc.errors import MalformedMetadata
from hirgc.formats.wrapped import encode
from hirgc.models.compressed_record import LinePlan

def test_encode_line_plan():
    plan = LinePlan([(4, 2), (3, 1)])
    txt = encode(">seq", "ACGTacgtNNN", plan)
    assert txt == ">seq\n\nACGT\nacgt\nNNN\n"

def test_encode_accepts_bytes():
    txt = encode(">seq", bytearray(b"ACGT"), LinePlan([(2, 2)]))
    assert txt.splitlines()[2:] == ["AC", "GT"]

def test_encode_empty_plan():
    assert encode(">seq", "", LinePlan()) == ">seq\n\n"

@pytest.mark.parametrize("seq", ["ACGTACG", "ACGTACGTA"])
def test_plan_must_cover_sequence(seq):
    with pytest.raises(MalformedMetadata):
        encode(">seq", seq, LinePlan([(4, 2)]))

def test_encode_to_filelike_and_path(tmp_path):
    plan = LinePlan([(2, 2)])
    buf = io.StringIO()
    encode(">s", "ACGT", plan, sink=buf)
    assert buf.getvalue() == ">s\n\nAC\nGT\n"

    p = tmp_path / "out.txt"
    encode(">s", "ACGT", plan, sink=str(p))
    assert p.read_text() == ">s\n\nAC\nGT\n"
    # no temporary files left next to the output
    assert [x.name for x in tmp_path.iterdir()] == ["out.txt"]

def test_failed_encode_leaves_no_file(tmp_path):
    p = tmp_path / "out.txt"
    with pytest.raises(MalformedMetadata):
        encode(">s", "ACG", LinePlan([(2, 2)]), sink=p)
    assert not p.exists()

def test_bad_sink():
    with pytest.raises(TypeError):
        encode(">s", "AC", LinePlan([(2, 1)]), sink=42)  # type: ignore[arg-type]
