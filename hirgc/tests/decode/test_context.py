import pytest

from hirgc import DecodeContext, ReferenceSequence, decompress, load_reference
from hirgc.errors import ReferenceOutOfBounds
from hirgc.formats import wrapped

_EXPECTED = "gtANNNNCGYTAcnnggTTCCARAGGTTGCAGCTGCATGCATCCGGAATTCCAGGCTAGTTAACCGGTTGATCG"

def test_decompress_end_to_end(test_data_dir):
    ref = load_reference(test_data_dir / "ref.fa")
    res = decompress(ref, str(test_data_dir / "target.hirgc"))
    assert res.header == ">chrTest demo"
    assert res.sequence == _EXPECTED
    txt = wrapped.encode(res.header, res.sequence, res.line_plan)
    assert txt == (test_data_dir / "expected.txt").read_text()

def test_context_steps(test_data_dir):
    ref = load_reference(test_data_dir / "ref.fa")
    ctx = DecodeContext.from_source(ref, str(test_data_dir / "target.hirgc"))
    acgt = ctx.reconstruct()
    # 23 + 2 substituted + 21 + 20
    assert len(acgt) == 66
    assert bytes(acgt[:25]) == b"GTACGTACGGTTCCAAGGTTGCAGC"
    out = ctx.apply_overlays()
    assert out.decode() == _EXPECTED
    with pytest.raises(RuntimeError):
        ctx.apply_overlays()

def test_overlays_need_reconstruction(test_data_dir):
    ctx = DecodeContext.from_source(ReferenceSequence(b""), str(test_data_dir / "target.hirgc"))
    with pytest.raises(RuntimeError):
        ctx.apply_overlays()

def test_reference_shared_between_decodes(test_data_dir):
    ref = load_reference(test_data_dir / "ref.fa")
    a = decompress(ref, str(test_data_dir / "target.hirgc"))
    b = decompress(ref, str(test_data_dir / "target.hirgc"))
    assert a.sequence == b.sequence

def test_wrong_reference(test_data_dir):
    short = ReferenceSequence.from_text("ACGT" * 10)
    with pytest.raises(ReferenceOutOfBounds):
        decompress(short, str(test_data_dir / "target.hirgc"))

def test_small_kmer_in_memory():
    ref = ReferenceSequence.from_text("AAAACCCCGGGGTTTT")
    target = "\n".join([">t", "", "2 5 1", "0", "0", "0", "0 0", "2", "1 0"]) + "\n"
    res = decompress(ref, target, kmer_length=2)
    assert res.sequence == "AAGAC"
