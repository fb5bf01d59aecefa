from pathlib import Path
import pytest

# tests/data holds one worked example decoded with the default k-mer floor:
#   ref.fa        two-record reference with lowercase, N and blank lines
#   target.hirgc  compressed target using every overlay kind
#   expected.txt  the reconstructed_sequence.txt it must produce
@pytest.fixture(scope="session")
def test_data_dir() -> Path:
    return Path(__file__).resolve().parent / "data"
