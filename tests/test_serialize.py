import io
import zipfile

from alumni_normalizer.serialize import rows_to_csv, sha256_hex, zip_files


def test_rows_to_csv_header_follows_first_record():
    rows = [{"b": "1", "a": "2"}, {"a": "4", "b": "3"}]
    assert rows_to_csv(rows) == "b,a\n1,2\n3,4\n"


def test_rows_to_csv_quotes_when_needed():
    assert rows_to_csv([{"name": "Cruz, Ana"}]) == 'name\n"Cruz, Ana"\n'


def test_rows_to_csv_empty():
    assert rows_to_csv([]) == ""
    assert rows_to_csv([], fieldnames=["campus_id", "campus_name"]) == "campus_id,campus_name\n"


def test_zip_files_keeps_entry_order_and_content():
    data = zip_files({"b.csv": "x\n1\n", "a.csv": "y\n2\n"})
    with zipfile.ZipFile(io.BytesIO(data)) as zf:
        assert zf.namelist() == ["b.csv", "a.csv"]
        assert zf.read("a.csv") == b"y\n2\n"
        assert zf.testzip() is None


def test_zip_files_is_deterministic():
    files = {"alumni.csv": "alumni_id\n1\n"}
    assert sha256_hex(zip_files(files)) == sha256_hex(zip_files(files))
